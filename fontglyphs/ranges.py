"""
Codepoint range computation.

Glyph packets are requested per aligned block of 256 codepoints. A font's
blocks run from the block holding its lowest codepoint up to the block
holding its highest one, clamped to the Basic Multilingual Plane: the
rasterizer cannot address codepoints above U+FFFF, so those are dropped.
"""

from typing import Iterable, List, Tuple

RANGE_SIZE = 256
MAX_CODEPOINT = 65535

Range = Tuple[int, int]


def compute_ranges(codepoints: Iterable[int]) -> List[Range]:
    """
    Split a font's codepoints into inclusive, 256-aligned ranges.

    Args:
        codepoints: Codepoints the font defines glyphs for.

    Returns:
        list: ``(start, end)`` pairs in increasing order, contiguous and
        non-overlapping. Empty when ``codepoints`` is empty.
    """
    codepoints = list(codepoints)
    if not codepoints:
        return []

    start = max(0, min(codepoints) // RANGE_SIZE * RANGE_SIZE)
    limited_max = min(max(codepoints), MAX_CODEPOINT)

    ranges = []
    while start <= limited_max:
        ranges.append((start, min(start + RANGE_SIZE - 1, MAX_CODEPOINT)))
        start += RANGE_SIZE
    return ranges


def range_filename(start: int, end: int) -> str:
    """File name of the packet for ``start``-``end``."""
    return f"{start}-{end}.pbf"
