"""
Render a codepoint range of a font into a glyph packet.

Each glyph the font maps in the range is rendered with FreeType at a fixed
size, padded and turned into a signed distance field, then stored with its
metrics in a ``glyphs`` protobuf message. The output follows the layout map
renderers expect from a glyph server: 24 px glyphs, a 3 px buffer, a distance
radius of 8 px and a 0.25 cutoff.
"""

import logging
from io import BytesIO

import freetype
import numpy as np

from fontglyphs.protocol import Glyphs
from fontglyphs.ranges import MAX_CODEPOINT

# Constants
# ----------------------------------------------------------------------------

FONT_SIZE = 24
BUFFER = 3
RADIUS = 8
CUTOFF = 0.25

# Large enough to never win a minimum, small enough to stay finite when summed.
INF = 1e20

# Outlines only: embedded bitmap strikes come back in their own pixel mode.
LOAD_FLAGS = (
    freetype.FT_LOAD_NO_HINTING | freetype.FT_LOAD_NO_BITMAP | freetype.FT_LOAD_RENDER
)

logger = logging.getLogger(__name__)


# Distance field
# ----------------------------------------------------------------------------


def _squared_distance_transform(grid: np.ndarray) -> np.ndarray:
    """Exact squared Euclidean distance transform, one axis at a time."""
    height, width = grid.shape

    rows = np.arange(height)
    dy = (rows[:, None] - rows[None, :]) ** 2
    columns = (dy[:, :, None] + grid[None, :, :]).min(axis=1)

    cols = np.arange(width)
    dx = (cols[:, None] - cols[None, :]) ** 2
    return (dx[None, :, :] + columns[:, None, :]).min(axis=2)


def distance_field(coverage: np.ndarray) -> np.ndarray:
    """
    Convert an 8-bit coverage bitmap into a padded signed distance field.

    Args:
        coverage: ``(rows, width)`` array of FreeType gray levels.

    Returns:
        np.ndarray: ``(rows + 2 * BUFFER, width + 2 * BUFFER)`` uint8 array.
        Values above ``255 * (1 - CUTOFF)`` lie inside the glyph.
    """
    alpha = np.pad(coverage.astype(np.float64) / 255.0, BUFFER)

    outer = np.where(
        alpha >= 1.0, 0.0, np.where(alpha <= 0.0, INF, np.maximum(0.0, 0.5 - alpha) ** 2)
    )
    inner = np.where(
        alpha >= 1.0, INF, np.where(alpha <= 0.0, 0.0, np.maximum(0.0, alpha - 0.5) ** 2)
    )

    distance = np.sqrt(_squared_distance_transform(outer)) - np.sqrt(
        _squared_distance_transform(inner)
    )
    values = np.round(255 - 255 * (distance / RADIUS + CUTOFF))
    return np.clip(values, 0, 255).astype(np.uint8)


# Rendering
# ----------------------------------------------------------------------------


def _fontstack_name(face: freetype.Face) -> str:
    family = (face.family_name or b"").decode("utf-8", "replace")
    style = (face.style_name or b"").decode("utf-8", "replace")
    return f"{family} {style}" if style else family


def _coverage(bitmap) -> np.ndarray:
    if bitmap.pixel_mode != freetype.FT_PIXEL_MODE_GRAY:
        raise ValueError(f"Unsupported pixel mode {bitmap.pixel_mode}, expected 8-bit gray")
    buffer = np.array(bitmap.buffer, dtype=np.uint8)
    return buffer.reshape(bitmap.rows, bitmap.pitch)[:, : bitmap.width]


def _add_glyph(stack, face: freetype.Face, codepoint: int, ascender: float) -> None:
    slot = face.glyph
    bitmap = slot.bitmap

    glyph = stack.glyphs.add()
    glyph.id = codepoint
    glyph.width = bitmap.width
    glyph.height = bitmap.rows
    glyph.left = slot.bitmap_left
    glyph.top = int(round(slot.bitmap_top - ascender))
    glyph.advance = int(round(slot.metrics.horiAdvance / 64))

    if bitmap.width and bitmap.rows:
        glyph.bitmap = distance_field(_coverage(bitmap)).tobytes()


def render_range(font_data: bytes, start: int, end: int) -> bytes:
    """
    Render codepoints ``start``..``end`` (inclusive) of a font.

    Codepoints the font does not map are left out of the packet.

    Args:
        font_data: Raw TrueType/OpenType bytes.
        start: First codepoint of the range.
        end: Last codepoint of the range, at most 65535.

    Returns:
        bytes: Serialized ``glyphs`` message with a single fontstack.

    Raises:
        ValueError: The range is empty or reaches past 65535, or FreeType
            returned a glyph bitmap that is not 8-bit gray.
        freetype.FT_Exception: FreeType could not load the font or a glyph.
    """
    if start < 0 or end < start:
        raise ValueError(f"Invalid range {start}-{end}")
    if end > MAX_CODEPOINT:
        raise ValueError(f"Range end {end} exceeds {MAX_CODEPOINT}")

    face = freetype.Face(BytesIO(font_data))
    face.set_char_size(FONT_SIZE * 64)
    ascender = face.size.ascender / 64

    message = Glyphs()
    stack = message.stacks.add()
    stack.name = _fontstack_name(face)
    stack.range = f"{start}-{end}"

    for codepoint in range(start, end + 1):
        index = face.get_char_index(codepoint)
        if not index:
            continue
        face.load_glyph(index, LOAD_FLAGS)
        _add_glyph(stack, face, codepoint, ascender)

    logger.debug(f"Rendered {len(stack.glyphs)} glyphs for {stack.name} {stack.range}")
    return message.SerializeToString()
