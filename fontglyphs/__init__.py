"""Convert local TrueType/OpenType fonts into glyph range PBF packets."""

from fontglyphs.ranges import MAX_CODEPOINT, RANGE_SIZE, compute_ranges

__all__ = ["MAX_CODEPOINT", "RANGE_SIZE", "compute_ranges"]
