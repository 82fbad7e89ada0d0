from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

FAMILY_NAME = "Test Sans"
STYLE_NAME = "Regular"
UPM = 1000
ADVANCE = 600


def _box_glyph():
    pen = TTGlyphPen(None)
    pen.moveTo((100, 0))
    pen.lineTo((100, 700))
    pen.lineTo((500, 700))
    pen.lineTo((500, 0))
    pen.closePath()
    return pen.glyph()


def build_font(path: Path, codepoints, blank=(0x20,)) -> Path:
    """Write a minimal TrueType font mapping each codepoint to a box glyph.

    Codepoints listed in ``blank`` map to an empty outline instead.
    """
    cmap = {cp: f"uni{cp:04X}" for cp in codepoints}
    glyph_order = [".notdef"] + sorted(cmap.values())

    glyphs = {".notdef": TTGlyphPen(None).glyph()}
    metrics = {".notdef": (ADVANCE, 0)}
    for cp, name in cmap.items():
        if cp in blank:
            glyphs[name] = TTGlyphPen(None).glyph()
            metrics[name] = (ADVANCE, 0)
        else:
            glyphs[name] = _box_glyph()
            metrics[name] = (ADVANCE, 100)

    fb = FontBuilder(UPM, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap(cmap)
    fb.setupGlyf(glyphs)
    fb.setupHorizontalMetrics(metrics)
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": FAMILY_NAME, "styleName": STYLE_NAME})
    fb.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    fb.setupPost()

    path.parent.mkdir(parents=True, exist_ok=True)
    fb.save(str(path))
    return path


@pytest.fixture
def make_font():
    return build_font


@pytest.fixture
def font_data(tmp_path):
    return build_font(tmp_path / "Test.ttf", [0x20, 0x41, 0x42]).read_bytes()
