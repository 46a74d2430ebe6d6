"""
Test helpers.

Font files are generated on the fly with fontTools' FontBuilder so the
tests exercise the real parser.
"""

from pathlib import Path

from fontTools.fontBuilder import FontBuilder
from fontTools.pens.t2CharStringPen import T2CharStringPen
from fontTools.pens.ttGlyphPen import TTGlyphPen


def _draw_box(pen, width=400, height=600):
    pen.moveTo((50, 0))
    pen.lineTo((50, height))
    pen.lineTo((width, height))
    pen.lineTo((width, 0))
    pen.closePath()


def build_font(
    path: Path,
    family: str,
    subfamily: str = "Regular",
    full_name: str | None = None,
    cff: bool = False,
    flavor: str | None = None,
    copyright_notice: str = "Copyright (c) Test Foundry",
) -> Path:
    """
    Write a minimal but valid font file.

    Args:
        path: Destination path (extension is not inspected)
        family: Family name (nameID 1)
        subfamily: Subfamily name (nameID 2)
        full_name: Full name (nameID 4), defaults to "<family> <subfamily>"
        cff: Build a CFF-flavored OpenType font instead of TrueType
        flavor: None, "woff" or "woff2"
    """
    full_name = full_name or f"{family} {subfamily}"
    ps_name = full_name.replace(" ", "-")

    fb = FontBuilder(1000, isTTF=not cff)
    fb.setupGlyphOrder([".notdef", "space", "A"])
    fb.setupCharacterMap({32: "space", 65: "A"})

    if cff:
        charstrings = {}
        for name, width, draw in ((".notdef", 500, True), ("space", 250, False), ("A", 500, True)):
            pen = T2CharStringPen(width, None)
            if draw:
                _draw_box(pen)
            charstrings[name] = pen.getCharString()
        fb.setupCFF(ps_name, {"FullName": full_name}, charstrings, {})
    else:
        glyphs = {}
        for name, draw in ((".notdef", True), ("space", False), ("A", True)):
            pen = TTGlyphPen(None)
            if draw:
                _draw_box(pen)
            glyphs[name] = pen.glyph()
        fb.setupGlyf(glyphs)

    fb.setupHorizontalMetrics({".notdef": (500, 50), "space": (250, 0), "A": (500, 50)})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable(
        {
            "copyright": copyright_notice,
            "familyName": family,
            "styleName": subfamily,
            "fullName": full_name,
            "psName": ps_name,
        }
    )
    fb.setupOS2(sTypoAscender=800, usWinAscent=800, usWinDescent=200)
    fb.setupPost()

    if flavor:
        fb.font.flavor = flavor

    path.parent.mkdir(parents=True, exist_ok=True)
    fb.save(str(path))
    return path
