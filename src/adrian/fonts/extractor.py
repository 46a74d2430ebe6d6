"""
Font Descriptor Extractor
=========================

Turns font files on disk into ``FontRecord`` objects using fontTools.
"""

import hashlib
import io
import logging
import re
from pathlib import Path

from fontTools.ttLib import TTFont

from ..core.config import AdrianConfig
from ..core.exceptions import FontParseError, NotAFontFileError
from ..core.models import FontFlavor, FontFormat, FontRecord, ParsedFont
from .identity import compute_unique_id

logger = logging.getLogger(__name__)

FONT_EXTENSIONS = frozenset({"otf", "ttf", "woff", "woff2"})

# A filename that does not start with a dot and ends in a font extension
_FONT_FILENAME_RE = re.compile(r"^[^.][^/\\]*\.(otf|ttf|woff|woff2)$", re.IGNORECASE)

# Name table IDs
NAME_ID_COPYRIGHT = 0
NAME_ID_FAMILY = 1
NAME_ID_SUBFAMILY = 2
NAME_ID_FULL_NAME = 4

_TRUETYPE_VERSIONS = ("\x00\x01\x00\x00", "true")
_CFF_VERSION = "OTTO"


def is_font_path(path: str | Path) -> bool:
    """Cheap filename check, done before touching the file."""
    return bool(_FONT_FILENAME_RE.match(Path(path).name))


def format_for_flavor(flavor: FontFlavor) -> FontFormat:
    """Map a parser flavor onto the public format."""
    match flavor:
        case FontFlavor.TRUETYPE:
            return FontFormat.TTF
        case FontFlavor.CFF:
            return FontFormat.OTF
        case FontFlavor.WOFF:
            return FontFormat.WOFF
        case FontFlavor.WOFF2:
            return FontFormat.WOFF2
        case FontFlavor.OTHER:
            return FontFormat.UNKNOWN


def _detect_flavor(font: TTFont) -> FontFlavor:
    """Detect the container flavor from the parsed font."""
    if font.flavor == "woff2":
        return FontFlavor.WOFF2
    if font.flavor == "woff":
        return FontFlavor.WOFF
    if font.sfntVersion in _TRUETYPE_VERSIONS:
        return FontFlavor.TRUETYPE
    if font.sfntVersion == _CFF_VERSION:
        return FontFlavor.CFF
    return FontFlavor.OTHER


def _get_font_name(name_table, name_id: int) -> str:
    """Extract a name table string, preferring English records."""
    name = name_table.getDebugName(name_id)
    return name if name is not None else ""


def parse_font(data: bytes, path: str = "<bytes>") -> ParsedFont:
    """
    Parse raw font bytes.

    Args:
        data: Font file contents
        path: Path used in error messages

    Returns:
        ParsedFont with names and flavor

    Raises:
        FontParseError: If the data is not a single readable font
    """
    try:
        with TTFont(io.BytesIO(data)) as font:
            if "name" not in font:
                raise FontParseError(path, "missing name table")
            name_table = font["name"]

            return ParsedFont(
                flavor=_detect_flavor(font),
                full_name=_get_font_name(name_table, NAME_ID_FULL_NAME),
                family_name=_get_font_name(name_table, NAME_ID_FAMILY),
                subfamily_name=_get_font_name(name_table, NAME_ID_SUBFAMILY),
                copyright=_get_font_name(name_table, NAME_ID_COPYRIGHT),
            )
    except FontParseError:
        raise
    except Exception as e:
        raise FontParseError(path, str(e)) from e


def extract_font(file_path: str | Path, config: AdrianConfig | None = None) -> FontRecord:
    """
    Build a font record for a file on disk.

    Args:
        file_path: Font file path
        config: Configuration used by the identity policy

    Returns:
        FontRecord with identity assigned

    Raises:
        NotAFontFileError: If the filename fails the font pre-filter
        FontParseError: If the file cannot be read or parsed
    """
    if not is_font_path(file_path):
        raise NotAFontFileError(str(file_path))

    path = Path(file_path).absolute()

    try:
        data = path.read_bytes()
    except OSError as e:
        raise FontParseError(str(path), str(e)) from e

    parsed = parse_font(data, str(path))

    record = FontRecord(
        file_path=str(path),
        format=format_for_flavor(parsed.flavor),
        full_name=parsed.full_name,
        family_name=parsed.family_name,
        subfamily_name=parsed.subfamily_name,
        copyright=parsed.copyright,
        unique_id="",
        md5=hashlib.md5(data, usedforsecurity=False).hexdigest(),
    )
    record = record.with_unique_id(compute_unique_id(config, record))

    logger.debug(f"Extracted {record} from {path}")
    return record
