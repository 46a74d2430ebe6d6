"""Core data models for the font index."""

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path


class FontFormat(str, Enum):
    """Public font format, also used as the file extension in URLs."""

    OTF = "otf"
    TTF = "ttf"
    WOFF = "woff"
    WOFF2 = "woff2"
    UNKNOWN = "unknown"

    @property
    def mime_type(self) -> str:
        return _MIME_TYPES[self]


_MIME_TYPES = {
    FontFormat.OTF: "font/otf",
    FontFormat.TTF: "font/ttf",
    FontFormat.WOFF: "font/woff",
    FontFormat.WOFF2: "font/woff2",
    FontFormat.UNKNOWN: "application/octet-stream",
}


class FontFlavor(str, Enum):
    """Container flavor reported by the font parser."""

    TRUETYPE = "truetype"
    CFF = "cff"
    WOFF = "woff"
    WOFF2 = "woff2"
    OTHER = "other"


class FontEventType(str, Enum):
    """Filesystem change kinds consumed by the change pipeline."""

    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"


@dataclass(frozen=True)
class FontEvent:
    """A single filesystem change for a path under a watched directory."""

    type: FontEventType
    path: str


@dataclass(frozen=True)
class ParsedFont:
    """Normalized result of parsing a font file, before identity is assigned."""

    flavor: FontFlavor
    full_name: str
    family_name: str
    subfamily_name: str
    copyright: str


@dataclass(frozen=True)
class FontRecord:
    """One indexed font file."""

    file_path: str
    format: FontFormat
    full_name: str
    family_name: str
    subfamily_name: str
    copyright: str
    unique_id: str
    md5: str = ""

    @property
    def filename(self) -> str:
        """Get the font filename."""
        return Path(self.file_path).name

    @property
    def public_filename(self) -> str:
        """Filename under which the font is served over HTTP."""
        return f"{self.unique_id}.{self.format.value}"

    def with_unique_id(self, unique_id: str) -> "FontRecord":
        return replace(self, unique_id=unique_id)

    def __str__(self) -> str:
        return f"{self.full_name} ({self.format.value})"


@dataclass(frozen=True)
class IndexChange:
    """Describes one completed index mutation, passed to index listeners."""

    file_path: str
    old: FontRecord | None
    new: FontRecord | None

    @property
    def kind(self) -> str:
        if self.old is None:
            return "added"
        if self.new is None:
            return "removed"
        return "updated"
