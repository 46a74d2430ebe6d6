"""Core components: configuration, exceptions and data models."""

from .config import AdrianConfig, FamilyConfig, GlobalConfig, load_config_from_yaml
from .exceptions import (
    AdrianError,
    ConfigurationError,
    ExtractError,
    FontNotFoundError,
    FontParseError,
    NotAFontFileError,
)
from .models import FontEvent, FontEventType, FontFlavor, FontFormat, FontRecord, IndexChange

__all__ = [
    "AdrianConfig",
    "AdrianError",
    "ConfigurationError",
    "ExtractError",
    "FamilyConfig",
    "FontEvent",
    "FontEventType",
    "FontFlavor",
    "FontFormat",
    "FontNotFoundError",
    "FontParseError",
    "FontRecord",
    "GlobalConfig",
    "IndexChange",
    "NotAFontFileError",
    "load_config_from_yaml",
]
