"""Custom exceptions for the Adrian font server."""

from typing import Any


class AdrianError(Exception):
    """Base exception for all Adrian errors."""

    def __init__(self, message: str, details: Any | None = None):
        super().__init__(message)
        self.details = details


class ConfigurationError(AdrianError):
    """Exception raised for configuration errors."""


class ExtractError(AdrianError):
    """Exception raised when a file cannot be turned into a font record."""

    def __init__(self, message: str, path: str, details: Any | None = None):
        super().__init__(message, details)
        self.path = path


class FontNotFoundError(AdrianError):
    """Exception raised when a lookup in the font index misses."""


# Specific exception classes for TRY003 compliance
class NotAFontFileError(ExtractError):
    """Exception raised when a path does not look like a font file."""

    def __init__(self, path: str):
        super().__init__(f"Not a font file: {path}", path)


class FontParseError(ExtractError):
    """Exception raised when a font file cannot be parsed."""

    def __init__(self, path: str, error: str):
        super().__init__(f"Failed to parse font {path}: {error}", path, error)


class FontIDNotFoundError(FontNotFoundError):
    """Exception raised when no font has the requested unique ID."""

    def __init__(self, unique_id: str):
        super().__init__(f"No font with ID: {unique_id}")


class FontNameNotFoundError(FontNotFoundError):
    """Exception raised when no font has the requested full name."""

    def __init__(self, name: str):
        super().__init__(f"No font named: {name}")


class FontFamilyNotFoundError(FontNotFoundError):
    """Exception raised when a font family has no members."""

    def __init__(self, name: str):
        super().__init__(f"No fonts in family: {name}")


class ConfigFileNotFoundError(ConfigurationError):
    """Exception raised when configuration file is not found."""

    def __init__(self, config_path: str):
        super().__init__(f"Configuration file not found: {config_path}")


class EmptyConfigFileError(ConfigurationError):
    """Exception raised when configuration file is empty."""

    def __init__(self, config_path: str):
        super().__init__(f"Empty configuration file: {config_path}")


class InvalidYamlError(ConfigurationError):
    """Exception raised for invalid YAML content."""

    def __init__(self, config_path: str, error: str):
        super().__init__(f"Invalid YAML in {config_path}: {error}")


class ConfigLoadError(ConfigurationError):
    """Exception raised when configuration loading fails."""

    def __init__(self, error: str):
        super().__init__(f"Failed to load configuration: {error}")


class InvalidDirectoryError(ValueError):
    """Exception raised for an unusable font directory entry."""

    def __init__(self, directory: str):
        super().__init__(f"Invalid font directory: {directory!r}")
