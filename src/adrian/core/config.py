"""Configuration management for the Adrian font server.

The YAML file has one reserved ``global`` section and any number of
font-family sections keyed by a full-name prefix::

    global:
      port: 3000
      directories:
        - ./fonts
      cache lifetime: 5
      logs:
        access: ./access.log
    Acme Sans:
      obfuscate filenames: false
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import (
    ConfigFileNotFoundError,
    ConfigLoadError,
    ConfigurationError,
    EmptyConfigFileError,
    InvalidDirectoryError,
    InvalidYamlError,
)

GLOBAL_SECTION = "global"
DEFAULT_CONFIG_PATH = Path("./adrian.yaml")


class LogsConfig(BaseModel):
    """Log file locations."""

    access: Path | None = Field(None, description="Access log path")


class GlobalConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ADRIAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )
    """Server-wide settings from the ``global`` section."""

    host: str = Field("0.0.0.0", description="Interface to bind")  # noqa: S104
    port: int = Field(3000, ge=1, le=65535, description="Port to listen on")
    directories: list[Path] = Field(default_factory=list, description="Font directories")
    cache_lifetime: float = Field(
        5.0, ge=0.0, alias="cache lifetime", description="Response cache lifetime in minutes"
    )
    cache_max_entries: int = Field(
        1024, ge=1, alias="cache max entries", description="Maximum cached responses"
    )
    poll_interval: float = Field(
        1.0, gt=0.0, alias="poll interval", description="Directory polling interval in seconds"
    )
    logs: LogsConfig = Field(default_factory=LogsConfig)

    @field_validator("directories", mode="before")
    @classmethod
    def validate_directories(cls, v):
        """Accept a single directory and reject blank entries."""
        if v is None:
            return []
        if isinstance(v, str | Path):
            v = [v]
        for entry in v:
            if not str(entry).strip():
                raise InvalidDirectoryError(str(entry))
        return v

    @field_validator("directories")
    @classmethod
    def resolve_directories(cls, v):
        """Resolve font directories to absolute paths."""
        return [Path(d).expanduser().resolve() for d in v]

    @property
    def cache_lifetime_seconds(self) -> float:
        return self.cache_lifetime * 60.0


class FamilyConfig(BaseModel):
    """Per-family settings, keyed by a full-name prefix."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    obfuscate_filenames: bool | None = Field(
        None, alias="obfuscate filenames", description="Serve under a hashed ID"
    )


class AdrianConfig(BaseModel):
    """Complete configuration: the global section plus ordered family sections."""

    model_config = ConfigDict(populate_by_name=True)

    global_: GlobalConfig = Field(default_factory=GlobalConfig, alias=GLOBAL_SECTION)
    families: dict[str, FamilyConfig] = Field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "AdrianConfig":
        """Build configuration from the raw top-level YAML mapping."""
        if not isinstance(data, dict):
            raise ConfigLoadError(f"top level must be a mapping, got {type(data).__name__}")

        global_data = data.get(GLOBAL_SECTION) or {}
        if not isinstance(global_data, dict):
            raise ConfigLoadError("'global' section must be a mapping")

        families = {}
        for key, section in data.items():
            if key == GLOBAL_SECTION:
                continue
            if section is None:
                section = {}
            if not isinstance(section, dict):
                raise ConfigLoadError(f"section {key!r} must be a mapping")
            families[str(key)] = FamilyConfig(**section)

        return cls(global_=GlobalConfig(**global_data), families=families)

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "AdrianConfig":
        """Load configuration from YAML file."""
        return load_config_from_yaml(config_path)

    def family_keys(self) -> list[str]:
        """Family section keys in file order."""
        return list(self.families)


def load_config_from_yaml(config_path: str | Path) -> AdrianConfig:
    """Load configuration from YAML file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigFileNotFoundError(str(config_path))

    try:
        with open(config_path, encoding="utf-8") as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            raise EmptyConfigFileError(str(config_path))

        return AdrianConfig.from_dict(config_data)

    except yaml.YAMLError as e:
        raise InvalidYamlError(str(config_path), str(e)) from e
    except ConfigurationError:
        raise
    except (ValidationError, ValueError, TypeError) as e:
        raise ConfigLoadError(str(e)) from e
