"""
Pytest configuration and fixtures for Adrian tests.
"""

import tempfile
from pathlib import Path

import pytest

from adrian.core.config import AdrianConfig, FamilyConfig, GlobalConfig
from adrian.core.models import FontFormat, FontRecord
from adrian.fonts.identity import obfuscated_id
from helpers import build_font


@pytest.fixture
def temp_dir():
    """Create temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir).resolve()


@pytest.fixture
def fonts_dir(temp_dir):
    """Empty font directory."""
    font_dir = temp_dir / "fonts"
    font_dir.mkdir()
    return font_dir


@pytest.fixture
def font_factory(fonts_dir):
    """Build font files inside ``fonts_dir``."""

    def _make(filename: str, family: str, subfamily: str = "Regular", **kwargs) -> Path:
        return build_font(fonts_dir / filename, family, subfamily, **kwargs)

    return _make


@pytest.fixture
def acme_semibold(font_factory):
    """TrueType font 'Acme Sans SemiBold'."""
    return font_factory("AcmeSans-SemiBold.ttf", "Acme Sans", "SemiBold")


@pytest.fixture
def record_factory():
    """Build FontRecord objects without touching the filesystem."""

    def _make(
        full_name: str = "Acme Sans Regular",
        family_name: str = "Acme Sans",
        subfamily_name: str = "Regular",
        file_path: str | None = None,
        format: FontFormat = FontFormat.TTF,
        unique_id: str | None = None,
    ) -> FontRecord:
        return FontRecord(
            file_path=file_path or f"/fonts/{full_name.replace(' ', '')}.{format.value}",
            format=format,
            full_name=full_name,
            family_name=family_name,
            subfamily_name=subfamily_name,
            copyright="",
            unique_id=unique_id or obfuscated_id(family_name, subfamily_name),
            md5="0" * 32,
        )

    return _make


@pytest.fixture
def plain_names_config(fonts_dir):
    """Configuration serving 'Acme Sans' fonts under their full names."""
    return AdrianConfig(
        global_=GlobalConfig(**{"directories": [fonts_dir], "poll interval": 0.05}),
        families={"Acme Sans": FamilyConfig(obfuscate_filenames=False)},
    )


@pytest.fixture
def default_config(fonts_dir):
    """Configuration with no family sections (everything obfuscated)."""
    return AdrianConfig(
        global_=GlobalConfig(**{"directories": [fonts_dir], "poll interval": 0.05}),
    )
