"""Public identifiers for indexed fonts."""

import hashlib

from ..core.config import AdrianConfig
from ..core.models import FontRecord

DEFAULT_OBFUSCATE = True


def select_font_key(config: AdrianConfig | None, full_name: str) -> str | None:
    """
    Pick the family section that applies to a font.

    A section applies when the font's full name starts with its key, compared
    case-insensitively. The longest such key wins; among keys of equal length
    the one that comes last in the file wins.
    """
    if config is None:
        return None

    name = full_name.lower()
    selected = None
    for key in config.family_keys():
        if name.startswith(key.lower()) and (selected is None or len(key) >= len(selected)):
            selected = key
    return selected


def should_obfuscate(config: AdrianConfig | None, record: FontRecord) -> bool:
    """
    Whether a font is served under a hashed ID.

    Fonts without a section, or whose section omits ``obfuscate filenames``,
    are obfuscated. A section that names the setting obfuscates only when it
    is true, so an empty value serves plain names.
    """
    key = select_font_key(config, record.full_name)
    if key is None:
        return DEFAULT_OBFUSCATE
    section = config.families[key]
    if "obfuscate_filenames" not in section.model_fields_set:
        return DEFAULT_OBFUSCATE
    return section.obfuscate_filenames is True


def obfuscated_id(family_name: str, subfamily_name: str) -> str:
    """SHA-256 of ``"<family> <subfamily>"`` as lowercase hex."""
    return hashlib.sha256(f"{family_name} {subfamily_name}".encode()).hexdigest()


def compute_unique_id(config: AdrianConfig | None, record: FontRecord) -> str:
    """Compute the ID a font is served under."""
    if should_obfuscate(config, record):
        return obfuscated_id(record.family_name, record.subfamily_name)
    return record.full_name
