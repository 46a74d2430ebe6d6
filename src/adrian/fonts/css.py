"""@font-face CSS generation."""

import logging

from ..core.exceptions import FontFamilyNotFoundError, FontNameNotFoundError
from ..core.models import FontRecord
from .index import FontIndex
from .weights import infer_weight

logger = logging.getLogger(__name__)

FONT_DISPLAY_VALUES = frozenset({"auto", "block", "swap", "fallback", "optional"})


def font_face_css(record: FontRecord, display: str | None = None) -> str:
    """
    Render a single-line ``@font-face`` block for one font.

    Args:
        record: Indexed font
        display: Optional ``font-display`` value

    Returns:
        CSS text without a trailing newline
    """
    fmt = record.format.value
    parts = [
        f"font-family: '{record.family_name}';",
        "font-style: normal;",
        f"font-weight: {infer_weight(record)};",
    ]
    if display:
        parts.append(f"font-display: {display};")
    parts.append(
        f"src: local('{record.full_name}'), url({record.unique_id}.{fmt}) format('{fmt}');"
    )
    return "@font-face { " + " ".join(parts) + " }"


def font_css(index: FontIndex, full_name: str, display: str | None = None) -> str:
    """CSS for the font with exactly this full name."""
    record = index.find_by_full_name(full_name)
    if record is None:
        raise FontNameNotFoundError(full_name)
    return font_face_css(record, display)


def family_css(index: FontIndex, name: str, display: str | None = None) -> str:
    """
    CSS for every font whose full name starts with ``name``.

    Raises:
        FontFamilyNotFoundError: If no font matches
    """
    members = index.find_by_family_prefix(name)
    if not members:
        raise FontFamilyNotFoundError(name)
    return "".join(font_face_css(record, display) + "\n" for record in members)


def parse_weights(spec: str) -> list[int]:
    """Parse ``"400,700"`` into unique integer weights, keeping order."""
    weights: list[int] = []
    for part in spec.split(","):
        try:
            weight = int(part.strip())
        except ValueError:
            continue
        if weight not in weights:
            weights.append(weight)
    return weights


def css_for_request(index: FontIndex, family_param: str, display: str | None = None) -> str:
    """
    CSS for a Google-Fonts style ``family`` parameter.

    ``family_param`` is a ``|``-separated list of ``Family[:w1,w2]`` entries.
    When weights are given only members with a matching inferred weight are
    included.

    Raises:
        FontFamilyNotFoundError: If any requested family has no (matching) fonts
    """
    if display is not None and display not in FONT_DISPLAY_VALUES:
        logger.debug(f"Ignoring unknown font-display value: {display}")
        display = None

    chunks = []
    for request in family_param.split("|"):
        name, _, weight_spec = request.partition(":")
        name = name.replace("+", " ").strip()
        if not name:
            continue

        members = index.find_by_family_prefix(name)
        weights = parse_weights(weight_spec) if weight_spec else []
        if weights:
            members = [record for record in members if infer_weight(record) in weights]
        if not members:
            raise FontFamilyNotFoundError(name)

        chunks.extend(font_face_css(record, display) + "\n" for record in members)

    if not chunks:
        raise FontFamilyNotFoundError(family_param)
    return "".join(chunks)
