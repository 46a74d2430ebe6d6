"""
CSS weight inference
====================

Subfamily names are usually authoritative, but some fonts only carry the
weight in the composed full name ("Acme Sans SemiBold" / "Regular").
"""

from ..core.models import FontRecord

REGULAR_WEIGHT = 400

# Order matters: suffix matching walks this table top to bottom.
FONT_WEIGHTS: dict[str, int] = {
    "thin": 100,
    "extralight": 200,
    "ultralight": 200,
    "light": 300,
    "book": 400,
    "normal": 400,
    "regular": 400,
    "roman": 400,
    "medium": 500,
    "semibold": 600,
    "demibold": 600,
    "bold": 700,
    "extrabold": 800,
    "ultrabold": 800,
    "black": 900,
    "heavy": 900,
}

_ITALIC_SUFFIX = " italic"


def infer_weight(record: FontRecord) -> int:
    """
    Determine a font's CSS weight.

    Args:
        record: Indexed font

    Returns:
        One of 100, 200, ... 900
    """
    variant = record.subfamily_name.lower()
    if variant != "regular" and variant in FONT_WEIGHTS:
        return FONT_WEIGHTS[variant]

    full_name = record.full_name.lower()
    if full_name.endswith(_ITALIC_SUFFIX):
        full_name = full_name[: -len(_ITALIC_SUFFIX)]

    for key, weight in FONT_WEIGHTS.items():
        if full_name.endswith(" " + key):
            return weight

    return REGULAR_WEIGHT
