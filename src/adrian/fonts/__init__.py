"""Font Metadata
=============

Extraction, identity, weight inference, indexing and CSS generation for
font files.
"""

from .css import css_for_request, family_css, font_css, font_face_css
from .extractor import extract_font, is_font_path
from .identity import compute_unique_id, select_font_key
from .index import FontIndex
from .weights import FONT_WEIGHTS, infer_weight

__all__ = [
    "FONT_WEIGHTS",
    "FontIndex",
    "compute_unique_id",
    "css_for_request",
    "extract_font",
    "family_css",
    "font_css",
    "font_face_css",
    "infer_weight",
    "is_font_path",
    "select_font_key",
]
