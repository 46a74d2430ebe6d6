"""Adrian Font Server
==================

Indexes font files on disk, watches them for changes and serves the
fonts together with generated ``@font-face`` CSS.
"""

__version__ = "2.3.0"

from .core.config import AdrianConfig, load_config_from_yaml
from .core.exceptions import AdrianError, ConfigurationError, FontNotFoundError
from .core.models import FontFormat, FontRecord
from .fonts import FontIndex, extract_font, font_face_css, infer_weight
from .service import FontService

__all__ = [
    "AdrianConfig",
    "AdrianError",
    "ConfigurationError",
    "FontFormat",
    "FontIndex",
    "FontNotFoundError",
    "FontRecord",
    "FontService",
    "extract_font",
    "font_face_css",
    "infer_weight",
    "load_config_from_yaml",
]
