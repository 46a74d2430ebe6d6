"""HTTP serving. The application itself lives in ``adrian.server.app``."""

from .cache import ResponseCache

__all__ = ["ResponseCache"]
