"""
Change Pipeline
===============

Applies filesystem events to the font index. Fonts are always extracted
before the index is touched, so the write lock is only held for the swap.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from ..core.config import AdrianConfig
from ..core.exceptions import ExtractError, FontParseError, NotAFontFileError
from ..core.models import FontEvent, FontEventType, FontRecord
from ..fonts.extractor import extract_font, is_font_path
from ..fonts.index import FontIndex
from ..fonts.scanner import find_font_files

logger = logging.getLogger(__name__)


class ChangePipeline:
    """Keeps a ``FontIndex`` in step with the font files on disk."""

    def __init__(self, index: FontIndex, config: AdrianConfig | None = None):
        self.index = index
        self.config = config

    def _extract(self, path: str) -> FontRecord | None:
        """Extract a record, or None if the file is not a usable font."""
        try:
            return extract_font(path, self.config)
        except NotAFontFileError:
            logger.debug(f"Skipping non-font file {path}")
        except FontParseError as e:
            logger.warning(f"Skipping unreadable font {path}: {e.details}")
        except ExtractError as e:
            logger.warning(f"Skipping {path}: {e}")
        return None

    def handle(self, event: FontEvent) -> bool:
        """
        Apply one event.

        Returns:
            True if the index changed
        """
        try:
            match event.type:
                case FontEventType.ADDED:
                    return self.on_added(event.path)
                case FontEventType.REMOVED:
                    return self.on_removed(event.path)
                case FontEventType.MODIFIED:
                    return self.on_modified(event.path)
        except Exception:
            logger.exception(f"Failed to handle {event.type.value} event for {event.path}")
        return False

    def handle_all(self, events: Iterable[FontEvent]) -> int:
        """Apply events in order; returns how many changed the index."""
        return sum(1 for event in events if self.handle(event))

    def on_added(self, path: str) -> bool:
        if not is_font_path(path):
            return False
        record = self._extract(path)
        if record is None:
            return False
        old = self.index.upsert(record)
        if old is None:
            logger.info(f"Added font {record.file_path}")
        else:
            logger.info(f"Updated font {record.file_path}")
        return True

    def on_removed(self, path: str) -> bool:
        removed = self.index.remove(str(Path(path).absolute()))
        if removed is None:
            return False
        logger.info(f"Removed font {removed.file_path}")
        return True

    def on_modified(self, path: str) -> bool:
        # The old record stays in place until the new one is ready
        if not is_font_path(path):
            return False
        record = self._extract(path)
        if record is None:
            if str(Path(path).absolute()) in self.index:
                logger.warning(f"Keeping previous version of {path}")
            return False
        self.index.upsert(record)
        logger.info(f"Updated font {record.file_path}")
        return True

    def bulk_load(self, directories: Iterable[Path]) -> int:
        """
        Index every font under ``directories``.

        Returns:
            Number of fonts indexed
        """
        records = []
        for font_file in find_font_files(directories):
            record = self._extract(str(font_file))
            if record is not None:
                records.append(record)

        loaded = self.index.bulk_upsert(records)
        logger.info(f"Indexed {loaded} fonts")
        return loaded
