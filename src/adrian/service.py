"""
Font Service
============

Owns the font index and everything that keeps it current: the change
pipeline, one watcher per font directory and the response cache.
"""

import logging
from typing import Any

from .core.config import AdrianConfig
from .fonts.index import FontIndex
from .server.cache import ResponseCache
from .watch.pipeline import ChangePipeline
from .watch.watcher import DirectoryWatcher

logger = logging.getLogger(__name__)


class FontService:
    """Font index with its lifecycle tied to ``start()`` and ``stop()``."""

    def __init__(self, config: AdrianConfig, index: FontIndex | None = None):
        self.config = config
        self.index = index if index is not None else FontIndex()
        self.cache = ResponseCache(
            lifetime_seconds=config.global_.cache_lifetime_seconds,
            max_entries=config.global_.cache_max_entries,
        )
        self.cache.attach(self.index)
        self.pipeline = ChangePipeline(self.index, config)
        self.watchers: list[DirectoryWatcher] = []
        self._started = False

    @property
    def is_running(self) -> bool:
        return self._started

    def load(self) -> int:
        """Index every font in the configured directories."""
        return self.pipeline.bulk_load(self.config.global_.directories)

    def start(self, watch: bool = True) -> None:
        """
        Load fonts and start watching the font directories.

        Watchers record the tree before the bulk load so that files
        arriving during the load are still reported.
        """
        if self._started:
            return

        if watch:
            for directory in self.config.global_.directories:
                watcher = DirectoryWatcher(
                    directory,
                    self.pipeline.handle,
                    poll_interval=self.config.global_.poll_interval,
                )
                watcher.prime()
                self.watchers.append(watcher)

        self._started = True
        try:
            self.load()
            for watcher in self.watchers:
                watcher.start()
        except Exception:
            self.stop()
            raise

        logger.info(
            f"Font service started: {len(self.index)} fonts, {len(self.watchers)} watchers"
        )

    def stop(self) -> None:
        """Stop all watchers."""
        for watcher in self.watchers:
            try:
                watcher.stop()
            except Exception:
                logger.exception(f"Failed to stop watcher for {watcher.root}")
        self.watchers.clear()
        self._started = False

    def stats(self) -> dict[str, Any]:
        return {
            "fonts": len(self.index),
            "families": len(self.index.families()),
            "watchers": len(self.watchers),
            "cache": self.cache.get_cache_info(),
        }

    def __enter__(self) -> "FontService":
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.stop()
