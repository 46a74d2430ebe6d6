"""Filesystem watching and index updates."""

from .pipeline import ChangePipeline
from .watcher import DirectoryWatcher

__all__ = ["ChangePipeline", "DirectoryWatcher"]
