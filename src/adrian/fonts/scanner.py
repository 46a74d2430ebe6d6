"""
Directory scanning
==================

Finds font files under the configured font directories.
"""

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from .extractor import is_font_path

logger = logging.getLogger(__name__)


def is_hidden(path: Path, root: Path) -> bool:
    """True if any component of ``path`` below ``root`` starts with a dot."""
    try:
        parts = path.relative_to(root).parts
    except ValueError:
        parts = path.parts
    return any(part.startswith(".") for part in parts)


def scan_directory(font_dir: Path) -> Iterator[Path]:
    """
    Recursively yield font files in a directory.

    Dot-directories are not descended into and dotfiles are skipped.
    """
    if not font_dir.is_dir():
        logger.warning(f"Font directory does not exist: {font_dir}")
        return

    def _on_error(error: OSError) -> None:
        logger.debug(f"Cannot read {error.filename}: {error}")

    for dirpath, dirnames, filenames in os.walk(font_dir, onerror=_on_error):
        dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
        for filename in sorted(filenames):
            if is_font_path(filename):
                yield Path(dirpath) / filename


def find_font_files(directories: Iterable[Path]) -> list[Path]:
    """Font files in all directories, in a stable order."""
    font_files = []
    for font_dir in directories:
        font_files.extend(scan_directory(Path(font_dir)))
    return font_files
