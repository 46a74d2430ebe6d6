"""
Font Index
==========

In-memory index of font records keyed by file path, with derived lookup
views by unique ID, by full name and by full-name prefix.

Readers always work on an immutable snapshot and never take a lock.
Writers serialize on a lock, build a new snapshot and swap it in, so a
reader sees either the state before a mutation or the state after it.
"""

import logging
import threading
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from types import MappingProxyType

from ..core.models import FontFormat, FontRecord, IndexChange

logger = logging.getLogger(__name__)

IndexListener = Callable[[IndexChange], None]


@dataclass(frozen=True)
class _Snapshot:
    """One consistent generation of the index."""

    # Iteration order is upsert order, oldest first
    by_path: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))
    by_id: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))
    by_full_name: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))
    by_id_format: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))
    generation: int = 0

    @classmethod
    def build(cls, by_path: dict[str, FontRecord], generation: int) -> "_Snapshot":
        by_id: dict[str, FontRecord] = {}
        by_full_name: dict[str, FontRecord] = {}
        by_id_format: dict[tuple[str, FontFormat], FontRecord] = {}
        # Later upserts overwrite earlier ones
        for record in by_path.values():
            by_id[record.unique_id] = record
            by_full_name[record.full_name] = record
            by_id_format[(record.unique_id, record.format)] = record
        return cls(
            by_path=MappingProxyType(by_path),
            by_id=MappingProxyType(by_id),
            by_full_name=MappingProxyType(by_full_name),
            by_id_format=MappingProxyType(by_id_format),
            generation=generation,
        )


class FontIndex:
    """Thread-safe font index with lock-free reads."""

    def __init__(self, records: Iterable[FontRecord] = ()):
        self._write_lock = threading.Lock()
        self._snapshot = _Snapshot()
        self._listeners: list[IndexListener] = []

        initial = list(records)
        if initial:
            self.bulk_upsert(initial)

    # Mutations

    def upsert(self, record: FontRecord) -> FontRecord | None:
        """
        Insert or replace the record for ``record.file_path``.

        Returns:
            The record previously stored under that path, if any
        """
        with self._write_lock:
            current = self._snapshot
            by_path = dict(current.by_path)
            old = by_path.pop(record.file_path, None)
            by_path[record.file_path] = record
            self._snapshot = _Snapshot.build(by_path, current.generation + 1)

        self._notify(IndexChange(record.file_path, old, record))
        return old

    def bulk_upsert(self, records: Iterable[FontRecord]) -> int:
        """Insert many records with a single snapshot swap."""
        changes = []
        with self._write_lock:
            current = self._snapshot
            by_path = dict(current.by_path)
            for record in records:
                old = by_path.pop(record.file_path, None)
                by_path[record.file_path] = record
                changes.append(IndexChange(record.file_path, old, record))
            if changes:
                self._snapshot = _Snapshot.build(by_path, current.generation + 1)

        for change in changes:
            self._notify(change)
        return len(changes)

    def remove(self, file_path: str) -> FontRecord | None:
        """
        Remove the record for ``file_path``.

        Returns:
            The removed record, or None if the path was not indexed
        """
        with self._write_lock:
            current = self._snapshot
            if file_path not in current.by_path:
                return None
            by_path = dict(current.by_path)
            old = by_path.pop(file_path)
            self._snapshot = _Snapshot.build(by_path, current.generation + 1)

        self._notify(IndexChange(file_path, old, None))
        return old

    def clear(self) -> None:
        """Drop every record."""
        with self._write_lock:
            current = self._snapshot
            removed = list(current.by_path.values())
            self._snapshot = _Snapshot(generation=current.generation + 1)

        for record in removed:
            self._notify(IndexChange(record.file_path, record, None))

    # Lookups

    def get(self, file_path: str) -> FontRecord | None:
        return self._snapshot.by_path.get(file_path)

    def find_by_id(self, unique_id: str, format: FontFormat | None = None) -> FontRecord | None:
        """
        Look up a font by its public ID.

        Several files of one style share an ID when they differ only in
        format; pass ``format`` to pick the file for a given extension.
        """
        snapshot = self._snapshot
        if format is None:
            return snapshot.by_id.get(unique_id)
        return snapshot.by_id_format.get((unique_id, format))

    def find_by_full_name(self, name: str) -> FontRecord | None:
        return self._snapshot.by_full_name.get(name)

    def find_by_family_prefix(self, name: str) -> list[FontRecord]:
        """All fonts whose full name starts with ``name``, case-insensitively."""
        prefix = name.lower()
        return [
            record
            for record in self._snapshot.by_path.values()
            if record.full_name.lower().startswith(prefix)
        ]

    def records(self) -> list[FontRecord]:
        """All records, oldest upsert first."""
        return list(self._snapshot.by_path.values())

    def families(self) -> list[str]:
        """Sorted distinct family names."""
        return sorted({record.family_name for record in self._snapshot.by_path.values()})

    @property
    def generation(self) -> int:
        """Incremented on every mutation."""
        return self._snapshot.generation

    def __len__(self) -> int:
        return len(self._snapshot.by_path)

    def __contains__(self, file_path: object) -> bool:
        return file_path in self._snapshot.by_path

    # Listeners

    def add_listener(self, listener: IndexListener) -> None:
        """Call ``listener`` after every mutation."""
        self._listeners.append(listener)

    def remove_listener(self, listener: IndexListener) -> None:
        self._listeners.remove(listener)

    def _notify(self, change: IndexChange) -> None:
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                logger.exception(f"Index listener failed for {change.file_path}")
