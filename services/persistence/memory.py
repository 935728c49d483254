from __future__ import annotations

import threading
from typing import Protocol

from domain.models import AuditEntry, DocumentRecord, WorkflowRecord


class DocumentStore(Protocol):
    def add(self, record: DocumentRecord) -> None: ...

    def get(self, document_id: str) -> DocumentRecord | None: ...

    def save(self, record: DocumentRecord) -> None: ...

    def all(self) -> list[DocumentRecord]: ...


class WorkflowStore(Protocol):
    def add(self, record: WorkflowRecord) -> None: ...

    def get(self, workflow_id: str) -> WorkflowRecord | None: ...

    def save(self, record: WorkflowRecord) -> None: ...


class AuditStore(Protocol):
    def append(self, entry: AuditEntry) -> AuditEntry: ...

    def all(self) -> list[AuditEntry]: ...


class _InMemoryRecords:
    """
    Dict-backed store. Records go in and come out as deep copies, so callers
    only change stored state through save(), which swaps the whole record.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: dict = {}

    def add(self, record) -> None:
        with self._lock:
            if record.id in self._items:
                raise KeyError(f"duplicate id: {record.id}")
            self._items[record.id] = record.model_copy(deep=True)

    def get(self, record_id: str):
        with self._lock:
            record = self._items.get(record_id)
            return record.model_copy(deep=True) if record is not None else None

    def save(self, record) -> None:
        with self._lock:
            if record.id not in self._items:
                raise KeyError(f"unknown id: {record.id}")
            self._items[record.id] = record.model_copy(deep=True)

    def all(self) -> list:
        with self._lock:
            return [r.model_copy(deep=True) for r in self._items.values()]


class InMemoryDocumentStore(_InMemoryRecords):
    pass


class InMemoryWorkflowStore(_InMemoryRecords):
    pass


class InMemoryAuditStore:
    """Append-only list; the sequence number is assigned here, under the lock."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: list[AuditEntry] = []

    def append(self, entry: AuditEntry) -> AuditEntry:
        with self._lock:
            stored = entry.model_copy(update={"sequence": len(self._entries) + 1})
            self._entries.append(stored)
            return stored

    def all(self) -> list[AuditEntry]:
        with self._lock:
            return list(self._entries)
