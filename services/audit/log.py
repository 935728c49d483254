from __future__ import annotations

import logging

from core.clock import Clock, utcnow
from domain.models import AuditAction, AuditEntry
from services.persistence.memory import AuditStore, InMemoryAuditStore

logger = logging.getLogger(__name__)

DEFAULT_QUERY_LIMIT = 50


class AuditLog:
    """Append-only compliance trail shared by the registry and the workflow tracker."""

    def __init__(self, store: AuditStore | None = None, clock: Clock = utcnow):
        self._store = store if store is not None else InMemoryAuditStore()
        self._clock = clock

    def append(self, entry: AuditEntry) -> AuditEntry:
        stored = self._store.append(entry)
        logger.info(
            "audit #%d %s user=%s doc=%s wf=%s",
            stored.sequence,
            stored.action.value,
            stored.user_id,
            stored.document_id,
            stored.workflow_id,
        )
        return stored

    def record(
        self,
        action: AuditAction,
        user_id: str,
        details: str,
        document_id: str | None = None,
        workflow_id: str | None = None,
    ) -> AuditEntry:
        return self.append(
            AuditEntry(
                timestamp=self._clock(),
                action=action,
                user_id=user_id,
                details=details,
                document_id=document_id,
                workflow_id=workflow_id,
            )
        )

    def query(
        self,
        action: AuditAction | str | None = None,
        user_id: str | None = None,
        limit: int = DEFAULT_QUERY_LIMIT,
    ) -> list[AuditEntry]:
        """Entries matching every given filter, newest first, at most `limit` of them."""
        entries = self._store.all()
        if action:
            # str-enum compares equal to its raw tag; unknown tags match nothing
            entries = [e for e in entries if e.action == action]
        if user_id:
            entries = [e for e in entries if e.user_id == user_id]
        entries.sort(key=lambda e: (e.timestamp, e.sequence), reverse=True)
        return entries[: max(limit, 0)]

    def count(self) -> int:
        return len(self._store.all())
