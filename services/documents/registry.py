from __future__ import annotations

import logging
import uuid

from core.clock import Clock, utcnow
from domain.errors import MissingFileError, NotFoundError
from domain.models import (
    AuditAction,
    DocumentRecord,
    DocumentStatus,
    DocumentStatusView,
    DocumentSummary,
)
from domain.value_objects import FileMetadata
from services.audit.log import AuditLog
from services.forms.matching import match_forms
from services.ingestion.extraction import extract_loan_fields
from services.observability.metrics import timing_metric
from services.persistence.locks import KeyedLock
from services.persistence.memory import DocumentStore, InMemoryDocumentStore
from services.processing.progress import ElapsedTimeProgress, ProgressEstimator

logger = logging.getLogger(__name__)


class DocumentRegistry:
    """
    Owns uploaded CAM documents.

    Status is never stored: it is recomputed from the progress estimator on every
    read. The first read that sees 100% attaches the matched legal forms, and that
    happens once per document (guarded by a per-document lock).
    """

    def __init__(
        self,
        audit: AuditLog,
        store: DocumentStore | None = None,
        progress: ProgressEstimator | None = None,
        clock: Clock = utcnow,
        default_user_id: str = "demo-user",
    ):
        self._audit = audit
        self._store = store if store is not None else InMemoryDocumentStore()
        self._progress = progress if progress is not None else ElapsedTimeProgress()
        self._clock = clock
        self._default_user_id = default_user_id
        self._locks = KeyedLock()

    def submit(
        self,
        file: FileMetadata | None,
        loan_amount: float | None = None,
        user_id: str | None = None,
    ) -> DocumentRecord:
        if file is None:
            raise MissingFileError()

        extraction = extract_loan_fields(file, loan_amount=loan_amount)
        record = DocumentRecord(
            id=str(uuid.uuid4()),
            original_name=file.original_name,
            size_bytes=file.size_bytes,
            content_type=file.content_type,
            uploaded_at=self._clock(),
            extracted_fields=extraction.fields,
            confidence=extraction.confidence,
            validation=extraction.validation,
        )
        self._store.add(record)
        logger.info("registered document %s (%s, %d bytes)", record.id, file.original_name, file.size_bytes)

        self._audit.record(
            AuditAction.DOCUMENT_UPLOAD,
            user_id=user_id or self._default_user_id,
            details=f"Uploaded {file.original_name}",
            document_id=record.id,
        )
        return record

    def get(self, document_id: str) -> DocumentRecord:
        record = self._store.get(document_id)
        if record is None:
            raise NotFoundError("document", document_id)
        return record

    def exists(self, document_id: str) -> bool:
        return self._store.get(document_id) is not None

    def get_status(self, document_id: str) -> DocumentStatusView:
        record = self.get(document_id)
        progress = self._progress.estimate(record, self._clock())

        if progress.completed and not record.matched_forms:
            record = self._attach_forms(document_id)

        return DocumentStatusView(
            **record.model_dump(),
            status=DocumentStatus.COMPLETED if progress.completed else DocumentStatus.PROCESSING,
            progress=progress.percent,
        )

    def _attach_forms(self, document_id: str) -> DocumentRecord:
        with self._locks.hold(document_id):
            # re-read under the lock: a concurrent reader may have matched already
            record = self.get(document_id)
            if record.matched_forms:
                return record
            with timing_metric("forms.match"):
                record.matched_forms = match_forms(record.extracted_fields.loan_amount)
            self._store.save(record)
            logger.info(
                "document %s completed; matched forms %s",
                document_id,
                [f.form_id for f in record.matched_forms],
            )
            return record

    def list(self) -> list[DocumentSummary]:
        now = self._clock()
        summaries: list[DocumentSummary] = []
        for record in self._store.all():
            progress = self._progress.estimate(record, now)
            summaries.append(
                DocumentSummary(
                    id=record.id,
                    filename=record.original_name,
                    status=DocumentStatus.COMPLETED if progress.completed else DocumentStatus.PROCESSING,
                    uploaded_at=record.uploaded_at,
                    borrower_name=record.extracted_fields.borrower_name,
                    loan_amount=record.extracted_fields.loan_amount,
                )
            )
        return summaries
