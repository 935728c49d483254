from __future__ import annotations

import logging
import uuid

from core.clock import Clock, utcnow
from domain.errors import InvalidDecisionError, InvalidStateError, NotFoundError
from domain.models import (
    AuditAction,
    Decision,
    StepId,
    StepStatus,
    WorkflowRecord,
    WorkflowStatus,
    WorkflowStep,
)
from services.audit.log import AuditLog
from services.documents.registry import DocumentRegistry
from services.persistence.locks import KeyedLock
from services.persistence.memory import InMemoryWorkflowStore, WorkflowStore

logger = logging.getLogger(__name__)

_OUTCOME = {
    Decision.APPROVE: WorkflowStatus.APPROVED,
    Decision.REJECT: WorkflowStatus.REJECTED,
}


def parse_decision(value: Decision | str) -> Decision:
    if isinstance(value, Decision):
        return value
    try:
        return Decision(value)
    except ValueError as e:
        raise InvalidDecisionError(value) from e


class ApprovalWorkflowTracker:
    """
    Maker-checker approval for a registered document.

    pending_review -> approved | rejected. Both are terminal; a second decision
    raises InvalidStateError. Pending workflows never expire.
    """

    def __init__(
        self,
        registry: DocumentRegistry,
        audit: AuditLog,
        store: WorkflowStore | None = None,
        clock: Clock = utcnow,
        default_checker_email: str = "checker@bank.com",
        maker_user_id: str = "demo-user",
        checker_user_id: str = "checker-user",
    ):
        self._registry = registry
        self._audit = audit
        self._store = store if store is not None else InMemoryWorkflowStore()
        self._clock = clock
        self._default_checker_email = default_checker_email
        self._maker_user_id = maker_user_id
        self._checker_user_id = checker_user_id
        self._locks = KeyedLock()

    def start(
        self,
        document_id: str,
        checker_email: str | None = None,
        user_id: str | None = None,
    ) -> WorkflowRecord:
        if not self._registry.exists(document_id):
            logger.warning("workflow start refused: unknown document %s", document_id)
            raise NotFoundError("document", document_id)

        now = self._clock()
        assignee = checker_email or self._default_checker_email
        workflow = WorkflowRecord(
            id=str(uuid.uuid4()),
            document_id=document_id,
            checker_email=assignee,
            created_at=now,
            steps=[
                WorkflowStep(
                    step_id=StepId.MAKER_SUBMISSION,
                    status=StepStatus.COMPLETED,
                    completed_at=now,
                ),
                WorkflowStep(
                    step_id=StepId.CHECKER_REVIEW,
                    status=StepStatus.PENDING,
                    assigned_to=assignee,
                ),
            ],
        )
        self._store.add(workflow)
        logger.info("workflow %s started for document %s (checker=%s)", workflow.id, document_id, assignee)

        self._audit.record(
            AuditAction.WORKFLOW_START,
            user_id=user_id or self._maker_user_id,
            details="Started maker-checker workflow",
            document_id=document_id,
            workflow_id=workflow.id,
        )
        return workflow

    def get(self, workflow_id: str) -> WorkflowRecord:
        workflow = self._store.get(workflow_id)
        if workflow is None:
            raise NotFoundError("workflow", workflow_id)
        return workflow

    def decide(
        self,
        workflow_id: str,
        decision: Decision | str,
        comments: str | None = None,
        user_id: str | None = None,
    ) -> WorkflowRecord:
        with self._locks.hold(workflow_id):
            current = self.get(workflow_id)
            verdict = parse_decision(decision)
            if current.status != WorkflowStatus.PENDING_REVIEW:
                logger.warning("workflow %s already %s; decision refused", workflow_id, current.status.value)
                raise InvalidStateError(workflow_id, current.status.value)

            # build the decided record off to the side, then swap it in whole
            now = self._clock()
            decided = current.model_copy(deep=True)
            decided.status = _OUTCOME[verdict]
            decided.decision = verdict
            decided.comments = comments
            decided.decided_at = now
            review = decided.step(StepId.CHECKER_REVIEW)
            review.status = StepStatus.COMPLETED
            review.decision = verdict
            review.comments = comments
            review.completed_at = now
            self._store.save(decided)

            logger.info("workflow %s %s", workflow_id, decided.status.value)
            self._audit.record(
                AuditAction.WORKFLOW_DECISION,
                user_id=user_id or self._checker_user_id,
                details=f"Workflow {decided.status.value}: {comments or 'No comments'}",
                document_id=decided.document_id,
                workflow_id=workflow_id,
            )
        return decided
