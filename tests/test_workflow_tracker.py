"""Tests for the maker-checker approval workflow."""

import threading

import pytest

from domain.errors import InvalidDecisionError, InvalidStateError, NotFoundError
from domain.models import AuditAction, Decision, StepId, StepStatus, WorkflowStatus


@pytest.fixture
def document(registry, cam_file):
    return registry.submit(cam_file)


def test_start_creates_two_steps(tracker, audit, document, clock):
    workflow = tracker.start(document.id)

    assert workflow.document_id == document.id
    assert workflow.status == WorkflowStatus.PENDING_REVIEW
    assert workflow.checker_email == "checker@bank.com"
    assert workflow.decision is None
    assert workflow.comments is None
    assert workflow.decided_at is None

    maker, checker = workflow.steps
    assert maker.step_id == StepId.MAKER_SUBMISSION
    assert maker.status == StepStatus.COMPLETED
    assert maker.completed_at == clock.now
    assert checker.step_id == StepId.CHECKER_REVIEW
    assert checker.status == StepStatus.PENDING
    assert checker.assigned_to == "checker@bank.com"

    [entry] = audit.query(action=AuditAction.WORKFLOW_START)
    assert entry.workflow_id == workflow.id
    assert entry.document_id == document.id


def test_start_with_explicit_checker(tracker, document):
    workflow = tracker.start(document.id, checker_email="risk@bank.com")
    assert workflow.checker_email == "risk@bank.com"
    assert workflow.step(StepId.CHECKER_REVIEW).assigned_to == "risk@bank.com"


def test_start_unknown_document_leaves_no_trace(tracker, audit):
    with pytest.raises(NotFoundError) as exc:
        tracker.start("no-such-doc")
    assert exc.value.kind == "document"
    assert audit.count() == 0
    assert audit.query(action="WORKFLOW_START") == []


def test_approve_is_atomic(tracker, audit, document, clock):
    workflow = tracker.start(document.id)
    clock.advance(minutes=3)

    decided = tracker.decide(workflow.id, "approve", comments="looks good")

    for view in (decided, tracker.get(workflow.id)):
        assert view.status == WorkflowStatus.APPROVED
        review = view.step(StepId.CHECKER_REVIEW)
        assert review.status == StepStatus.COMPLETED
        assert review.decision == Decision.APPROVE
        assert review.comments == "looks good"
        assert review.completed_at == view.decided_at == clock.now
        assert view.decision == Decision.APPROVE

    [entry] = audit.query(action=AuditAction.WORKFLOW_DECISION)
    assert entry.user_id == "checker-user"
    assert entry.details == "Workflow approved: looks good"


def test_reject_without_comments(tracker, audit, document):
    workflow = tracker.start(document.id)
    decided = tracker.decide(workflow.id, Decision.REJECT)

    assert decided.status == WorkflowStatus.REJECTED
    assert decided.comments is None
    [entry] = audit.query(action=AuditAction.WORKFLOW_DECISION)
    assert entry.details == "Workflow rejected: No comments"


def test_decide_unknown_workflow(tracker):
    with pytest.raises(NotFoundError) as exc:
        tracker.decide("nope", "approve")
    assert exc.value.kind == "workflow"


@pytest.mark.parametrize("value", ["approved", "APPROVE", "", "maybe"])
def test_invalid_decision_changes_nothing(tracker, audit, document, value):
    workflow = tracker.start(document.id)
    with pytest.raises(InvalidDecisionError):
        tracker.decide(workflow.id, value)

    assert tracker.get(workflow.id).status == WorkflowStatus.PENDING_REVIEW
    assert audit.query(action=AuditAction.WORKFLOW_DECISION) == []


def test_second_decision_is_refused(tracker, audit, document):
    workflow = tracker.start(document.id)
    tracker.decide(workflow.id, "reject", comments="first")

    with pytest.raises(InvalidStateError):
        tracker.decide(workflow.id, "approve", comments="second")

    current = tracker.get(workflow.id)
    assert current.status == WorkflowStatus.REJECTED
    assert current.comments == "first"
    assert len(audit.query(action=AuditAction.WORKFLOW_DECISION)) == 1


def test_returned_records_are_detached(tracker, document):
    workflow = tracker.start(document.id)
    workflow.status = WorkflowStatus.APPROVED
    assert tracker.get(workflow.id).status == WorkflowStatus.PENDING_REVIEW


def test_end_to_end_reject(registry, tracker, audit, cam_file, clock):
    document = registry.submit(cam_file)
    clock.advance(minutes=5)
    view = registry.get_status(document.id)
    assert [f.form_id for f in view.matched_forms] == ["FORM_STANDARD_COMMERCIAL"]

    workflow = tracker.start(document.id)
    clock.advance(minutes=1)
    final = tracker.decide(workflow.id, "reject", comments="insufficient collateral")
    assert final.status == WorkflowStatus.REJECTED

    [upload] = audit.query(action=AuditAction.DOCUMENT_UPLOAD)
    [decision] = audit.query(action=AuditAction.WORKFLOW_DECISION)
    assert upload.document_id == decision.document_id == document.id
    assert decision.workflow_id == workflow.id
    assert "rejected" in decision.details
    assert "insufficient collateral" in decision.details


def test_concurrent_decisions_apply_once(tracker, audit, document):
    workflow = tracker.start(document.id)
    barrier = threading.Barrier(8)
    outcomes = []

    def checker(verdict):
        barrier.wait()
        try:
            tracker.decide(workflow.id, verdict, comments=verdict)
            outcomes.append("ok")
        except InvalidStateError:
            outcomes.append("conflict")

    threads = [
        threading.Thread(target=checker, args=("approve" if i % 2 else "reject",)) for i in range(8)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(outcomes) == ["conflict"] * 7 + ["ok"]
    [entry] = audit.query(action=AuditAction.WORKFLOW_DECISION)
    final = tracker.get(workflow.id)
    assert final.step(StepId.CHECKER_REVIEW).decision == final.decision
    assert entry.details.endswith(final.comments)
