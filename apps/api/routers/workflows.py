from fastapi import APIRouter, Depends, status

from apps.api.deps import get_tracker
from apps.api.schemas import DecisionIn, WorkflowStartIn
from domain.models import WorkflowRecord
from services.workflow.tracker import ApprovalWorkflowTracker

router = APIRouter(prefix="/workflows", tags=["workflows"])


@router.post("", response_model=WorkflowRecord, status_code=status.HTTP_201_CREATED)
def start_workflow(
    payload: WorkflowStartIn,
    tracker: ApprovalWorkflowTracker = Depends(get_tracker),
):
    return tracker.start(payload.document_id, checker_email=payload.checker_email)


@router.get("/{workflow_id}", response_model=WorkflowRecord)
def get_workflow(workflow_id: str, tracker: ApprovalWorkflowTracker = Depends(get_tracker)):
    return tracker.get(workflow_id)


@router.post("/{workflow_id}/decision", response_model=WorkflowRecord)
def decide_workflow(
    workflow_id: str,
    payload: DecisionIn,
    tracker: ApprovalWorkflowTracker = Depends(get_tracker),
):
    """
    Checker verdict: 'approve' or 'reject'. Terminal workflows answer 409.
    """
    return tracker.decide(workflow_id, payload.decision, comments=payload.comments)
