from datetime import datetime
from enum import Enum
from typing import Optional, List

from pydantic import BaseModel, ConfigDict, Field


class DocumentStatus(str, Enum):
    PROCESSING = "processing"
    COMPLETED = "completed"


class WorkflowStatus(str, Enum):
    PENDING_REVIEW = "pending_review"
    APPROVED = "approved"
    REJECTED = "rejected"


class StepStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class StepId(str, Enum):
    MAKER_SUBMISSION = "maker_submission"
    CHECKER_REVIEW = "checker_review"


class Decision(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"


class AuditAction(str, Enum):
    DOCUMENT_UPLOAD = "DOCUMENT_UPLOAD"
    WORKFLOW_START = "WORKFLOW_START"
    WORKFLOW_DECISION = "WORKFLOW_DECISION"


class ExtractedFields(BaseModel):
    borrower_name: str
    loan_amount: float = Field(allow_inf_nan=False)
    loan_term: int  # months
    interest_rate: float  # percent
    loan_type: str
    jurisdiction: str
    collateral: str


class ValidationResult(BaseModel):
    is_valid: bool = True
    errors: List[str] = []
    warnings: List[str] = []


class FormReference(BaseModel):
    model_config = ConfigDict(frozen=True)

    form_id: str
    form_name: str
    template_path: str
    jurisdiction: str
    priority: int  # 1 = highest precedence
    required_approvals: tuple[str, ...]


class DocumentRecord(BaseModel):
    id: str
    original_name: str
    size_bytes: int
    content_type: Optional[str] = None
    uploaded_at: datetime
    extracted_fields: ExtractedFields
    confidence: float
    validation: ValidationResult = Field(default_factory=ValidationResult)
    matched_forms: List[FormReference] = []


class DocumentStatusView(DocumentRecord):
    status: DocumentStatus
    progress: int


class DocumentSummary(BaseModel):
    id: str
    filename: str
    status: DocumentStatus
    uploaded_at: datetime
    borrower_name: str
    loan_amount: float


class WorkflowStep(BaseModel):
    step_id: StepId
    status: StepStatus
    assigned_to: Optional[str] = None
    decision: Optional[Decision] = None
    comments: Optional[str] = None
    completed_at: Optional[datetime] = None


class WorkflowRecord(BaseModel):
    id: str
    document_id: str
    checker_email: str
    status: WorkflowStatus = WorkflowStatus.PENDING_REVIEW
    created_at: datetime
    steps: List[WorkflowStep]
    decision: Optional[Decision] = None
    comments: Optional[str] = None
    decided_at: Optional[datetime] = None

    def step(self, step_id: StepId) -> WorkflowStep:
        return next(s for s in self.steps if s.step_id == step_id)


class AuditEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    sequence: int = 0
    timestamp: datetime
    action: AuditAction
    user_id: str
    details: str
    document_id: Optional[str] = None
    workflow_id: Optional[str] = None
