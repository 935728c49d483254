from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from domain.models import AuditEntry, DocumentSummary


class DocumentList(BaseModel):
    documents: List[DocumentSummary]


class WorkflowStartIn(BaseModel):
    document_id: str = Field(min_length=1)
    checker_email: Optional[str] = None


class DecisionIn(BaseModel):
    # plain str: unknown values must reach the tracker and fail as InvalidDecisionError
    decision: str
    comments: Optional[str] = None


class AuditPage(BaseModel):
    audit_logs: List[AuditEntry]
    total: int


class Health(BaseModel):
    status: str
    service: str
    timestamp: datetime
