import re
from typing import Optional

from fastapi import APIRouter, UploadFile, File, Form, Depends, status

from apps.api.deps import get_registry
from apps.api.schemas import DocumentList
from domain.models import DocumentRecord, DocumentStatusView
from domain.value_objects import FileMetadata
from services.documents.registry import DocumentRegistry

router = APIRouter(prefix="/documents", tags=["documents"])

SAFE_NAME = re.compile(r"[^A-Za-z0-9._-]")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=DocumentRecord)
def upload_document(
    file: Optional[UploadFile] = File(None),  # noqa: B008  (FastAPI pattern)
    loan_amount: Optional[float] = Form(None, allow_inf_nan=False),  # noqa: B008
    registry: DocumentRegistry = Depends(get_registry),
):
    meta = None
    if file is not None:
        # bytes are only measured; extraction is mocked and nothing is persisted
        orig = SAFE_NAME.sub("_", (file.filename or "upload").split("/")[-1])
        size = 0
        while chunk := file.file.read(1024 * 1024):
            size += len(chunk)
        meta = FileMetadata(
            original_name=orig,
            size_bytes=size,
            content_type=file.content_type,
        )
    return registry.submit(meta, loan_amount=loan_amount)


@router.get("", response_model=DocumentList)
def list_documents(registry: DocumentRegistry = Depends(get_registry)):
    return DocumentList(documents=registry.list())


@router.get("/{document_id}/status", response_model=DocumentStatusView)
def document_status(document_id: str, registry: DocumentRegistry = Depends(get_registry)):
    return registry.get_status(document_id)
