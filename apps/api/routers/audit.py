from typing import Optional

from fastapi import APIRouter, Depends, Query

from apps.api.deps import get_audit_log, get_settings
from apps.api.schemas import AuditPage
from services.audit.log import AuditLog

router = APIRouter(prefix="/audit", tags=["audit"])


@router.get("", response_model=AuditPage)
def query_audit(
    action: Optional[str] = None,
    user_id: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=0),  # noqa: B008
    audit: AuditLog = Depends(get_audit_log),
    cfg=Depends(get_settings),
):
    entries = audit.query(
        action=action,
        user_id=user_id,
        limit=cfg.AUDIT_QUERY_LIMIT if limit is None else limit,
    )
    return AuditPage(audit_logs=entries, total=audit.count())
