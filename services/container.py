from __future__ import annotations

from dataclasses import dataclass

from core.clock import Clock, utcnow
from core.config import Settings, settings as default_settings
from services.audit.log import AuditLog
from services.documents.registry import DocumentRegistry
from services.processing.progress import ElapsedTimeProgress, ProgressEstimator
from services.workflow.tracker import ApprovalWorkflowTracker


@dataclass
class CamServices:
    audit: AuditLog
    registry: DocumentRegistry
    tracker: ApprovalWorkflowTracker


def build_services(
    cfg: Settings | None = None,
    clock: Clock = utcnow,
    progress: ProgressEstimator | None = None,
) -> CamServices:
    """Wire the process-wide audit log, registry and tracker (one shared audit log)."""
    cfg = cfg or default_settings
    audit = AuditLog(clock=clock)
    registry = DocumentRegistry(
        audit,
        progress=progress or ElapsedTimeProgress(cfg.PROGRESS_RATE_PER_MIN),
        clock=clock,
        default_user_id=cfg.MAKER_USER_ID,
    )
    tracker = ApprovalWorkflowTracker(
        registry,
        audit,
        clock=clock,
        default_checker_email=cfg.DEFAULT_CHECKER_EMAIL,
        maker_user_id=cfg.MAKER_USER_ID,
        checker_user_id=cfg.CHECKER_USER_ID,
    )
    return CamServices(audit=audit, registry=registry, tracker=tracker)
