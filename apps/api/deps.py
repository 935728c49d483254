from functools import lru_cache

from fastapi import Depends

from core.config import settings
from services.audit.log import AuditLog
from services.container import CamServices, build_services
from services.documents.registry import DocumentRegistry
from services.workflow.tracker import ApprovalWorkflowTracker


def get_settings():
    """Provides application settings/config globally."""
    return settings


@lru_cache(maxsize=1)
def get_services() -> CamServices:
    """Process-wide service container; tests swap it via dependency_overrides."""
    return build_services(settings)


def get_registry(services: CamServices = Depends(get_services)) -> DocumentRegistry:
    return services.registry


def get_tracker(services: CamServices = Depends(get_services)) -> ApprovalWorkflowTracker:
    return services.tracker


def get_audit_log(services: CamServices = Depends(get_services)) -> AuditLog:
    return services.audit
