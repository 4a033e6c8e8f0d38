"""
Audit Controller
Read access to the commit and price-change trail
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..dependencies import get_audit_service
from ..services.audit_service import AuditService
from ..views.json_view import JsonView

router = APIRouter()


@router.get("")
async def get_audit_history(
    action: Optional[str] = None,
    entity_id: Optional[str] = None,
    actor: Optional[str] = None,
    limit: int = Query(default=100, le=1000),
    offset: int = Query(default=0, ge=0),
    audit: AuditService = Depends(get_audit_service)
):
    """Audit entries, newest first"""
    entries = audit.get_history(action=action, entity_id=entity_id, actor=actor, limit=limit, offset=offset)
    return JsonView.listing(entries, limit=limit, offset=offset)


@router.get("/stats")
async def get_audit_stats(audit: AuditService = Depends(get_audit_service)):
    """Counts by action"""
    return audit.get_stats()
