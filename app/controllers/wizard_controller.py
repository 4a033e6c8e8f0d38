"""
Wizard Controller
=================
API endpoints for the three-step transaction entry flow.

ENDPOINTS:
---------
GET    /api/wizard/{session}          - Current stage, draft and live price
POST   /api/wizard/{session}/mode     - Choose Procurement or Sales (List only)
POST   /api/wizard/{session}/start    - New entry (List -> Initiation)
PATCH  /api/wizard/{session}/draft    - Edit draft fields
POST   /api/wizard/{session}/advance  - Continue to next step
POST   /api/wizard/{session}/back     - Previous step, draft kept
POST   /api/wizard/{session}/confirm  - Approve, lock and add to ledger
POST   /api/wizard/{session}/cancel   - Discard draft
DELETE /api/wizard/{session}          - Drop the session

USAGE:
-----
POST  /api/wizard/pvcs-1/start   {"kind": "Procurement"}
PATCH /api/wizard/pvcs-1/draft   {"effective_date": "2026-01-11"}
POST  /api/wizard/pvcs-1/advance
PATCH /api/wizard/pvcs-1/draft   {"counterparty_name": "Sunil Mahto", "grade": "B", "quantity": 250}
POST  /api/wizard/pvcs-1/advance
POST  /api/wizard/pvcs-1/confirm
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..dependencies import get_wizard_service
from ..models.transaction import DraftUpdate, TransactionKind
from ..services.wizard_service import WizardService
from ..utils.exceptions import ProcurementError
from ..views.json_view import JsonView

router = APIRouter()


class ModeRequest(BaseModel):
    kind: Optional[TransactionKind] = None


@router.get("/{session_id}")
async def get_state(session_id: str, wizards: WizardService = Depends(get_wizard_service)):
    """Current wizard state"""
    return wizards.get(session_id).state()


@router.post("/{session_id}/mode")
async def switch_mode(
    session_id: str,
    request: ModeRequest,
    wizards: WizardService = Depends(get_wizard_service)
):
    """Select the tab the next entry will use"""
    if request.kind is None:
        return wizards.get(session_id).state()
    try:
        return wizards.get(session_id).switch_mode(request.kind)
    except ProcurementError as e:
        raise JsonView.http_error(e)


@router.post("/{session_id}/start")
async def start_entry(
    session_id: str,
    request: Optional[ModeRequest] = None,
    wizards: WizardService = Depends(get_wizard_service)
):
    """Open a new entry"""
    kind = request.kind if request else None
    try:
        return wizards.get(session_id).start(kind)
    except ProcurementError as e:
        raise JsonView.http_error(e)


@router.patch("/{session_id}/draft")
async def update_draft(
    session_id: str,
    update: DraftUpdate,
    wizards: WizardService = Depends(get_wizard_service)
):
    """Edit draft fields"""
    try:
        return wizards.get(session_id).update(**update.model_dump(exclude_none=True))
    except ProcurementError as e:
        raise JsonView.http_error(e)


@router.post("/{session_id}/advance")
async def advance(session_id: str, wizards: WizardService = Depends(get_wizard_service)):
    """Continue to the next step"""
    try:
        return wizards.get(session_id).advance()
    except ProcurementError as e:
        raise JsonView.http_error(e)


@router.post("/{session_id}/back")
async def back(session_id: str, wizards: WizardService = Depends(get_wizard_service)):
    """Return to the previous step"""
    try:
        return wizards.get(session_id).back()
    except ProcurementError as e:
        raise JsonView.http_error(e)


@router.post("/{session_id}/confirm")
async def confirm(session_id: str, wizards: WizardService = Depends(get_wizard_service)):
    """Approve the reviewed entry"""
    try:
        record = wizards.get(session_id).confirm()
    except ProcurementError as e:
        raise JsonView.http_error(e)
    return JsonView.success(f"Transaction {record.id} locked", record.model_dump(mode="json"))


@router.post("/{session_id}/cancel")
async def cancel(session_id: str, wizards: WizardService = Depends(get_wizard_service)):
    """Discard the draft"""
    return wizards.get(session_id).cancel()


@router.delete("/{session_id}")
async def discard_session(session_id: str, wizards: WizardService = Depends(get_wizard_service)):
    """Forget this session's wizard"""
    wizards.discard(session_id)
    return {"status": "success", "message": f"Session {session_id} discarded"}
