"""
Ledger Controller
Handles filtered/sorted ledger views and report summaries
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError as PydanticValidationError

from ..dependencies import get_ledger_service
from ..models.response import LedgerQueryResponse
from ..models.transaction import FilterCriteria, SortField, SortOrder, SortSpec, TransactionKind
from ..services.ledger_service import LedgerService
from ..utils.constants import ErrorCode, FILTER_ALL
from ..utils.exceptions import ProcurementError
from ..views.json_view import JsonView

router = APIRouter()


def _criteria(
    date_from: Optional[date],
    date_to: Optional[date],
    commodity: str,
    grade: str,
    source_type: str
) -> FilterCriteria:
    try:
        return FilterCriteria(
            date_from=date_from,
            date_to=date_to,
            commodity=commodity,
            grade=grade,
            source_type=source_type
        )
    except PydanticValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=JsonView.error(ErrorCode.VALIDATION_ERROR, "Invalid filter", str(e))
        )


@router.get("")
async def get_ledger(
    kind: TransactionKind = TransactionKind.PROCUREMENT,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    commodity: str = FILTER_ALL,
    grade: str = FILTER_ALL,
    source_type: str = FILTER_ALL,
    sort: SortField = SortField.TIMESTAMP,
    order: SortOrder = SortOrder.DESC,
    ledger: LedgerService = Depends(get_ledger_service)
):
    """Ledger projection for one tab"""
    criteria = _criteria(date_from, date_to, commodity, grade, source_type)
    sort_spec = SortSpec(field=sort, order=order)
    records = ledger.query(kind, criteria, sort_spec)
    return LedgerQueryResponse(
        kind=kind,
        filters=criteria,
        sort=sort_spec,
        count=len(records),
        data=records
    )


@router.get("/summary")
async def get_summary(
    kind: TransactionKind = TransactionKind.PROCUREMENT,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    commodity: str = FILTER_ALL,
    grade: str = FILTER_ALL,
    source_type: str = FILTER_ALL,
    ledger: LedgerService = Depends(get_ledger_service)
):
    """Totals by commodity and grade"""
    criteria = _criteria(date_from, date_to, commodity, grade, source_type)
    return ledger.summarize(kind, criteria)


@router.get("/{record_id}")
async def get_record(record_id: str, ledger: LedgerService = Depends(get_ledger_service)):
    """Single locked transaction"""
    try:
        return ledger.get(record_id)
    except ProcurementError as e:
        raise JsonView.http_error(e)
