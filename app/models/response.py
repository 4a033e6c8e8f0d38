"""
Response Models
Pydantic models for API responses
"""

from decimal import Decimal
from typing import Dict, List
from pydantic import BaseModel

from .transaction import FilterCriteria, SortSpec, TransactionKind, TransactionRecord


class LedgerQueryResponse(BaseModel):
    kind: TransactionKind
    filters: FilterCriteria
    sort: SortSpec
    count: int
    data: List[TransactionRecord]


class GroupTotals(BaseModel):
    count: int = 0
    quantity_kg: Decimal = Decimal("0")
    total_amount: Decimal = Decimal("0")


class LedgerSummary(BaseModel):
    kind: TransactionKind
    count: int
    quantity_kg: Decimal
    total_amount: Decimal
    by_commodity: Dict[str, GroupTotals]
    by_grade: Dict[str, GroupTotals]
