"""
Ledger Query Module
Partition, filter and sort projections over ledger records.
All functions return new lists and leave their input untouched.
"""

from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional

from ..models.response import GroupTotals, LedgerSummary
from ..models.transaction import (
    FilterCriteria,
    SortField,
    SortOrder,
    SortSpec,
    TransactionKind,
    TransactionRecord,
)
from ..utils.constants import FILTER_ALL


def partition(records: Iterable[TransactionRecord], kind: TransactionKind) -> List[TransactionRecord]:
    return [record for record in records if record.kind == kind]


def matches(record: TransactionRecord, criteria: FilterCriteria) -> bool:
    """All set conditions AND-ed together"""
    if criteria.date_from is not None:
        if record.effective_date is None or record.effective_date < criteria.date_from:
            return False
    if criteria.date_to is not None:
        if record.effective_date is None or record.effective_date > criteria.date_to:
            return False
    if criteria.commodity != FILTER_ALL and record.commodity != criteria.commodity:
        return False
    if criteria.grade != FILTER_ALL and record.grade.value != criteria.grade:
        return False
    if criteria.source_type != FILTER_ALL and record.source_type.value != criteria.source_type:
        return False
    return True


def apply_filters(records: Iterable[TransactionRecord], criteria: FilterCriteria) -> List[TransactionRecord]:
    return [record for record in records if matches(record, criteria)]


SORT_KEYS: Dict[SortField, Callable[[TransactionRecord], object]] = {
    SortField.TIMESTAMP: lambda r: r.created_at.isoformat().lower(),
    SortField.TOTAL_AMOUNT: lambda r: r.total_amount,
    SortField.STATUS: lambda r: r.status.value.lower(),
    SortField.ID: lambda r: r.id.lower(),
}


def sort_records(records: Iterable[TransactionRecord], sort: SortSpec) -> List[TransactionRecord]:
    """Stable sort; ties keep their incoming order in both directions"""
    return sorted(records, key=SORT_KEYS[sort.field], reverse=sort.order == SortOrder.DESC)


def project(
    records: Iterable[TransactionRecord],
    kind: TransactionKind,
    criteria: Optional[FilterCriteria] = None,
    sort: Optional[SortSpec] = None
) -> List[TransactionRecord]:
    """partition -> filter -> sort"""
    selected = partition(records, kind)
    selected = apply_filters(selected, criteria or FilterCriteria())
    return sort_records(selected, sort or SortSpec())


def summarize(records: Iterable[TransactionRecord], kind: TransactionKind) -> LedgerSummary:
    """Totals for the report screens, grouped by commodity and grade"""
    by_commodity: Dict[str, GroupTotals] = {}
    by_grade: Dict[str, GroupTotals] = {}
    count = 0
    quantity_kg = Decimal("0")
    total_amount = Decimal("0")

    for record in records:
        count += 1
        quantity_kg += record.quantity_kg
        total_amount += record.total_amount
        for groups, key in ((by_commodity, record.commodity), (by_grade, record.grade.value)):
            totals = groups.setdefault(key, GroupTotals())
            totals.count += 1
            totals.quantity_kg += record.quantity_kg
            totals.total_amount += record.total_amount

    return LedgerSummary(
        kind=kind,
        count=count,
        quantity_kg=quantity_kg,
        total_amount=total_amount,
        by_commodity=by_commodity,
        by_grade=by_grade
    )
