"""
Ledger Service Module
=====================
Owned store of committed transactions for both Procurement (inbound) and
Sales (outbound) entries.

RULES:
-----
- Append-only: records are locked when committed and never edited
- Newest first: append() puts the record at the head of the ledger
- Ids are unique across the whole ledger

QUERIES:
-------
query() partitions by kind, filters and sorts without touching the stored
records. An empty result is a valid answer (count = 0).
"""

import threading
from decimal import Decimal
from typing import Iterable, List, Optional

from ..models.response import LedgerSummary
from ..models.transaction import FilterCriteria, SortSpec, TransactionKind, TransactionRecord
from ..utils.exceptions import DuplicateRecordError, NotFoundError
from ..utils.logger import logger
from . import ledger_query
from .pricing_service import PriceBook


class LedgerService:
    """In-memory transaction ledger"""

    def __init__(self, price_book: PriceBook, records: Optional[Iterable[TransactionRecord]] = None):
        self.price_book = price_book
        self._records: List[TransactionRecord] = []
        self._ids = set()
        self._lock = threading.Lock()
        # Seed records arrive oldest first
        for record in records or []:
            self.append(record)

    def append(self, record: TransactionRecord) -> TransactionRecord:
        with self._lock:
            if record.id in self._ids:
                raise DuplicateRecordError(f"Transaction id already in ledger: {record.id}")
            self._ids.add(record.id)
            self._records.insert(0, record)
        logger.info(
            f"Ledger append {record.id}: {record.kind.value} {record.commodity} "
            f"grade {record.grade.value} {record.quantity} {record.unit.value} = {record.total_amount}"
        )
        return record

    def records(self) -> List[TransactionRecord]:
        """Snapshot, newest first"""
        with self._lock:
            return list(self._records)

    def ids(self) -> List[str]:
        with self._lock:
            return [record.id for record in self._records]

    def get(self, record_id: str) -> TransactionRecord:
        with self._lock:
            for record in self._records:
                if record.id == record_id:
                    return record
        raise NotFoundError(f"Transaction not found: {record_id}")

    def count(self) -> int:
        with self._lock:
            return len(self._records)

    def query(
        self,
        kind: TransactionKind,
        criteria: Optional[FilterCriteria] = None,
        sort: Optional[SortSpec] = None
    ) -> List[TransactionRecord]:
        return ledger_query.project(self.records(), kind, criteria, sort)

    def summarize(self, kind: TransactionKind, criteria: Optional[FilterCriteria] = None) -> LedgerSummary:
        selected = ledger_query.project(self.records(), kind, criteria)
        return ledger_query.summarize(selected, kind)

    def commodity_price(self, commodity: str) -> Decimal:
        return self.price_book.get_base_price(commodity)
