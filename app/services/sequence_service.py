"""
Sequence Service Module
Allocates ledger transaction ids, e.g. PROC-000102 / SALE-000001
"""

import threading
from typing import Dict, Iterable, Optional

from ..models.transaction import TransactionKind


class SequenceService:
    """Monotonic per-kind id counter, safe under concurrent calls"""

    def __init__(
        self,
        procurement_prefix: str = "PROC",
        sales_prefix: str = "SALE",
        width: int = 6
    ):
        self.prefixes: Dict[TransactionKind, str] = {
            TransactionKind.PROCUREMENT: procurement_prefix,
            TransactionKind.SALES: sales_prefix,
        }
        self.width = width
        self._counters: Dict[TransactionKind, int] = {kind: 0 for kind in TransactionKind}
        self._lock = threading.Lock()

    def next_id(self, kind: TransactionKind) -> str:
        with self._lock:
            self._counters[kind] += 1
            value = self._counters[kind]
        return f"{self.prefixes[kind]}-{value:0{self.width}d}"

    def reserve(self, existing_ids: Iterable[str]) -> None:
        """Move counters past ids that already exist (seed records)"""
        with self._lock:
            for existing_id in existing_ids:
                kind, number = self._parse(existing_id)
                if kind is not None and number > self._counters[kind]:
                    self._counters[kind] = number

    def _parse(self, existing_id: str):
        prefix, _, number = existing_id.rpartition("-")
        kind: Optional[TransactionKind] = None
        for candidate, candidate_prefix in self.prefixes.items():
            if candidate_prefix == prefix:
                kind = candidate
        if kind is None or not number.isdigit():
            return None, 0
        return kind, int(number)
