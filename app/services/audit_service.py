"""
Audit Trail Service
====================
Keeps an append-only trail of ledger commits and central price changes.

FEATURES:
---------
1. Log COMMIT when a wizard pass locks a transaction into the ledger
2. Log PRICE_UPDATE with old and new price master values
3. Filter history by action, entity and actor
4. Per-action statistics

USAGE:
------
from app.services.audit_service import AuditService

audit = AuditService(clock)
audit.log_commit(record, actor="PVCS001")
audit.log_price_update(commodity, old_data, new_data, actor="Admin")
"""

import threading
from typing import Any, Dict, List, Optional

from ..models.audit import AuditEntry
from ..utils.clock import Clock, SystemClock
from ..utils.constants import AuditAction
from ..utils.logger import logger


class AuditService:
    """Service for audit trail logging"""

    def __init__(self, clock: Optional[Clock] = None):
        self.clock = clock or SystemClock()
        self._entries: List[AuditEntry] = []
        self._lock = threading.Lock()

    def log_commit(self, record_id: str, record_data: Dict[str, Any], actor: str = "system") -> AuditEntry:
        """Log a ledger commit"""
        return self._log_action(
            action=AuditAction.COMMIT,
            entity="transaction",
            entity_id=record_id,
            actor=actor,
            old_data=None,
            new_data=record_data
        )

    def log_price_update(
        self,
        commodity: str,
        old_data: Optional[Dict[str, Any]],
        new_data: Dict[str, Any],
        actor: str
    ) -> AuditEntry:
        """Log a price master change with old and new values"""
        return self._log_action(
            action=AuditAction.PRICE_UPDATE,
            entity="commodity_price",
            entity_id=commodity,
            actor=actor,
            old_data=old_data,
            new_data=new_data
        )

    def _log_action(
        self,
        action: str,
        entity: str,
        entity_id: str,
        actor: str,
        old_data: Optional[Dict[str, Any]],
        new_data: Optional[Dict[str, Any]]
    ) -> AuditEntry:
        changed_fields = []
        if old_data and new_data:
            changed_fields = [key for key, value in new_data.items() if old_data.get(key) != value]

        with self._lock:
            entry = AuditEntry(
                sequence=len(self._entries) + 1,
                action=action,
                entity=entity,
                entity_id=entity_id,
                actor=actor,
                old_data=old_data,
                new_data=new_data,
                changed_fields=changed_fields,
                created_at=self.clock.now()
            )
            self._entries.append(entry)

        logger.debug(f"Audit {action} {entity}:{entity_id} by {actor}")
        return entry

    def get_history(
        self,
        action: Optional[str] = None,
        entity_id: Optional[str] = None,
        actor: Optional[str] = None,
        limit: int = 100,
        offset: int = 0
    ) -> List[AuditEntry]:
        """Get audit history, newest first"""
        with self._lock:
            entries = list(reversed(self._entries))

        if action:
            entries = [e for e in entries if e.action == action.upper()]
        if entity_id:
            entries = [e for e in entries if e.entity_id == entity_id]
        if actor:
            entries = [e for e in entries if e.actor == actor]

        return entries[offset:offset + limit]

    def get_stats(self) -> Dict[str, Any]:
        """Get audit statistics"""
        with self._lock:
            entries = list(self._entries)

        by_action: Dict[str, int] = {}
        for entry in entries:
            by_action[entry.action] = by_action.get(entry.action, 0) + 1

        return {"total": len(entries), "by_action": by_action}
