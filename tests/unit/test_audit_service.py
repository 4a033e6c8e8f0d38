# tests/unit/test_audit_service.py

from app.services.audit_service import AuditService
from app.utils.constants import AuditAction


def test_history_is_newest_first(clock):
    audit = AuditService(clock)
    audit.log_commit("PROC-000001", {"id": "PROC-000001"}, actor="PVCS001")
    audit.log_commit("PROC-000002", {"id": "PROC-000002"}, actor="PVCS002")

    history = audit.get_history()
    assert [entry.entity_id for entry in history] == ["PROC-000002", "PROC-000001"]
    assert history[0].sequence == 2
    assert history[0].created_at > history[1].created_at


def test_price_update_records_changed_fields(clock):
    audit = AuditService(clock)
    entry = audit.log_price_update(
        "Tomato",
        old_data={"commodity": "Tomato", "base_price_per_kg": "26.50"},
        new_data={"commodity": "Tomato", "base_price_per_kg": "28.00"},
        actor="Admin"
    )
    assert entry.action == AuditAction.PRICE_UPDATE
    assert entry.changed_fields == ["base_price_per_kg"]


def test_new_commodity_has_no_changed_fields(clock):
    audit = AuditService(clock)
    entry = audit.log_price_update("Cauliflower", None, {"base_price_per_kg": "18.00"}, actor="Admin")
    assert entry.old_data is None
    assert entry.changed_fields == []


def test_history_filters_and_paging(clock):
    audit = AuditService(clock)
    for index in range(5):
        audit.log_commit(f"PROC-00000{index}", {}, actor="PVCS001" if index % 2 else "PVCS002")
    audit.log_price_update("Tomato", None, {}, actor="Admin")

    assert len(audit.get_history(action="commit")) == 5
    assert len(audit.get_history(actor="PVCS001")) == 2
    assert [e.entity_id for e in audit.get_history(entity_id="Tomato")] == ["Tomato"]
    page = audit.get_history(action=AuditAction.COMMIT, limit=2, offset=1)
    assert [e.entity_id for e in page] == ["PROC-000003", "PROC-000002"]


def test_stats_count_by_action(clock):
    audit = AuditService(clock)
    audit.log_commit("PROC-000001", {})
    audit.log_price_update("Tomato", None, {}, actor="Admin")
    audit.log_price_update("Onion", None, {}, actor="Admin")

    stats = audit.get_stats()
    assert stats["total"] == 3
    assert stats["by_action"] == {AuditAction.COMMIT: 1, AuditAction.PRICE_UPDATE: 2}
