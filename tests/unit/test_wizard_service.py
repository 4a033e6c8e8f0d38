# tests/unit/test_wizard_service.py

from datetime import date
from decimal import Decimal

import pytest

from app.models.transaction import (
    Grade,
    RecordStatus,
    SourceType,
    TransactionKind,
    Unit,
    WizardStage,
)
from app.services.wizard_service import TransactionWizard, WizardService
from app.utils.constants import AuditAction
from app.utils.exceptions import (
    InvalidStageError,
    TransitionBlockedError,
    UnknownCommodityError,
    ValidationError,
)


def walk_to_review(wizard, **fields):
    wizard.start()
    wizard.advance()
    wizard.update(**fields)
    wizard.advance()
    assert wizard.stage == WizardStage.REVIEW


def test_initial_state_is_list(wizard):
    state = wizard.state()
    assert state.stage == WizardStage.LIST
    assert state.step_number == 0
    assert state.kind == TransactionKind.PROCUREMENT
    assert state.can_advance is False


def test_start_resets_draft_with_defaults(wizard):
    state = wizard.start()
    assert state.stage == WizardStage.INITIATION
    assert state.step_number == 1
    assert state.draft.source_type == SourceType.FARMER
    assert state.draft.location == "Patna Central PVCS"
    assert state.draft.effective_date == date(2026, 1, 11)
    assert state.draft.counterparty_name == ""


def test_tomato_grade_b_entry_commits_expected_record(wizard, ledger, audit):
    walk_to_review(
        wizard,
        counterparty_name="Ramesh Mahto",
        commodity="Tomato",
        grade="B",
        quantity="250",
        unit="Kg"
    )
    state = wizard.state()
    assert state.unit_price == Decimal("21.20")
    assert state.total_amount == Decimal("5300")

    record = wizard.confirm()

    assert record.id == "PROC-000001"
    assert record.status == RecordStatus.LOCKED
    assert record.kind == TransactionKind.PROCUREMENT
    assert record.unit_price == Decimal("21.20")
    assert record.total_amount == Decimal("5300")
    assert ledger.records()[0] == record
    assert wizard.stage == WizardStage.LIST
    assert wizard.last_committed_id == record.id

    commits = audit.get_history(action=AuditAction.COMMIT)
    assert [entry.entity_id for entry in commits] == [record.id]
    assert commits[0].actor == "PVCS001"


def test_capture_blocked_while_counterparty_blank(wizard):
    wizard.start()
    wizard.advance()
    assert wizard.can_advance is False

    with pytest.raises(TransitionBlockedError):
        wizard.advance()
    assert wizard.stage == WizardStage.CAPTURE

    wizard.update(counterparty_name="   ")
    with pytest.raises(TransitionBlockedError):
        wizard.advance()


def test_initiation_blocked_without_effective_date(wizard):
    wizard.start()
    wizard.draft.effective_date = None
    assert wizard.can_advance is False
    with pytest.raises(TransitionBlockedError):
        wizard.advance()
    assert wizard.stage == WizardStage.INITIATION


def test_back_keeps_draft(wizard):
    walk_to_review(wizard, counterparty_name="Sita Devi", quantity="40")
    wizard.back()
    assert wizard.stage == WizardStage.CAPTURE
    wizard.back()
    assert wizard.stage == WizardStage.INITIATION
    assert wizard.draft.counterparty_name == "Sita Devi"
    assert wizard.draft.quantity == Decimal("40")
    wizard.back()
    assert wizard.stage == WizardStage.LIST


def test_back_from_list_is_invalid(wizard):
    with pytest.raises(InvalidStageError):
        wizard.back()


def test_cancel_discards_draft_without_commit(wizard, ledger):
    walk_to_review(wizard, counterparty_name="Sita Devi")
    wizard.cancel()
    assert wizard.stage == WizardStage.LIST
    assert wizard.draft.counterparty_name == ""
    assert ledger.count() == 0


def test_confirm_outside_review_is_invalid(wizard, ledger):
    wizard.start()
    with pytest.raises(InvalidStageError):
        wizard.confirm()
    assert ledger.count() == 0


def test_advance_from_review_is_invalid(wizard):
    walk_to_review(wizard, counterparty_name="Sita Devi")
    with pytest.raises(InvalidStageError):
        wizard.advance()


def test_draft_read_only_at_review(wizard):
    walk_to_review(wizard, counterparty_name="Sita Devi")
    with pytest.raises(InvalidStageError):
        wizard.update(quantity="10")


def test_cannot_start_twice(wizard):
    wizard.start()
    with pytest.raises(InvalidStageError):
        wizard.start()


def test_source_type_must_fit_kind(wizard):
    wizard.start()
    with pytest.raises(ValidationError):
        wizard.update(source_type=SourceType.UNION)
    wizard.update(source_type=SourceType.AGGREGATOR)
    assert wizard.draft.source_type == SourceType.AGGREGATOR


def test_grade_d_not_selectable(wizard):
    wizard.start()
    with pytest.raises(ValidationError):
        wizard.update(grade="D")
    assert wizard.draft.grade == Grade.A


def test_unknown_field_rejected(wizard):
    wizard.start()
    with pytest.raises(ValidationError):
        wizard.update(price="100")


def test_negative_quantity_rejected(wizard):
    wizard.start()
    with pytest.raises(ValidationError):
        wizard.update(quantity="-5")
    assert wizard.draft.quantity == Decimal("0")


def test_logistics_rejected_for_procurement(wizard):
    wizard.start()
    with pytest.raises(ValidationError):
        wizard.update(vehicle_number="BR01AB1234")


def test_sales_entry_keeps_logistics(wizard, ledger):
    wizard.switch_mode(TransactionKind.SALES)
    state = wizard.start()
    assert state.draft.source_type == SourceType.VENDOR

    wizard.advance()
    wizard.update(
        source_type=SourceType.UNION,
        counterparty_name="Patna District Union",
        commodity="Onion",
        grade="A",
        quantity="2",
        unit=Unit.QUINTAL,
        vehicle_number="BR01AB1234",
        driver_name="Raju",
        driver_contact="9876543210"
    )
    wizard.advance()
    record = wizard.confirm()

    assert record.id == "SALE-000001"
    assert record.kind == TransactionKind.SALES
    assert record.unit_price == Decimal("3400")
    assert record.total_amount == Decimal("6800")
    assert record.vehicle_number == "BR01AB1234"
    assert ledger.query(TransactionKind.PROCUREMENT) == []


def test_mode_switch_only_at_list(wizard):
    wizard.start()
    with pytest.raises(InvalidStageError):
        wizard.switch_mode(TransactionKind.SALES)
    assert wizard.kind == TransactionKind.PROCUREMENT

    wizard.cancel()
    state = wizard.switch_mode("Sales")
    assert state.kind == TransactionKind.SALES


def test_start_with_kind_switches_mode(wizard):
    state = wizard.start(TransactionKind.SALES)
    assert state.kind == TransactionKind.SALES
    assert state.draft.source_type == SourceType.VENDOR


def test_unknown_commodity_commits_at_zero_when_permissive(wizard):
    walk_to_review(wizard, counterparty_name="Sita Devi", commodity="Cauliflower", quantity="10")
    record = wizard.confirm()
    assert record.unit_price == 0
    assert record.total_amount == 0


def test_strict_mode_rejects_unknown_commodity(ledger, sequence, clock):
    wizard = TransactionWizard(ledger, sequence, clock=clock, strict_validation=True)
    walk_to_review(wizard, counterparty_name="Sita Devi", commodity="Cauliflower", quantity="10")
    with pytest.raises(UnknownCommodityError):
        wizard.confirm()
    assert wizard.stage == WizardStage.REVIEW
    assert ledger.count() == 0


def test_strict_mode_rejects_zero_quantity(ledger, sequence, clock):
    wizard = TransactionWizard(ledger, sequence, clock=clock, strict_validation=True)
    walk_to_review(wizard, counterparty_name="Sita Devi")
    with pytest.raises(ValidationError):
        wizard.confirm()


def test_successive_commits_get_distinct_ids_newest_first(wizard, ledger):
    first_ids = []
    for name in ("Sita Devi", "Manoj Paswan"):
        walk_to_review(wizard, counterparty_name=name, quantity="5")
        first_ids.append(wizard.confirm().id)

    assert first_ids == ["PROC-000001", "PROC-000002"]
    assert ledger.ids() == ["PROC-000002", "PROC-000001"]


def test_wizard_service_keeps_one_wizard_per_session(ledger, sequence, clock):
    service = WizardService(ledger, sequence, clock=clock)
    first = service.get("desk-1")
    assert service.get("desk-1") is first
    assert service.get("desk-2") is not first
    assert first.actor == "desk-1"
    assert service.session_count() == 2

    service.discard("desk-1")
    assert service.session_count() == 1
    assert service.get("desk-1") is not first
