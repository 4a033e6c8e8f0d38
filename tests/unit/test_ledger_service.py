# tests/unit/test_ledger_service.py

from decimal import Decimal

import pytest

from app.models.transaction import FilterCriteria, SortField, SortOrder, SortSpec, TransactionKind
from app.services.ledger_service import LedgerService
from app.services.sequence_service import SequenceService
from app.utils.exceptions import DuplicateRecordError, NotFoundError
from tests.conftest import make_record


def test_append_puts_newest_first(ledger):
    ledger.append(make_record("PROC-000001"))
    ledger.append(make_record("PROC-000002"))
    assert ledger.ids() == ["PROC-000002", "PROC-000001"]
    assert ledger.count() == 2


def test_seed_records_load_oldest_first(price_book):
    ledger = LedgerService(price_book, [make_record("PROC-000101"), make_record("PROC-000102")])
    assert ledger.ids() == ["PROC-000102", "PROC-000101"]


def test_duplicate_id_rejected(ledger):
    ledger.append(make_record("PROC-000001"))
    with pytest.raises(DuplicateRecordError):
        ledger.append(make_record("PROC-000001", commodity="Onion"))
    assert ledger.count() == 1


def test_get_and_missing_record(ledger):
    record = ledger.append(make_record("PROC-000001"))
    assert ledger.get("PROC-000001") is record
    with pytest.raises(NotFoundError):
        ledger.get("PROC-999999")


def test_records_returns_snapshot(ledger):
    ledger.append(make_record("PROC-000001"))
    snapshot = ledger.records()
    snapshot.clear()
    assert ledger.count() == 1


def test_query_does_not_reorder_store(ledger):
    ledger.append(make_record("PROC-000001", quantity="10"))
    ledger.append(make_record("PROC-000002", quantity="20"))
    result = ledger.query(
        TransactionKind.PROCUREMENT,
        sort=SortSpec(field=SortField.TOTAL_AMOUNT, order=SortOrder.ASC)
    )
    assert [r.id for r in result] == ["PROC-000001", "PROC-000002"]
    assert ledger.ids() == ["PROC-000002", "PROC-000001"]


def test_empty_ledger_queries_to_empty_list(ledger):
    assert ledger.query(TransactionKind.SALES) == []
    assert ledger.summarize(TransactionKind.SALES).count == 0


def test_summarize_respects_filters(ledger):
    ledger.append(make_record("PROC-000001", commodity="Tomato", quantity="10"))
    ledger.append(make_record("PROC-000002", commodity="Onion", quantity="5", unit_price="34.00"))
    summary = ledger.summarize(TransactionKind.PROCUREMENT, FilterCriteria(commodity="Onion"))
    assert summary.count == 1
    assert summary.total_amount == Decimal("170")


def test_commodity_price_reads_price_book(ledger):
    assert ledger.commodity_price("Tomato") == Decimal("26.50")
    assert ledger.commodity_price("Cauliflower") == 0


def test_sequence_ids_are_per_kind():
    sequence = SequenceService()
    assert sequence.next_id(TransactionKind.PROCUREMENT) == "PROC-000001"
    assert sequence.next_id(TransactionKind.SALES) == "SALE-000001"
    assert sequence.next_id(TransactionKind.PROCUREMENT) == "PROC-000002"


def test_sequence_reserve_skips_existing_ids():
    sequence = SequenceService(width=4)
    sequence.reserve(["PROC-0101", "SALE-0007", "not-an-id", "OTHER-0500"])
    assert sequence.next_id(TransactionKind.PROCUREMENT) == "PROC-0102"
    assert sequence.next_id(TransactionKind.SALES) == "SALE-0008"
