# tests/conftest.py

from datetime import date, datetime
from decimal import Decimal

import pytest

from app.config import AppConfig, LedgerConfig
from app.models.transaction import (
    Grade,
    SourceType,
    TransactionKind,
    TransactionRecord,
    Unit,
)
from app.services.audit_service import AuditService
from app.services.ledger_service import LedgerService
from app.services.pricing_service import PriceBook
from app.services.sequence_service import SequenceService
from app.services.wizard_service import TransactionWizard
from app.utils.clock import FixedClock

SEED_PRICES = {"Tomato": "26.50", "Potato": "15.20", "Onion": "34.00", "Brinjal": "21.00"}


@pytest.fixture
def clock():
    return FixedClock(datetime(2026, 1, 11, 9, 0, 0))


@pytest.fixture
def audit(clock):
    return AuditService(clock)


@pytest.fixture
def price_book(clock, audit):
    book = PriceBook(clock, audit)
    book.seed(SEED_PRICES)
    return book


@pytest.fixture
def ledger(price_book):
    return LedgerService(price_book)


@pytest.fixture
def sequence():
    return SequenceService()


@pytest.fixture
def wizard(ledger, sequence, clock, audit):
    return TransactionWizard(
        ledger,
        sequence,
        clock=clock,
        audit=audit,
        default_location="Patna Central PVCS",
        actor="PVCS001"
    )


@pytest.fixture
def app_config():
    return AppConfig(ledger=LedgerConfig(seed_demo_records=False))


def make_record(
    record_id: str,
    kind: TransactionKind = TransactionKind.PROCUREMENT,
    source_type: SourceType = SourceType.FARMER,
    commodity: str = "Tomato",
    grade: Grade = Grade.A,
    quantity: str = "100",
    unit: Unit = Unit.KILOGRAM,
    unit_price: str = "26.50",
    effective_date: date = date(2026, 1, 11),
    created_at: datetime = datetime(2026, 1, 11, 10, 0)
) -> TransactionRecord:
    """Build a ledger record directly, bypassing the wizard"""
    qty = Decimal(quantity)
    price = Decimal(unit_price)
    return TransactionRecord(
        id=record_id,
        kind=kind,
        source_type=source_type,
        counterparty_name="Sunil Mahto",
        commodity=commodity,
        grade=grade,
        quantity=qty,
        unit=unit,
        effective_date=effective_date,
        unit_price=price,
        total_amount=price * qty,
        created_at=created_at
    )
