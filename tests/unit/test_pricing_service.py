# tests/unit/test_pricing_service.py

from decimal import Decimal

import pytest

from app.models.transaction import Grade, Unit
from app.services.pricing_service import (
    PriceBook,
    calculate_unit_price,
    grade_multiplier,
    quote,
)
from app.utils.constants import AuditAction
from app.utils.exceptions import NotFoundError, ValidationError


@pytest.mark.parametrize("grade, expected", [
    (Grade.A, Decimal("1.0")),
    (Grade.B, Decimal("0.8")),
    (Grade.C, Decimal("0.6")),
    ("B", Decimal("0.8")),
])
def test_grade_multipliers(grade, expected):
    assert grade_multiplier(grade) == expected


@pytest.mark.parametrize("grade", [Grade.D, "D", "E", "", None, "a"])
def test_unrecognised_grade_has_zero_multiplier(grade):
    assert grade_multiplier(grade) == 0


@pytest.mark.parametrize("grade, expected", [
    (Grade.A, Decimal("26.50")),
    (Grade.B, Decimal("21.20")),
    (Grade.C, Decimal("15.90")),
])
def test_kilogram_price_is_base_times_multiplier(price_book, grade, expected):
    assert calculate_unit_price("Tomato", grade, Unit.KILOGRAM, price_book) == expected


def test_quintal_price_is_hundred_times_kilogram_price(price_book):
    per_kg = calculate_unit_price("Onion", Grade.B, Unit.KILOGRAM, price_book)
    per_quintal = calculate_unit_price("Onion", Grade.B, Unit.QUINTAL, price_book)
    assert per_quintal == per_kg * 100
    assert per_quintal == Decimal("2720")


def test_unknown_commodity_prices_at_zero(price_book):
    assert calculate_unit_price("Cauliflower", Grade.A, Unit.KILOGRAM, price_book) == 0
    assert price_book.get_base_price("Cauliflower") == 0


def test_unknown_grade_prices_at_zero(price_book):
    assert calculate_unit_price("Tomato", "Z", Unit.KILOGRAM, price_book) == 0


def test_quote_flags_unknown_commodity(price_book):
    result = quote("Cauliflower", Grade.A, Unit.KILOGRAM, price_book, Decimal("10"))
    assert result.known_commodity is False
    assert result.unit_price == 0
    assert result.total_amount == 0


def test_quote_total_uses_quantity(price_book):
    result = quote("Tomato", Grade.B, Unit.KILOGRAM, price_book, Decimal("250"))
    assert result.multiplier == Decimal("0.8")
    assert result.unit_price == Decimal("21.20")
    assert result.total_amount == Decimal("5300")


def test_update_price_changes_lookup_and_stamps_author(price_book, clock):
    record = price_book.update_price("Tomato", "28.00", updated_by="Admin")
    assert price_book.get_base_price("Tomato") == Decimal("28.00")
    assert record.updated_by == "Admin"
    assert record.last_updated_at.year == 2026


def test_update_price_writes_audit_entry(price_book, audit):
    price_book.update_price("Potato", "16.00", updated_by="Admin")
    entries = audit.get_history(action=AuditAction.PRICE_UPDATE)
    assert len(entries) == 1
    assert entries[0].entity_id == "Potato"
    assert entries[0].old_data["base_price_per_kg"] == "15.20"
    assert "base_price_per_kg" in entries[0].changed_fields


def test_update_price_rejects_negative(price_book):
    with pytest.raises(ValidationError):
        price_book.update_price("Tomato", "-1", updated_by="Admin")
    assert price_book.get_base_price("Tomato") == Decimal("26.50")


def test_update_price_can_add_new_commodity(price_book):
    price_book.update_price("Cauliflower", "18.75", updated_by="Admin")
    assert price_book.has_commodity("Cauliflower")
    assert calculate_unit_price("Cauliflower", Grade.C, Unit.KILOGRAM, price_book) == Decimal("11.25")


def test_require_raises_for_unknown(price_book):
    with pytest.raises(NotFoundError):
        price_book.require("Cauliflower")


def test_empty_price_book_lists_nothing(clock):
    book = PriceBook(clock)
    assert book.list_prices() == []
    assert book.get_base_price("Tomato") == 0


@pytest.mark.parametrize("price", ["NaN", "Infinity", float("nan"), float("-inf")])
def test_update_price_rejects_non_finite(price_book, price):
    with pytest.raises(ValidationError):
        price_book.update_price("Tomato", price, updated_by="Admin")
    assert price_book.get_base_price("Tomato") == Decimal("26.50")
