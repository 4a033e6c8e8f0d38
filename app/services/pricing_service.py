"""
Pricing Service Module
======================
Central commodity price master and grade-based unit pricing.

PRICING RULE:
------------
unit_price = base_price_per_kg x grade multiplier
             (x 100 when the unit is Quintal)

GRADE MULTIPLIERS:
-----------------
A -> 1.0   (Premium / Export quality)
B -> 0.8   (Standard / Market quality)
C -> 0.6   (Processing / Low quality)
D, or anything unrecognised -> 0 (rejected, no payment)

LOOKUP MISSES:
-------------
A commodity missing from the price master prices at 0 instead of raising.
Callers should read a 0 price as "unknown commodity", not "free".
"""

import threading
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from ..models.price import CommodityPrice, PriceQuote
from ..models.transaction import Grade, Unit
from ..utils.clock import Clock, SystemClock
from ..utils.constants import KG_PER_QUINTAL
from ..utils.exceptions import NotFoundError, ValidationError
from ..utils.helpers import to_decimal
from ..utils.logger import logger
from .audit_service import AuditService

ZERO = Decimal("0")

GRADE_MULTIPLIERS: Dict[Grade, Decimal] = {
    Grade.A: Decimal("1.0"),
    Grade.B: Decimal("0.8"),
    Grade.C: Decimal("0.6"),
}


def grade_multiplier(grade: Any) -> Decimal:
    """Multiplier for a grade; unknown values (and D) give 0"""
    try:
        grade = Grade(grade)
    except ValueError:
        return ZERO
    return GRADE_MULTIPLIERS.get(grade, ZERO)


def unit_factor(unit: Any) -> int:
    try:
        unit = Unit(unit)
    except ValueError:
        return 1
    if unit == Unit.QUINTAL:
        return KG_PER_QUINTAL
    return 1


class PriceBook:
    """Live price master: one record per commodity"""

    def __init__(self, clock: Optional[Clock] = None, audit: Optional[AuditService] = None):
        self.clock = clock or SystemClock()
        self.audit = audit
        self._prices: Dict[str, CommodityPrice] = {}
        self._lock = threading.Lock()

    def seed(self, prices: Mapping[str, Any], updated_by: str = "Admin") -> None:
        """Load initial prices without writing audit entries"""
        now = self.clock.now()
        with self._lock:
            for commodity, price in prices.items():
                self._prices[commodity] = CommodityPrice(
                    commodity=commodity,
                    base_price_per_kg=to_decimal(price),
                    last_updated_at=now,
                    updated_by=updated_by
                )
        logger.info(f"Price master seeded with {len(prices)} commodities")

    def get(self, commodity: str) -> Optional[CommodityPrice]:
        with self._lock:
            return self._prices.get(commodity)

    def has_commodity(self, commodity: str) -> bool:
        return self.get(commodity) is not None

    def get_base_price(self, commodity: str) -> Decimal:
        """Base price per kg, 0 when the commodity is unknown"""
        price = self.get(commodity)
        return price.base_price_per_kg if price else ZERO

    def list_prices(self) -> List[CommodityPrice]:
        with self._lock:
            return list(self._prices.values())

    def commodities(self) -> List[str]:
        with self._lock:
            return list(self._prices.keys())

    def update_price(self, commodity: str, price: Any, updated_by: str) -> CommodityPrice:
        """Authorized change of a central price"""
        new_price = to_decimal(price)
        if not new_price.is_finite():
            raise ValidationError(f"Price for {commodity} must be a finite number", details=str(new_price))
        if new_price < 0:
            raise ValidationError(f"Price for {commodity} cannot be negative", details=str(new_price))
        if not updated_by:
            raise ValidationError("updated_by is required for a price change")

        with self._lock:
            previous = self._prices.get(commodity)
            record = CommodityPrice(
                commodity=commodity,
                base_price_per_kg=new_price,
                last_updated_at=self.clock.now(),
                updated_by=updated_by
            )
            self._prices[commodity] = record

        old_value = str(previous.base_price_per_kg) if previous else None
        logger.info(f"Price updated: {commodity} {old_value} -> {new_price} by {updated_by}")

        if self.audit:
            self.audit.log_price_update(
                commodity,
                old_data=previous.model_dump(mode="json") if previous else None,
                new_data=record.model_dump(mode="json"),
                actor=updated_by
            )
        return record

    def require(self, commodity: str) -> CommodityPrice:
        price = self.get(commodity)
        if price is None:
            raise NotFoundError(f"Commodity not in price master: {commodity}")
        return price


def calculate_unit_price(commodity: str, grade: Any, unit: Any, price_book: PriceBook) -> Decimal:
    """Per-unit price for a draft: base x grade multiplier, x100 for Quintal"""
    base = price_book.get_base_price(commodity)
    return base * grade_multiplier(grade) * unit_factor(unit)


def quote(
    commodity: str,
    grade: Grade,
    unit: Unit,
    price_book: PriceBook,
    quantity: Optional[Decimal] = None
) -> PriceQuote:
    """Price breakdown shown on the capture screen"""
    unit_price = calculate_unit_price(commodity, grade, unit, price_book)
    return PriceQuote(
        commodity=commodity,
        grade=grade,
        unit=unit,
        base_price_per_kg=price_book.get_base_price(commodity),
        multiplier=grade_multiplier(grade),
        unit_price=unit_price,
        quantity=quantity,
        total_amount=unit_price * quantity if quantity is not None else None,
        known_commodity=price_book.has_commodity(commodity)
    )
