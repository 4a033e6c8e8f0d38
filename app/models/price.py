"""
Price Data Models
Pydantic models for the central commodity price master
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from .transaction import Grade, Unit


class CommodityPrice(BaseModel):
    commodity: str
    base_price_per_kg: Decimal
    last_updated_at: datetime
    updated_by: str


class PriceUpdateRequest(BaseModel):
    price: Decimal = Field(ge=0)
    updated_by: str = "Admin"


class PriceQuote(BaseModel):
    commodity: str
    grade: Grade
    unit: Unit
    base_price_per_kg: Decimal
    multiplier: Decimal
    unit_price: Decimal
    quantity: Optional[Decimal] = None
    total_amount: Optional[Decimal] = None
    known_commodity: bool = True
