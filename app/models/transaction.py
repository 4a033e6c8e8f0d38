"""
Transaction Data Models
Pydantic models for procurement/sales drafts, ledger records and ledger queries
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.constants import FILTER_ALL, KG_PER_QUINTAL
from ..utils.helpers import parse_date


class Grade(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"  # rejected, no payment


class SourceType(str, Enum):
    FARMER = "Farmer"
    VENDOR = "Vendor"
    AGGREGATOR = "Aggregator"
    UNION = "Union"


class Unit(str, Enum):
    KILOGRAM = "Kg"
    QUINTAL = "Quintal"


class TransactionKind(str, Enum):
    PROCUREMENT = "Procurement"  # inbound
    SALES = "Sales"  # outbound


class RecordStatus(str, Enum):
    LOCKED = "Locked"


class WizardStage(str, Enum):
    LIST = "List"
    INITIATION = "Initiation"
    CAPTURE = "Capture"
    REVIEW = "Review"


class SortField(str, Enum):
    TIMESTAMP = "timestamp"
    TOTAL_AMOUNT = "totalAmount"
    STATUS = "status"
    ID = "id"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


# Counterparty categories a wizard pass may pick from
SOURCE_TYPES_BY_KIND: Dict[TransactionKind, Tuple[SourceType, ...]] = {
    TransactionKind.PROCUREMENT: (SourceType.FARMER, SourceType.VENDOR, SourceType.AGGREGATOR),
    TransactionKind.SALES: (SourceType.VENDOR, SourceType.UNION),
}

DEFAULT_SOURCE_TYPE: Dict[TransactionKind, SourceType] = {
    TransactionKind.PROCUREMENT: SourceType.FARMER,
    TransactionKind.SALES: SourceType.VENDOR,
}

# Grades offered in the capture step
SELECTABLE_GRADES = (Grade.A, Grade.B, Grade.C)

LOGISTICS_FIELDS = ("vehicle_number", "driver_name", "driver_contact")


class TransactionDraft(BaseModel):
    """In-progress entry edited across the wizard stages"""
    model_config = ConfigDict(validate_assignment=True)

    source_type: SourceType = SourceType.FARMER
    counterparty_name: str = ""
    location: str = ""
    commodity: str = "Tomato"
    grade: Grade = Grade.A
    quantity: Decimal = Field(default=Decimal("0"), ge=0)
    unit: Unit = Unit.KILOGRAM
    effective_date: Optional[date] = None
    # Sales only
    vehicle_number: Optional[str] = None
    driver_name: Optional[str] = None
    driver_contact: Optional[str] = None


class TransactionRecord(BaseModel):
    """Committed ledger entry. Immutable once created."""
    model_config = ConfigDict(frozen=True)

    id: str
    kind: TransactionKind
    source_type: SourceType
    counterparty_name: str
    location: str = ""
    commodity: str
    grade: Grade
    quantity: Decimal
    unit: Unit
    effective_date: Optional[date] = None
    vehicle_number: Optional[str] = None
    driver_name: Optional[str] = None
    driver_contact: Optional[str] = None
    unit_price: Decimal
    total_amount: Decimal
    created_at: datetime
    status: RecordStatus = RecordStatus.LOCKED

    @property
    def quantity_kg(self) -> Decimal:
        if self.unit == Unit.QUINTAL:
            return self.quantity * KG_PER_QUINTAL
        return self.quantity


class FilterCriteria(BaseModel):
    """Ledger filter; "All" or empty skips a condition"""
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    commodity: str = FILTER_ALL
    grade: str = FILTER_ALL
    source_type: str = FILTER_ALL

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def _parse_date(cls, value):
        return parse_date(value)

    @field_validator("commodity", "grade", "source_type", mode="before")
    @classmethod
    def _empty_means_all(cls, value):
        if value is None or value == "":
            return FILTER_ALL
        if isinstance(value, Enum):
            return value.value
        return value

    @field_validator("grade")
    @classmethod
    def _known_grade(cls, value: str) -> str:
        if value != FILTER_ALL and value not in {g.value for g in Grade}:
            raise ValueError(f"Unknown grade: {value}")
        return value

    @field_validator("source_type")
    @classmethod
    def _known_source_type(cls, value: str) -> str:
        if value != FILTER_ALL and value not in {s.value for s in SourceType}:
            raise ValueError(f"Unknown source type: {value}")
        return value


class SortSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: SortField = SortField.TIMESTAMP
    order: SortOrder = SortOrder.DESC

    def toggle(self, field: SortField) -> "SortSpec":
        """Same field flips the order, a new field starts descending"""
        if field == self.field:
            flipped = SortOrder.ASC if self.order == SortOrder.DESC else SortOrder.DESC
            return SortSpec(field=field, order=flipped)
        return SortSpec(field=field, order=SortOrder.DESC)


class DraftUpdate(BaseModel):
    """Partial draft edit sent by the wizard screens"""
    source_type: Optional[SourceType] = None
    counterparty_name: Optional[str] = None
    location: Optional[str] = None
    commodity: Optional[str] = None
    grade: Optional[Grade] = None
    quantity: Optional[Decimal] = Field(default=None, ge=0)
    unit: Optional[Unit] = None
    effective_date: Optional[date] = None
    vehicle_number: Optional[str] = None
    driver_name: Optional[str] = None
    driver_contact: Optional[str] = None


class WizardState(BaseModel):
    """Snapshot of one wizard pass"""
    stage: WizardStage
    kind: TransactionKind
    step_number: int
    draft: TransactionDraft
    can_advance: bool
    unit_price: Decimal
    total_amount: Decimal
    last_committed_id: Optional[str] = None
