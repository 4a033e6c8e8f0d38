"""
Service Container
Builds the services from configuration and hands them to the controllers
through FastAPI dependencies (see app/dependencies.py).
"""

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from ..config import AppConfig
from ..models.transaction import (
    Grade,
    RecordStatus,
    SourceType,
    TransactionKind,
    TransactionRecord,
    Unit,
)
from ..utils.clock import Clock, SystemClock
from .advisory_service import AdvisoryService
from .audit_service import AuditService
from .directory_service import DirectoryService
from .health_service import HealthService
from .ledger_service import LedgerService
from .price_feed_service import PriceFeedService
from .pricing_service import PriceBook
from .scheduler_service import SchedulerService
from .sequence_service import SequenceService
from .wizard_service import WizardService


def demo_records(config: AppConfig) -> List[TransactionRecord]:
    """Opening ledger shown on a fresh install"""
    prefix = config.ledger.procurement_prefix
    width = config.ledger.id_width
    return [
        TransactionRecord(
            id=f"{prefix}-{101:0{width}d}",
            kind=TransactionKind.PROCUREMENT,
            source_type=SourceType.FARMER,
            counterparty_name="Sunil Mahto",
            location="Danapur PVCS Center",
            commodity="Tomato",
            grade=Grade.A,
            quantity=Decimal("250"),
            unit=Unit.KILOGRAM,
            effective_date=date(2026, 1, 11),
            unit_price=Decimal("26.50"),
            total_amount=Decimal("6625.00"),
            created_at=datetime(2026, 1, 11, 10, 30),
            status=RecordStatus.LOCKED
        )
    ]


class ServiceContainer:
    """All long-lived services for one application instance"""

    def __init__(self, config: AppConfig, clock: Optional[Clock] = None):
        self.config = config
        self.clock = clock or SystemClock()

        self.audit = AuditService(self.clock)
        self.price_book = PriceBook(self.clock, self.audit)
        self.price_book.seed(config.pricing.seed_prices, updated_by=config.pricing.seeded_by)

        seed = demo_records(config) if config.ledger.seed_demo_records else []
        self.ledger = LedgerService(self.price_book, seed)

        self.sequence = SequenceService(
            procurement_prefix=config.ledger.procurement_prefix,
            sales_prefix=config.ledger.sales_prefix,
            width=config.ledger.id_width
        )
        self.sequence.reserve(self.ledger.ids())

        self.wizards = WizardService(
            self.ledger,
            self.sequence,
            clock=self.clock,
            audit=self.audit,
            default_location=config.ledger.default_location,
            strict_validation=config.ledger.strict_validation
        )
        self.directory = DirectoryService()
        self.advisory = AdvisoryService(
            api_key=config.advisory.api_key,
            model=config.advisory.model,
            base_url=config.advisory.base_url,
            timeout=config.advisory.timeout,
            clock=self.clock
        )
        self.price_feed = PriceFeedService(
            self.price_book,
            url=config.price_feed.url,
            timeout=config.price_feed.timeout
        )
        self.scheduler = SchedulerService(
            self.price_feed,
            interval_minutes=config.price_feed.interval_minutes,
            enabled=config.price_feed.enabled
        )
        self.health = HealthService(self.ledger, self.price_book, self.price_feed, self.clock)
