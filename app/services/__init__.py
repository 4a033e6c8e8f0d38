# Services Package
# Business Logic Layer

from .audit_service import AuditService
from .pricing_service import PriceBook
from .ledger_service import LedgerService
from .sequence_service import SequenceService
from .wizard_service import TransactionWizard, WizardService
from .directory_service import DirectoryService
from .advisory_service import AdvisoryService
from .price_feed_service import PriceFeedService
from .scheduler_service import SchedulerService
from .health_service import HealthService

__all__ = [
    "AuditService",
    "PriceBook",
    "LedgerService",
    "SequenceService",
    "TransactionWizard",
    "WizardService",
    "DirectoryService",
    "AdvisoryService",
    "PriceFeedService",
    "SchedulerService",
    "HealthService"
]
