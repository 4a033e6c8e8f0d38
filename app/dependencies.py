"""
FastAPI dependency providers
Controllers ask for services here so tests can override them.
"""

from fastapi import Request

from .services.advisory_service import AdvisoryService
from .services.audit_service import AuditService
from .services.container import ServiceContainer
from .services.directory_service import DirectoryService
from .services.health_service import HealthService
from .services.ledger_service import LedgerService
from .services.pricing_service import PriceBook
from .services.scheduler_service import SchedulerService
from .services.wizard_service import WizardService


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def get_price_book(request: Request) -> PriceBook:
    return get_container(request).price_book


def get_ledger_service(request: Request) -> LedgerService:
    return get_container(request).ledger


def get_wizard_service(request: Request) -> WizardService:
    return get_container(request).wizards


def get_directory_service(request: Request) -> DirectoryService:
    return get_container(request).directory


def get_advisory_service(request: Request) -> AdvisoryService:
    return get_container(request).advisory


def get_audit_service(request: Request) -> AuditService:
    return get_container(request).audit


def get_health_service(request: Request) -> HealthService:
    return get_container(request).health


def get_scheduler_service(request: Request) -> SchedulerService:
    return get_container(request).scheduler
