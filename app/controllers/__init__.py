# Controllers Package
# MVC Controller Layer

from .price_controller import router as price_router
from .wizard_controller import router as wizard_router
from .ledger_controller import router as ledger_router
from .directory_controller import router as directory_router
from .advisory_controller import router as advisory_router
from .audit_controller import router as audit_router
from .config_controller import router as config_router
from .health_controller import router as health_router

__all__ = [
    "price_router",
    "wizard_router",
    "ledger_router",
    "directory_router",
    "advisory_router",
    "audit_router",
    "config_router",
    "health_router"
]
