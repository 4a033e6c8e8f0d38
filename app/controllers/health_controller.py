"""
Health Controller
Handles health check API endpoints
"""

from fastapi import APIRouter, Depends

from ..dependencies import get_health_service
from ..models.health import HealthCheckResponse, LedgerHealth, PriceBookHealth
from ..services.health_service import HealthService

router = APIRouter()


@router.get("", response_model=HealthCheckResponse)
async def health_check(health: HealthService = Depends(get_health_service)):
    """Complete health check"""
    return health.check_all()


@router.get("/ledger", response_model=LedgerHealth)
async def ledger_health(health: HealthService = Depends(get_health_service)):
    """Ledger health check"""
    return health.check_ledger()


@router.get("/prices", response_model=PriceBookHealth)
async def price_book_health(health: HealthService = Depends(get_health_service)):
    """Price master health check"""
    return health.check_price_book()
