"""
Config Controller
Handles configuration API endpoints
"""

from fastapi import APIRouter, Depends

from ..dependencies import get_container, get_scheduler_service
from ..services.container import ServiceContainer
from ..services.scheduler_service import SchedulerService

router = APIRouter()


@router.get("")
async def get_config(container: ServiceContainer = Depends(get_container)):
    """Get current configuration (API key masked)"""
    data = container.config.model_dump()
    if data["advisory"]["api_key"]:
        data["advisory"]["api_key"] = "***"
    return data


@router.get("/schedule")
async def get_schedule(scheduler: SchedulerService = Depends(get_scheduler_service)):
    """Get price refresh schedule"""
    return scheduler.get_status()


@router.post("/schedule")
async def update_schedule(schedule: dict, scheduler: SchedulerService = Depends(get_scheduler_service)):
    """Update price refresh schedule"""
    return scheduler.update_schedule(schedule)


@router.post("/schedule/run")
async def run_price_refresh(scheduler: SchedulerService = Depends(get_scheduler_service)):
    """Trigger a price refresh immediately"""
    return scheduler.run_now()
