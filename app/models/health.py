"""
Health Models
Pydantic models for health checks
"""

from typing import Dict
from pydantic import BaseModel


class ComponentHealth(BaseModel):
    status: str
    message: str = ""


class LedgerHealth(ComponentHealth):
    records: int = 0


class PriceBookHealth(ComponentHealth):
    commodities: int = 0


class HealthCheckResponse(BaseModel):
    status: str
    timestamp: str
    components: Dict[str, ComponentHealth]
