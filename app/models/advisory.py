"""
Advisory Models
Pydantic models for generated farm advisories
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class AdvisoryChannel(str, Enum):
    SMS = "sms"
    PUSH = "push"
    BOTH = "both"


class TaskState(str, Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


class AdvisoryRequest(BaseModel):
    crop: str = "Tomato"
    season: str = "Winter"
    channel: AdvisoryChannel = AdvisoryChannel.BOTH
    scheduled_for: Optional[date] = None


class AdvisoryTaskView(BaseModel):
    id: str
    crop: str
    season: str
    channel: AdvisoryChannel
    scheduled_for: Optional[date] = None
    state: TaskState
    text: Optional[str] = None
    error: Optional[str] = None
    created_at: datetime
    completed_at: Optional[datetime] = None
