"""
Audit Models
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class AuditEntry(BaseModel):
    sequence: int
    action: str
    entity: str
    entity_id: str
    actor: str
    old_data: Optional[Dict[str, Any]] = None
    new_data: Optional[Dict[str, Any]] = None
    changed_fields: List[str] = []
    created_at: datetime
