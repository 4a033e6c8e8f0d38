"""
JSON View
Formats responses as JSON
"""

from typing import Any, Dict, List, Optional
from datetime import datetime

from fastapi import HTTPException

from ..utils.exceptions import ProcurementError


class JsonView:
    """JSON response formatter"""

    @staticmethod
    def success(message: str = "", data: Any = None) -> Dict:
        """Format success response"""
        return {
            "status": "success",
            "message": message,
            "data": data,
            "timestamp": datetime.now().isoformat()
        }

    @staticmethod
    def error(code: str, message: str, details: Optional[str] = None) -> Dict:
        """Format error response"""
        return {
            "error": True,
            "code": code,
            "message": message,
            "details": details,
            "timestamp": datetime.now().isoformat()
        }

    @staticmethod
    def listing(data: List, **meta: Any) -> Dict:
        """Format a list response; an empty list is reported with count 0"""
        return {
            **meta,
            "count": len(data),
            "data": data
        }

    @staticmethod
    def http_error(exc: ProcurementError) -> HTTPException:
        """Map a domain error to an HTTPException carrying the error body"""
        return HTTPException(
            status_code=exc.status_code,
            detail=JsonView.error(exc.code, exc.message, exc.details)
        )
