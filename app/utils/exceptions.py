"""
Exceptions Module
Domain errors raised by services and mapped to HTTP responses by controllers
"""

from typing import Optional

from .constants import ErrorCode


class ProcurementError(Exception):
    """Base error carrying an ErrorCode"""

    code = ErrorCode.UNKNOWN_ERROR
    status_code = 400

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(ProcurementError):
    code = ErrorCode.VALIDATION_ERROR
    status_code = 422


class TransitionBlockedError(ProcurementError):
    """A guarded wizard transition was attempted before its condition holds"""
    code = ErrorCode.TRANSITION_BLOCKED
    status_code = 409


class InvalidStageError(ProcurementError):
    """Operation not allowed in the wizard's current stage"""
    code = ErrorCode.INVALID_STAGE
    status_code = 409


class UnknownCommodityError(ProcurementError):
    code = ErrorCode.UNKNOWN_COMMODITY
    status_code = 422


class DuplicateRecordError(ProcurementError):
    code = ErrorCode.DUPLICATE_RECORD
    status_code = 409


class NotFoundError(ProcurementError):
    code = ErrorCode.NOT_FOUND
    status_code = 404


class AdvisoryError(ProcurementError):
    """Advisory text could not be generated"""
    code = ErrorCode.ADVISORY_FAILED
    status_code = 502


class PriceFeedError(ProcurementError):
    code = ErrorCode.PRICE_FEED_FAILED
    status_code = 502
