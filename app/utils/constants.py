"""
Constants Module
Application-wide constants
"""

# Application Info
APP_NAME = "Vegetable Federation Procurement Service"
APP_VERSION = "1.0.0"

# Filter sentinel meaning "do not filter on this field"
FILTER_ALL = "All"

# Quintal to kilogram conversion
KG_PER_QUINTAL = 100

# Shown when advisory generation fails
ADVISORY_FALLBACK_TEXT = "Failed to generate advisory. Please check connection and try again."

ADVISORY_SYSTEM_INSTRUCTION = (
    "You are an expert agriculture extension specialist for the Bihar Government's "
    "vegetable scheme. Provide practical, science-based advice tailored to local soil "
    "and climate conditions."
)

# Error Codes
class ErrorCode:
    VALIDATION_ERROR = "VALIDATION_ERROR"
    TRANSITION_BLOCKED = "TRANSITION_BLOCKED"
    INVALID_STAGE = "INVALID_STAGE"
    UNKNOWN_COMMODITY = "UNKNOWN_COMMODITY"
    DUPLICATE_RECORD = "DUPLICATE_RECORD"
    NOT_FOUND = "NOT_FOUND"
    ADVISORY_FAILED = "ADVISORY_FAILED"
    PRICE_FEED_FAILED = "PRICE_FEED_FAILED"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"

# Audit Actions
class AuditAction:
    COMMIT = "COMMIT"
    PRICE_UPDATE = "PRICE_UPDATE"

# Health Status
class HealthStatus:
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"
