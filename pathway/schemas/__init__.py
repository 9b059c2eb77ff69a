"""
Pydantic schemas for API request/response validation.
"""

from pathway.schemas.common import ErrorResponse, HealthResponse
from pathway.schemas.progress import ActionResult, NotificationList

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "ActionResult",
    "NotificationList",
]
