"""API Pydantic models."""

from .requests import EventPayload, WeeklyReportRequest
from .responses import (
    ErrorCodes,
    ErrorResponse,
    HealthResponse,
    ReportRowResponse,
    WeeklyReportResponse,
)

__all__ = [
    "EventPayload",
    "WeeklyReportRequest",
    "HealthResponse",
    "ReportRowResponse",
    "WeeklyReportResponse",
    "ErrorResponse",
    "ErrorCodes",
]
