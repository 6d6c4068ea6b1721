"""Pydantic response models for API endpoints."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy" or "unhealthy"
    version: str
    timestamp: str  # ISO 8601 UTC
    error: str | None = None


class ReportRowResponse(BaseModel):
    """One report row, rounded to 1 decimal."""

    category: str
    budgeted: float
    actual: float
    variance: float


class WeeklyReportResponse(BaseModel):
    """Weekly budget variance report."""

    week_start: str
    week_end: str
    rows: list[ReportRowResponse]
    csv: str
    warnings: list[str] = []


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: list[str] = []


class ErrorCodes:
    """Error code constants."""

    INVALID_REQUEST = "INVALID_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_WEEK = "INVALID_WEEK"
    INVALID_BUDGET = "INVALID_BUDGET"
    INVALID_EVENT = "INVALID_EVENT"
    INTERNAL_ERROR = "INTERNAL_ERROR"
