"""Weekly budget report endpoint."""

import time
import warnings

from fastapi import APIRouter, Depends, HTTPException, Request, status

from api.dependencies import verify_api_key
from api.logging import RequestLog, log_request
from api.models.requests import WeeklyReportRequest
from api.models.responses import ErrorCodes, ReportRowResponse, WeeklyReportResponse
from core.budget import validate_budget
from core.config import TOTAL, UNCATEGORIZED
from core.reconcile import DurationWarning, reconcile
from models.events import ReportRow, Window
from services.reports import format_csv

router = APIRouter(prefix="/v1")


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def validation_error(code: str, error: str, details: list[str]) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={"error": error, "code": code, "details": details},
    )


def row_response(row: ReportRow) -> ReportRowResponse:
    budgeted, actual, variance = row.display()
    return ReportRowResponse(
        category=row.category, budgeted=budgeted, actual=actual, variance=variance
    )


@router.post("/reports/weekly", response_model=WeeklyReportResponse)
async def weekly_report_endpoint(
    request: Request,
    payload: WeeklyReportRequest,
    _api_key: str = Depends(verify_api_key),
):
    """
    Reconcile submitted events against a weekly budget.

    Returns one row per budget category, an Uncategorized row when needed,
    and a TOTAL row, plus the same table as CSV.
    """
    start_time = time.time()

    request_log = RequestLog(
        endpoint="/v1/reports/weekly",
        method="POST",
        client_ip=get_client_ip(request),
        week_start=payload.week_start.isoformat(),
        event_count=len(payload.events),
    )

    try:
        try:
            window = Window(payload.week_start)
        except ValueError as e:
            raise validation_error(ErrorCodes.INVALID_WEEK, "Invalid week_start", [str(e)])

        try:
            budget = validate_budget(payload.budget)
        except ValueError as e:
            raise validation_error(
                ErrorCodes.INVALID_BUDGET, "Budget validation failed", str(e).split("\n")
            )

        events = []
        event_errors = []
        for idx, event_payload in enumerate(payload.events):
            try:
                events.append(event_payload.to_event())
            except ValueError as e:
                event_errors.append(f"events[{idx}] '{event_payload.title}': {e}")
        if event_errors:
            raise validation_error(ErrorCodes.INVALID_EVENT, "Event validation failed", event_errors)

        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", DurationWarning)
            rows = reconcile(events, window, budget)
        for warning in caught:
            if not issubclass(warning.category, DurationWarning):
                continue
            request_log.details.append(("warning", str(warning.message)))

        totals = {row.category: row.actual for row in rows}
        request_log.status_code = 200
        request_log.total_actual_hours = totals[TOTAL]
        request_log.uncategorized_hours = totals.get(UNCATEGORIZED, 0.0)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        return WeeklyReportResponse(
            week_start=window.week_start.isoformat(),
            week_end=window.week_end.isoformat(),
            rows=[row_response(row) for row in rows],
            csv=format_csv(rows),
            warnings=[message for _, message in request_log.details],
        )

    except HTTPException as e:
        request_log.status_code = e.status_code
        if isinstance(e.detail, dict):
            request_log.error_code = e.detail.get("code")
            request_log.error_message = e.detail.get("error")
            for detail in e.detail.get("details", []):
                request_log.details.append(("validation_error", detail))
        else:
            request_log.error_message = str(e.detail)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        raise

    except Exception as e:
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.INTERNAL_ERROR
        request_log.error_message = str(e)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Internal server error",
                "code": ErrorCodes.INTERNAL_ERROR,
                "details": [],
            },
        )

    finally:
        # Always log the request
        try:
            log_request(request_log)
        except Exception:
            # Don't fail the request if logging fails
            pass
