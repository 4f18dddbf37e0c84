"""
Statistics controller.

Endpoints:
- /api/statistics: today, current week, current month and all-time summaries
- /api/statistics/<period>: one summary for a DAY, WEEK, MONTH or ALL token
- /api/statistics/weekdays: appointments per weekday

Summaries accept an optional ``?date=YYYY-MM-DD`` to compute the periods
relative to another day than today.
"""

from contextlib import contextmanager
from datetime import date
from typing import Iterator, Optional

from flask import Blueprint, request

from app.core.api_utils import api_response
from app.core.exceptions import ValidationError
from app.db.session import SessionLocal
from app.repositories.appointment_repo import AppointmentRepository
from app.services.statistics_service import StatisticsService
from app.utils.calendar_buckets import Period, parse_date

statistics_bp = Blueprint("statistics", __name__, url_prefix="/api/statistics")


@contextmanager
def _statistics_service() -> Iterator[StatisticsService]:
    db = SessionLocal()
    try:
        yield StatisticsService(AppointmentRepository(db))
    finally:
        db.close()


def _reference_date() -> Optional[date]:
    raw = request.args.get("date")
    if not raw:
        return None
    try:
        return parse_date(raw)
    except ValueError as e:
        raise ValidationError(str(e), details={"field": "date"}) from e


@statistics_bp.route("", methods=["GET"])
def get_dashboard():
    today = _reference_date()
    with _statistics_service() as service:
        summaries = service.get_dashboard(today)
    return api_response(
        True,
        "Statistics computed",
        {key: summary.to_dict() for key, summary in summaries.items()},
    )


@statistics_bp.route("/weekdays", methods=["GET"])
def get_weekday_histogram():
    with _statistics_service() as service:
        histogram = service.get_weekday_histogram()
    return api_response(True, "Weekday histogram computed", histogram.to_dict())


@statistics_bp.route("/<token>", methods=["GET"])
def get_period_summary(token: str):
    try:
        period = Period.from_token(token)
    except ValueError as e:
        raise ValidationError(
            str(e), details={"allowed": [p.name for p in Period]}
        ) from e

    today = _reference_date()
    with _statistics_service() as service:
        summary = service.get_period_summary(period, today)
    return api_response(True, "Statistics computed", summary.to_dict())
