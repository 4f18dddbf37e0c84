"""
Statistics service - per-period aggregation of appointments.

The aggregation itself is a set of pure functions over an appointment
snapshot: nothing is cached between calls, so a summary is always computed
from the rows and the "today" it is given.

Rules:
- ``count`` covers every appointment in the period, whatever its status
- revenue and the most frequent service/client only consider completed
  appointments
- ties for "most frequent" go to the value seen first, in the order the
  appointments are given (date, then time, when read from the store)
- an empty selection reports "-" for the most frequent values
"""

import logging
import time
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence

from app.core.config import local_today
from app.core.logging_config import log_performance
from app.domain.entities import Appointment
from app.domain.interfaces import IAppointmentReader
from app.schemas.dtos import PeriodSummaryResponse, WeekdayHistogramResponse
from app.utils.calendar_buckets import (
    WEEKDAY_LABELS,
    Period,
    in_period,
    period_ranges,
    weekday_index,
)

logger = logging.getLogger(__name__)

EMPTY_SENTINEL = "-"


@dataclass(frozen=True)
class PeriodSummary:
    period: Period
    count: int
    completed_count: int
    revenue: Decimal
    top_service: str
    top_client: str


def most_frequent(values: Iterable[str]) -> str:
    """Mode of ``values``; ties go to the first value seen, "-" when empty."""
    counts: Dict[str, int] = {}
    for value in values:
        counts[value] = counts.get(value, 0) + 1

    best_value, best_count = EMPTY_SENTINEL, 0
    for value, count in counts.items():
        if count > best_count:
            best_value, best_count = value, count
    return best_value


def filter_period(
    appointments: Iterable[Appointment], period: Period, today: date
) -> List[Appointment]:
    return [apt for apt in appointments if in_period(apt.date, period, today)]


def aggregate(
    appointments: Iterable[Appointment], period: Period, today: date
) -> PeriodSummary:
    """Summarize the appointments falling in ``period`` relative to ``today``."""
    selected = filter_period(appointments, period, today)
    completed = [apt for apt in selected if apt.is_completed]

    return PeriodSummary(
        period=period,
        count=len(selected),
        completed_count=len(completed),
        revenue=sum((apt.amount for apt in completed), Decimal("0")),
        top_service=most_frequent(apt.service for apt in completed),
        top_client=most_frequent(apt.client_name for apt in completed),
    )


def summarize(
    appointments: Sequence[Appointment], today: date
) -> Dict[str, PeriodSummary]:
    """Summaries for today, the current week, the current month and all time."""
    return {period.value: aggregate(appointments, period, today) for period in Period}


def weekday_histogram(appointments: Iterable[Appointment]) -> List[int]:
    """Appointments per weekday, Sunday first. Every status is counted."""
    counts = [0] * 7
    for apt in appointments:
        counts[weekday_index(apt.date)] += 1
    return counts


class StatisticsService:
    """Application service exposing the aggregates over the appointment store."""

    def __init__(self, appointment_repo: IAppointmentReader):
        self.appointment_repo = appointment_repo

    def get_period_summary(
        self, period: Period, today: Optional[date] = None
    ) -> PeriodSummaryResponse:
        """Aggregate one period, reading only the rows that can fall in it."""
        today = today or local_today()
        started = time.perf_counter()

        appointments = self.appointment_repo.list_appointments(
            period_ranges(period, today)
        )
        summary = aggregate(appointments, period, today)

        log_performance(
            "get_period_summary",
            (time.perf_counter() - started) * 1000,
            period=period.value,
            record_count=len(appointments),
        )
        return PeriodSummaryResponse.from_summary(summary)

    def get_dashboard(
        self, today: Optional[date] = None
    ) -> Dict[str, PeriodSummaryResponse]:
        """Day, week, month and all-time summaries from a single snapshot."""
        today = today or local_today()
        started = time.perf_counter()

        appointments = self.appointment_repo.list_appointments()
        summaries = summarize(appointments, today)

        log_performance(
            "get_dashboard",
            (time.perf_counter() - started) * 1000,
            record_count=len(appointments),
        )
        return {
            key: PeriodSummaryResponse.from_summary(summary)
            for key, summary in summaries.items()
        }

    def get_weekday_histogram(self) -> WeekdayHistogramResponse:
        appointments = self.appointment_repo.list_appointments()
        return WeekdayHistogramResponse(
            labels=list(WEEKDAY_LABELS), counts=weekday_histogram(appointments)
        )
