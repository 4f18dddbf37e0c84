"""Calendar bucketing for appointment dates.

Pure functions mapping a naive calendar date to the day / week / month
buckets the statistics are grouped by. Both the in-memory aggregation and
the store query are derived from the same functions here, so the two can
never disagree about which appointments belong to "this week".

Week numbers follow the ISO Thursday rule, but the year a week is compared
under is the appointment date's own calendar year. Early-January dates that
belong to the previous year's last week therefore never match a late-December
"current week" of a different year, and vice versa.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import List, Tuple, Union

DateLike = Union[date, datetime, str]
TimeLike = Union[time, str]

WEEKDAY_LABELS = ["Dom", "Seg", "Ter", "Qua", "Qui", "Sex", "Sáb"]


class Period(str, Enum):
    """Closed set of aggregation windows, relative to "today"."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    ALL = "all"

    @classmethod
    def from_token(cls, token: str) -> "Period":
        """Resolve a period token such as "DAY", "week" or "current-month".

        Raises:
            ValueError: if the token names no known period
        """
        key = (token or "").strip().lower()
        if key in _PERIOD_ALIASES:
            return _PERIOD_ALIASES[key]
        raise ValueError(f"Unknown period: {token!r}")


_PERIOD_ALIASES = {
    "day": Period.DAY,
    "today": Period.DAY,
    "week": Period.WEEK,
    "current-week": Period.WEEK,
    "month": Period.MONTH,
    "current-month": Period.MONTH,
    "all": Period.ALL,
    "all-time": Period.ALL,
}


@dataclass(frozen=True)
class DateRange:
    """Inclusive range of calendar dates."""

    start: date
    end: date

    def __contains__(self, value: date) -> bool:
        return self.start <= value <= self.end


def parse_date(value: DateLike) -> date:
    """Parse a YYYY-MM-DD date, ignoring any trailing time component.

    The result is a naive local calendar date: "2024-03-10T23:30:00Z" is
    March 10th, never shifted to another day by a timezone conversion.

    Raises:
        ValueError: if the text is not a valid date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    day_part = text.split("T", 1)[0].split(" ", 1)[0]
    try:
        year, month, day = (int(part) for part in day_part.split("-"))
    except ValueError:
        raise ValueError(f"Invalid date: {value!r}") from None
    return date(year, month, day)


def parse_time(value: TimeLike) -> time:
    """Parse an HH:MM or HH:MM:SS time of day.

    Times are naive wall-clock times; a UTC offset is rejected.

    Raises:
        ValueError: if the text is not a valid time
    """
    if isinstance(value, time):
        parsed = value
    else:
        text = str(value).strip()
        try:
            parsed = time.fromisoformat(text)
        except ValueError:
            raise ValueError(f"Invalid time: {value!r}") from None
    if parsed.tzinfo is not None:
        raise ValueError(f"Time must not carry a UTC offset: {value!r}")
    return parsed


def format_time(t: time) -> str:
    """HH:MM, or the full ISO form when seconds are set, so it parses back
    to the same slot."""
    if t.second or t.microsecond:
        return t.isoformat()
    return t.strftime("%H:%M")


def day_key(d: date) -> date:
    return d


def week_number(d: date) -> int:
    """Week number of ``d`` using the Thursday rule (Monday-first weeks).

    The date is moved to the Thursday of its week (Sunday counts as day 7)
    and the week is counted from January 1st of that Thursday's year.
    """
    thursday = d + timedelta(days=4 - d.isoweekday())
    year_start = date(thursday.year, 1, 1)
    return math.ceil(((thursday - year_start).days + 1) / 7)


def week_key(d: date) -> Tuple[int, int]:
    """(calendar year of ``d``, week number) used for "current week" matching."""
    return d.year, week_number(d)


def month_key(d: date) -> Tuple[int, int]:
    """(year, month) with 1-indexed months."""
    return d.year, d.month


def weekday_index(d: date) -> int:
    """0 = Sunday ... 6 = Saturday."""
    return d.isoweekday() % 7


def in_period(d: date, period: Period, today: date) -> bool:
    """Whether ``d`` falls in the ``period`` bucket that contains ``today``."""
    if period is Period.DAY:
        return day_key(d) == day_key(today)
    if period is Period.WEEK:
        return week_key(d) == week_key(today)
    if period is Period.MONTH:
        return month_key(d) == month_key(today)
    return True


def _week_span(d: date) -> DateRange:
    monday = d - timedelta(days=d.isoweekday() - 1)
    return DateRange(monday, monday + timedelta(days=6))


def period_ranges(period: Period, today: date) -> List[DateRange]:
    """Explicit date ranges selecting exactly the dates ``in_period`` accepts.

    Computed once from ``today`` and handed to the store as a query
    predicate. An empty list means no filtering (``Period.ALL``).
    """
    if period is Period.DAY:
        return [DateRange(today, today)]

    if period is Period.MONTH:
        first = today.replace(day=1)
        next_month = (first + timedelta(days=32)).replace(day=1)
        return [DateRange(first, next_month - timedelta(days=1))]

    if period is Period.WEEK:
        jan_1 = date(today.year, 1, 1)
        dec_31 = date(today.year, 12, 31)
        current = week_number(today)

        # The current week, plus the partial first/last week of the year when
        # its number collides with the current one.
        candidates = [_week_span(today), _week_span(jan_1), _week_span(dec_31)]
        ranges: List[DateRange] = []
        for span in candidates:
            clipped = DateRange(max(span.start, jan_1), min(span.end, dec_31))
            if week_number(clipped.start) != current or clipped in ranges:
                continue
            ranges.append(clipped)
        return sorted(ranges, key=lambda r: r.start)

    return []
