"""
Week window arithmetic shared by the timesheet read and write paths.

Weeks are Sunday-anchored and never cross a month boundary: the week that
contains the 1st of a month starts on the 1st, and the week that contains the
last day of a month ends on that day.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Iterator, Union

from timesheet_hub.core.exceptions import InvalidInputError

DateLike = Union[date, datetime, str]

DAY_ABBREVIATIONS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
ONE_DAY = timedelta(days=1)


def normalize_date(value: DateLike) -> date:
    """
    Coerce a date, datetime or ISO string to a calendar date.

    Aware datetimes are converted to UTC before the time is dropped.

    Raises:
        InvalidInputError: If the value cannot be interpreted as a date
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            if len(text) == 10:
                return date.fromisoformat(text)
            return normalize_date(datetime.fromisoformat(text.replace("Z", "+00:00")))
        except ValueError:
            pass
    raise InvalidInputError(f"Invalid date: {value!r}", details={"value": str(value)})


def day_of_week(d: date) -> str:
    """Three-letter weekday abbreviation (Sun, Mon, ...)."""
    return DAY_ABBREVIATIONS[d.weekday()]


def previous_sunday(d: date) -> date:
    """Return the Sunday on or before d."""
    return d - timedelta(days=(d.weekday() + 1) % 7)


def first_of_month(d: date) -> date:
    return d.replace(day=1)


def last_of_month(d: date) -> date:
    return d.replace(day=calendar.monthrange(d.year, d.month)[1])


def week_start(value: DateLike) -> date:
    """Sunday on or before the date, clipped to the first day of its month."""
    d = normalize_date(value)
    return max(previous_sunday(d), first_of_month(d))


def week_end(value: DateLike) -> date:
    """Saturday on or after the week start, clipped to the last day of the month."""
    d = normalize_date(value)
    start = week_start(d)
    saturday = start + timedelta(days=(5 - start.weekday()) % 7)
    return min(saturday, last_of_month(d))


@dataclass(frozen=True)
class DateSpan:
    """Restartable inclusive range of calendar dates."""

    start: date
    end: date

    def __iter__(self) -> Iterator[date]:
        current = self.start
        while current <= self.end:
            yield current
            current += ONE_DAY

    def __len__(self) -> int:
        return max((self.end - self.start).days + 1, 0)

    def __contains__(self, item: object) -> bool:
        return isinstance(item, date) and self.start <= item <= self.end


@dataclass(frozen=True)
class WeekWindow:
    """Inclusive date window, usually a (possibly clipped) Sunday-Saturday week."""

    start: date
    end: date

    @property
    def days(self) -> int:
        return len(self.dates())

    def contains(self, value: DateLike) -> bool:
        return self.start <= normalize_date(value) <= self.end

    def dates(self) -> DateSpan:
        return DateSpan(self.start, self.end)

    def label(self) -> str:
        return f"{self.start.isoformat()} - {self.end.isoformat()}"


def week_range(value: DateLike) -> WeekWindow:
    """Canonical week window containing the given date."""
    d = normalize_date(value)
    return WeekWindow(week_start(d), week_end(d))


def full_week(value: DateLike) -> WeekWindow:
    """Unclipped Sunday-Saturday window containing the date."""
    start = previous_sunday(normalize_date(value))
    return WeekWindow(start, start + timedelta(days=6))


def dates_between(start: DateLike, end: DateLike) -> DateSpan:
    """Every calendar date from start to end inclusive (empty if end < start)."""
    return DateSpan(normalize_date(start), normalize_date(end))


def month_range(year: int, month: int) -> WeekWindow:
    """First and last day of a calendar month."""
    if not 1 <= month <= 12:
        raise InvalidInputError(f"Invalid month: {month}", details={"month": month})
    first = date(year, month, 1)
    return WeekWindow(first, last_of_month(first))


def shift_week(start: DateLike, end: DateLike, direction: str) -> WeekWindow:
    """
    Step to the canonical window before or after the given one.

    Args:
        start: Current window start
        end: Current window end
        direction: "prev" or "next"; anything else keeps the current window

    Returns:
        The adjacent window
    """
    start = normalize_date(start)
    end = normalize_date(end)
    if direction == "prev":
        return week_range(start - ONE_DAY)
    if direction == "next":
        return week_range(end + ONE_DAY)
    return WeekWindow(start, end)
