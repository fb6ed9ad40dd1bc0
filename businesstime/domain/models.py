"""
Domain models for business time arithmetic.

All sub-day arithmetic is done in integer ticks of one microsecond, the
finest resolution of ``datetime.time``.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable

from .exceptions import ConfigurationError

TICKS_PER_MILLISECOND = 1_000
TICKS_PER_SECOND = 1_000 * TICKS_PER_MILLISECOND
TICKS_PER_MINUTE = 60 * TICKS_PER_SECOND
TICKS_PER_HOUR = 60 * TICKS_PER_MINUTE

DEFAULT_DAY_START = time(9, 0)
DEFAULT_DAY_END = time(17, 0)
DEFAULT_WORKING_DAYS: FrozenSet[int] = frozenset(range(5))  # Monday - Friday

WEEKDAY_NAMES = {
    0: "Monday",
    1: "Tuesday",
    2: "Wednesday",
    3: "Thursday",
    4: "Friday",
    5: "Saturday",
    6: "Sunday",
}


def ticks_of_day(value: time) -> int:
    """Return the number of ticks elapsed since midnight for a wall-clock time."""
    return (
        value.hour * TICKS_PER_HOUR
        + value.minute * TICKS_PER_MINUTE
        + value.second * TICKS_PER_SECOND
        + value.microsecond
    )


def time_from_ticks(ticks: int) -> time:
    """Inverse of :func:`ticks_of_day`."""
    hours, rest = divmod(ticks, TICKS_PER_HOUR)
    minutes, rest = divmod(rest, TICKS_PER_MINUTE)
    seconds, microseconds = divmod(rest, TICKS_PER_SECOND)
    return time(hours, minutes, seconds, microseconds)


class TimeUnit(str, Enum):
    """
    Units a business moment can be moved by.

    Sub-day units and ``DAYS`` are business-aware; ``DAYS`` stands for one
    business day (``day_end - day_start``). ``WEEKS``, ``MONTHS`` and
    ``YEARS`` are plain calendar units.
    """
    MICROSECONDS = "microseconds"
    MILLISECONDS = "milliseconds"
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    YEARS = "years"

    @property
    def is_calendar_unit(self) -> bool:
        return self in (TimeUnit.WEEKS, TimeUnit.MONTHS, TimeUnit.YEARS)

    def ticks(self, window: "BusinessWindowConfig") -> int:
        """Size of one unit in ticks under ``window``."""
        if self is TimeUnit.DAYS:
            return window.ticks_per_business_day
        try:
            return _FIXED_UNIT_TICKS[self]
        except KeyError:
            raise ValueError(f"{self.value} is a calendar unit and has no fixed tick size") from None


_FIXED_UNIT_TICKS = {
    TimeUnit.MICROSECONDS: 1,
    TimeUnit.MILLISECONDS: TICKS_PER_MILLISECOND,
    TimeUnit.SECONDS: TICKS_PER_SECOND,
    TimeUnit.MINUTES: TICKS_PER_MINUTE,
    TimeUnit.HOURS: TICKS_PER_HOUR,
}


def _as_date(value: date) -> date:
    # Holidays compare by calendar date only
    if isinstance(value, datetime):
        value = value.date()
    return date(value.year, value.month, value.day)


@dataclass(frozen=True)
class BusinessWindowConfig:
    """
    Immutable description of the business calendar.

    Invariant: day_start must be before day_end, and at least one weekday
    must be a working day.
    """
    day_start: time = DEFAULT_DAY_START
    day_end: time = DEFAULT_DAY_END
    holidays: FrozenSet[date] = field(default_factory=frozenset)
    working_days: FrozenSet[int] = DEFAULT_WORKING_DAYS

    def __post_init__(self):
        if self.day_start.tzinfo is not None or self.day_end.tzinfo is not None:
            raise ConfigurationError("Business day boundaries must be naive times")
        if self.day_end <= self.day_start:
            raise ConfigurationError(
                f"Business day end time {self.day_end} must be after start time {self.day_start}"
            )

        working_days = frozenset(int(day) for day in self.working_days)
        invalid_days = sorted(day for day in working_days if day not in range(7))
        if invalid_days:
            raise ConfigurationError(f"working_days must be between 0 and 6, got {invalid_days}")
        if not working_days:
            raise ConfigurationError("At least one weekday must be a working day")

        object.__setattr__(self, "working_days", working_days)
        object.__setattr__(self, "holidays", frozenset(_as_date(day) for day in self.holidays))

    @property
    def start_offset(self) -> int:
        """Business day start in ticks since midnight."""
        return ticks_of_day(self.day_start)

    @property
    def end_offset(self) -> int:
        """Business day end in ticks since midnight."""
        return ticks_of_day(self.day_end)

    @property
    def ticks_per_business_day(self) -> int:
        return self.end_offset - self.start_offset

    def is_working_weekday(self, weekday: int) -> bool:
        """Check whether a weekday (0=Monday, 6=Sunday) belongs to the working week."""
        return weekday in self.working_days

    def with_holidays(self, holidays: Iterable[date]) -> "BusinessWindowConfig":
        """Return a copy with ``holidays`` added to the existing holiday set."""
        return BusinessWindowConfig(
            day_start=self.day_start,
            day_end=self.day_end,
            holidays=self.holidays | frozenset(holidays),
            working_days=self.working_days,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "day_start": self.day_start.isoformat(),
            "day_end": self.day_end.isoformat(),
            "holidays": [day.isoformat() for day in sorted(self.holidays)],
            "working_days": sorted(self.working_days),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BusinessWindowConfig":
        return cls(
            day_start=time.fromisoformat(data["day_start"]),
            day_end=time.fromisoformat(data["day_end"]),
            holidays=frozenset(date.fromisoformat(day) for day in data.get("holidays", [])),
            working_days=frozenset(data.get("working_days", DEFAULT_WORKING_DAYS)),
        )

    def __str__(self) -> str:
        days = ", ".join(WEEKDAY_NAMES[day][:3] for day in sorted(self.working_days))
        return (
            f"{self.day_start.strftime('%H:%M')} - {self.day_end.strftime('%H:%M')} "
            f"({days}; {len(self.holidays)} holidays)"
        )


@dataclass(frozen=True)
class MoveResult:
    """
    Date and offset of day produced by a business move.

    ``end_offset`` is in ticks and always lies within the business window,
    both ends included.
    """
    end_date: date
    end_offset: int

    def end_time(self) -> time:
        return time_from_ticks(self.end_offset)
