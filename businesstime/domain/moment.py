"""
BusinessMoment: an immutable date-time that only lives inside business hours.
"""

from __future__ import annotations

import operator
from datetime import date, datetime, time
from functools import total_ordering
from typing import Any, Dict

import pendulum
from pendulum import DateTime, FixedTimezone

from .calendar import BusinessDayCalendar, BusinessDayResolver
from .models import (
    TICKS_PER_HOUR,
    TICKS_PER_MILLISECOND,
    TICKS_PER_MINUTE,
    TICKS_PER_SECOND,
    BusinessWindowConfig,
    MoveResult,
    TimeUnit,
    ticks_of_day,
)
from .move_engine import BusinessMoveEngine


def _coerce_instant(value: DateTime | datetime | str | None) -> DateTime:
    if value is None:
        return pendulum.now()
    if isinstance(value, str):
        parsed = pendulum.parse(value)
        if not isinstance(parsed, DateTime):
            raise ValueError(f"'{value}' does not describe a date and time")
        return parsed
    if isinstance(value, DateTime):
        return value
    if isinstance(value, datetime):
        # Naive datetimes are taken as UTC, like pendulum.instance does
        return pendulum.instance(value)
    raise TypeError(f"Cannot build a business moment from {type(value).__name__}")


@total_ordering
class BusinessMoment:
    """
    A point in time on the business timeline.

    The wrapped instant is normalized on construction: its wall-clock time
    always falls within the business window of a business day. Moves by
    sub-day units or business days skip nights, weekends and holidays;
    weeks, months and years are plain calendar arithmetic followed by
    normalization. Every operation returns a new instance.
    """

    __slots__ = ("_instant", "_config", "_engine")

    def __init__(
        self,
        instant: DateTime | datetime | str | None = None,
        config: BusinessWindowConfig | None = None,
        *,
        calendar: BusinessDayResolver | None = None,
    ) -> None:
        config = config or BusinessWindowConfig()
        engine = BusinessMoveEngine(config, calendar or BusinessDayCalendar(config))
        raw = _coerce_instant(instant)

        day = raw.date()
        offset = ticks_of_day(raw.time())
        result = engine.normalize(day, offset)
        if result.end_date != day or result.end_offset != offset:
            raw = self._compose(result, raw)

        self._instant = raw
        self._config = config
        self._engine = engine

    @staticmethod
    def _compose(result: MoveResult, reference: DateTime) -> DateTime:
        end_time = result.end_time()
        return pendulum.datetime(
            result.end_date.year,
            result.end_date.month,
            result.end_date.day,
            end_time.hour,
            end_time.minute,
            end_time.second,
            end_time.microsecond,
            tz=reference.tz,
        )

    def _derive(self, instant: DateTime) -> "BusinessMoment":
        return BusinessMoment(instant, self._config, calendar=self._engine.resolver)

    def _move(self, units: int, unit_ticks: int) -> "BusinessMoment":
        result = self._engine.move(
            self._instant.date(),
            ticks_of_day(self._instant.time()),
            operator.index(units),
            unit_ticks,
        )
        return self._derive(self._compose(result, self._instant))

    @property
    def instant(self) -> DateTime:
        return self._instant

    @property
    def config(self) -> BusinessWindowConfig:
        return self._config

    def plus(self, amount: int, unit: TimeUnit | str) -> "BusinessMoment":
        """Return a copy moved forward by ``amount`` units (negative moves backward)."""
        unit = TimeUnit(unit)
        if unit.is_calendar_unit:
            return self.add(**{unit.value: amount})
        return self._move(amount, unit.ticks(self._config))

    def minus(self, amount: int, unit: TimeUnit | str) -> "BusinessMoment":
        """Return a copy moved backward by ``amount`` units."""
        return self.plus(-operator.index(amount), unit)

    def add(
        self,
        years: int = 0,
        months: int = 0,
        weeks: int = 0,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
        milliseconds: int = 0,
        microseconds: int = 0,
    ) -> "BusinessMoment":
        """
        Add a mixed duration.

        Years, months and weeks are applied first as calendar arithmetic.
        The remaining fields are combined into a single business move, days
        counting as whole business days.
        """
        moment = self
        if years or months or weeks:
            moment = self._derive(self._instant.add(years=years, months=months, weeks=weeks))

        ticks = (
            operator.index(days) * self._config.ticks_per_business_day
            + operator.index(hours) * TICKS_PER_HOUR
            + operator.index(minutes) * TICKS_PER_MINUTE
            + operator.index(seconds) * TICKS_PER_SECOND
            + operator.index(milliseconds) * TICKS_PER_MILLISECOND
            + operator.index(microseconds)
        )
        if ticks == 0:
            return moment
        return moment._move(ticks, 1)

    def subtract(
        self,
        years: int = 0,
        months: int = 0,
        weeks: int = 0,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
        milliseconds: int = 0,
        microseconds: int = 0,
    ) -> "BusinessMoment":
        """Subtract a mixed duration, see :meth:`add`."""
        return self.add(
            years=-years,
            months=-months,
            weeks=-weeks,
            days=-days,
            hours=-hours,
            minutes=-minutes,
            seconds=-seconds,
            milliseconds=-milliseconds,
            microseconds=-microseconds,
        )

    def set(self, **fields: Any) -> "BusinessMoment":
        """Replace calendar fields (year, month, day, hour, ...) and normalize the result."""
        return self._derive(self._instant.set(**fields))

    def in_timezone(self, tz: str) -> "BusinessMoment":
        """Same instant seen from another time zone, normalized against that zone's wall clock."""
        return self._derive(self._instant.in_timezone(tz))

    def is_start_of_business_day(self) -> bool:
        return self.time() == self._config.day_start

    def is_end_of_business_day(self) -> bool:
        return self.time() == self._config.day_end

    # Calendar field accessors

    @property
    def year(self) -> int:
        return self._instant.year

    @property
    def month(self) -> int:
        return self._instant.month

    @property
    def day(self) -> int:
        return self._instant.day

    @property
    def hour(self) -> int:
        return self._instant.hour

    @property
    def minute(self) -> int:
        return self._instant.minute

    @property
    def second(self) -> int:
        return self._instant.second

    @property
    def microsecond(self) -> int:
        return self._instant.microsecond

    @property
    def day_of_week(self) -> int:
        """Weekday of the moment, 0=Monday, 6=Sunday."""
        return self._instant.weekday()

    @property
    def timezone_name(self) -> str | None:
        return self._instant.timezone_name

    def date(self) -> date:
        return self._instant.date()

    def time(self) -> time:
        return self._instant.time()

    def to_datetime(self) -> DateTime:
        return self._instant

    def isoformat(self) -> str:
        return self._instant.isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data form of the moment and its business window."""
        timezone = None if isinstance(self._instant.tz, FixedTimezone) else self._instant.timezone_name
        return {
            "instant": self._instant.isoformat(),
            "timezone": timezone,
            **self._config.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BusinessMoment":
        instant = _coerce_instant(data["instant"])
        if data.get("timezone"):
            instant = instant.in_timezone(data["timezone"])
        return cls(instant, BusinessWindowConfig.from_dict(data))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BusinessMoment):
            return NotImplemented
        return self._instant == other._instant and self._config == other._config

    def __lt__(self, other: "BusinessMoment") -> bool:
        if not isinstance(other, BusinessMoment):
            return NotImplemented
        return self._instant < other._instant

    def __hash__(self) -> int:
        return hash((self._instant, self._config))

    def __str__(self) -> str:
        return self.isoformat()

    def __repr__(self) -> str:
        return f"BusinessMoment('{self.isoformat()}', {self._config})"
