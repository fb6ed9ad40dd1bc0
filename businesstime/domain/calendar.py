"""
Business-day resolver built on numpy's business day calendar.

The resolver answers two questions for the move engine: is a date a business
day, and which business day lies ``n`` business days away. It is built
directly from a ``BusinessWindowConfig``; there is no global registry.
"""

from __future__ import annotations

from datetime import date
from typing import Protocol

import numpy as np

from .exceptions import RangeError
from .models import BusinessWindowConfig

MAX_BUSINESS_DAY_SHIFT = 2**31 - 1


class BusinessDayResolver(Protocol):
    """Protocol describing the business-day capability needed by the move engine."""

    def is_business_day(self, day: date) -> bool:
        """Return True if ``day`` is neither a holiday nor outside the working week."""

    def shift_business_days(self, day: date, count: int) -> date:
        """Return the business day ``count`` business days away from ``day``."""


def _to_datetime64(day: date) -> np.datetime64:
    return np.datetime64(date(day.year, day.month, day.day), "D")


class BusinessDayCalendar:
    """
    Holiday and working-week aware day arithmetic.

    Shifting first rolls a non-business start date forward to the next
    business day and then steps ``count`` business days. Consequently a
    shift of 0 from a Saturday yields Monday, while a shift of -1 from a
    Saturday yields Friday.
    """

    def __init__(self, window: BusinessWindowConfig):
        self.window = window
        weekmask = [window.is_working_weekday(day) for day in range(7)]
        holidays = np.array(sorted(window.holidays), dtype="datetime64[D]")
        self._busdaycal = np.busdaycalendar(weekmask=weekmask, holidays=holidays)

    def is_business_day(self, day: date) -> bool:
        return bool(np.is_busday(_to_datetime64(day), busdaycal=self._busdaycal))

    def shift_business_days(self, day: date, count: int) -> date:
        if abs(count) > MAX_BUSINESS_DAY_SHIFT:
            raise RangeError(
                f"Cannot shift by {count} business days; the limit is {MAX_BUSINESS_DAY_SHIFT}"
            )

        shifted = np.busday_offset(
            _to_datetime64(day),
            count,
            roll="forward",
            busdaycal=self._busdaycal,
        )

        # datetime64 values outside the datetime.date range come back as ints
        result = shifted.item()
        if not isinstance(result, date):
            raise RangeError(f"Shifting {day} by {count} business days leaves the supported date range")
        return result

    def next_business_day(self, day: date) -> date:
        """First business day strictly after ``day``."""
        if self.is_business_day(day):
            return self.shift_business_days(day, 1)
        return self.shift_business_days(day, 0)

    def previous_business_day(self, day: date) -> date:
        """Last business day strictly before ``day``."""
        return self.shift_business_days(day, -1)

    def __repr__(self) -> str:
        return f"BusinessDayCalendar({self.window})"
