"""
Business time displacement.

This is the heart of the package: pure integer arithmetic that moves a
(date, offset of day) pair by a signed amount of business time, counting only
time inside the business window on business days. No I/O, no shared state.

Algorithm:
1. Re-base the start onto the business timeline. Forward moves are measured
   from the window start of the current business day, backward moves from
   the window end.
2. Split the re-based total into whole business days and a remainder. The
   remainder is kept within [1, ticks_per_day] (or its negative) so that a
   move landing exactly on a day boundary stays on that day's window edge.
3. Ask the resolver for the business day ``days`` away.
4. Add the remainder to the window start (forward) or end (backward).
"""

import logging
from datetime import date

from .calendar import BusinessDayResolver
from .exceptions import InvariantViolation, RangeError
from .models import BusinessWindowConfig, MoveResult

logger = logging.getLogger(__name__)

# Largest move representable as a signed 64-bit tick count
MAX_MOVE_TICKS = 2**63 - 1


class BusinessMoveEngine:
    """
    Moves points on the business timeline by a signed number of units.

    The engine is stateless apart from its immutable window and resolver, so
    one instance can be shared freely between threads.
    """

    def __init__(self, window: BusinessWindowConfig, resolver: BusinessDayResolver):
        self.window = window
        self.resolver = resolver

    def move(
        self,
        start_date: date,
        start_offset: int,
        units: int,
        unit_ticks: int,
    ) -> MoveResult:
        """
        Move ``units`` units of ``unit_ticks`` ticks each from a starting point.

        Args:
            start_date: Calendar date of the starting point
            start_offset: Starting time of day in ticks since midnight
            units: Signed number of units to move
            unit_ticks: Size of one unit in ticks, must be positive

        Returns:
            MoveResult whose offset lies within the business window

        Raises:
            ValueError: If unit_ticks is not positive
            RangeError: If the move or the resulting date cannot be represented
        """
        if unit_ticks <= 0:
            raise ValueError(f"Unit size must be a positive number of ticks, got {unit_ticks}")

        total = units * unit_ticks
        if abs(total) > MAX_MOVE_TICKS:
            raise RangeError(f"Moving {units} x {unit_ticks} ticks overflows a 64-bit tick count")

        day_start = self.window.start_offset
        day_end = self.window.end_offset
        ticks_per_day = day_end - day_start
        is_working_day = self.resolver.is_business_day(start_date)

        days = 0
        if total >= 0:
            if is_working_day:
                if start_offset > day_end:
                    # After hours: the current business moment is tomorrow's window start
                    days += 1
                else:
                    total += max(0, start_offset - day_start)

            if total == 0:
                remainder = 0
            else:
                whole_days, part = divmod(total - 1, ticks_per_day)
                days += whole_days
                remainder = part + 1
        else:
            if not is_working_day or start_offset < day_start:
                # The current business moment is the previous business day's window end
                days -= 1
            else:
                total -= max(0, day_end - start_offset)

            whole_days, part = divmod(-total - 1, ticks_per_day)
            days -= whole_days
            remainder = -(part + 1)

        end_date = self._shift(start_date, days, is_working_day)
        end_offset = day_start + remainder if remainder >= 0 else day_end + remainder

        logger.debug(
            "Moved %s +%d ticks by %d x %d ticks -> %s +%d ticks (%d business days)",
            start_date,
            start_offset,
            units,
            unit_ticks,
            end_date,
            end_offset,
            days,
        )
        return MoveResult(end_date=end_date, end_offset=end_offset)

    def normalize(self, day: date, offset: int) -> MoveResult:
        """
        Snap an arbitrary (date, offset of day) onto the business timeline.

        Times before the window snap to the window start of the same business
        day; times after the window, and any time on a non-business day, snap
        forward to the window start of the next business day.
        """
        return self.move(day, offset, 0, 1)

    def _shift(self, start_date: date, days: int, is_working_day: bool) -> date:
        """Resolve the business day ``days`` away, skipping the resolver when nothing moves."""
        if days == 0 and is_working_day:
            return start_date

        try:
            end_date = self.resolver.shift_business_days(start_date, days)
        except RangeError:
            raise
        except OverflowError as exc:
            raise RangeError(f"Cannot shift {start_date} by {days} business days: {exc}") from exc

        if not self.resolver.is_business_day(end_date):
            raise InvariantViolation(
                f"Resolver shifted {start_date} by {days} business days onto non-business day {end_date}"
            )
        return end_date
