"""
Domain layer - Pure business time arithmetic without I/O.
"""

from .calendar import BusinessDayCalendar, BusinessDayResolver
from .exceptions import BusinessTimeError, ConfigurationError, InvariantViolation, RangeError
from .models import BusinessWindowConfig, MoveResult, TimeUnit
from .moment import BusinessMoment
from .move_engine import BusinessMoveEngine

__all__ = [
    "BusinessDayCalendar",
    "BusinessDayResolver",
    "BusinessMoment",
    "BusinessMoveEngine",
    "BusinessTimeError",
    "BusinessWindowConfig",
    "ConfigurationError",
    "InvariantViolation",
    "MoveResult",
    "RangeError",
    "TimeUnit",
]
