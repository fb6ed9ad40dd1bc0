"""
businesstime - date-time arithmetic that skips nights, weekends and holidays.
"""

from .domain import (
    BusinessDayCalendar,
    BusinessMoment,
    BusinessMoveEngine,
    BusinessTimeError,
    BusinessWindowConfig,
    ConfigurationError,
    InvariantViolation,
    RangeError,
    TimeUnit,
)

__version__ = "0.1.0"

__all__ = [
    "BusinessDayCalendar",
    "BusinessMoment",
    "BusinessMoveEngine",
    "BusinessTimeError",
    "BusinessWindowConfig",
    "ConfigurationError",
    "InvariantViolation",
    "RangeError",
    "TimeUnit",
    "__version__",
]
