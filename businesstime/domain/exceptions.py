"""
Domain-specific exception hierarchy for business time arithmetic.
"""


class BusinessTimeError(Exception):
    """Base class for all business time errors."""


class ConfigurationError(BusinessTimeError, ValueError):
    """Raised when a business window, working week or holiday source is invalid."""


class RangeError(BusinessTimeError, OverflowError):
    """Raised when a move cannot be represented (tick overflow, day count, date range)."""


class InvariantViolation(BusinessTimeError, RuntimeError):
    """Raised when a business-day resolver hands back a non-business day."""
