"""
Adapters layer - External holiday data.
"""

from .holiday_provider import HolidayProvider

__all__ = ["HolidayProvider"]
