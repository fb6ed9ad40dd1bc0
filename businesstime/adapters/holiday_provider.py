"""
Public holiday lookup using the holidays library.
"""

import logging
from datetime import date
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

import holidays

from ..domain.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class HolidayProvider:
    """Provides public holidays for a country and optional subdivision."""

    def __init__(self, country: str, subdivision: Optional[str] = None, language: Optional[str] = None):
        """
        Initialize the holiday provider.

        Args:
            country: ISO 3166-1 country code, e.g. 'DE' or 'US'
            subdivision: Optional state/province code, e.g. 'HH' or 'CA'
            language: Optional language for holiday names
        """
        self.country = country.upper()
        self.subdivision = subdivision
        self.language = language
        self._cache: Dict[Tuple[int, ...], List[Tuple[date, str]]] = {}

    def get_holidays(self, years: Iterable[int]) -> List[Tuple[date, str]]:
        """
        Get all holidays in the given years, sorted by date.

        Raises:
            ConfigurationError: If the country or subdivision is unknown
        """
        cache_key = tuple(sorted(set(years)))
        if cache_key in self._cache:
            return self._cache[cache_key]

        try:
            country_holidays = holidays.country_holidays(
                self.country,
                subdiv=self.subdivision,
                years=cache_key,
                language=self.language,
            )
        except NotImplementedError as exc:
            region = f"{self.country}-{self.subdivision}" if self.subdivision else self.country
            raise ConfigurationError(f"Unknown holiday country or subdivision '{region}'") from exc

        result = sorted(country_holidays.items())
        logger.debug(
            "Loaded %d holidays for %s%s in %s",
            len(result),
            self.country,
            f"-{self.subdivision}" if self.subdivision else "",
            ", ".join(str(year) for year in cache_key),
        )

        self._cache[cache_key] = result
        return result

    def get_holiday_dates(self, years: Iterable[int]) -> FrozenSet[date]:
        """Get the set of holiday dates in the given years."""
        return frozenset(day for day, _ in self.get_holidays(years))

    def clear_cache(self) -> None:
        """Clear the holiday cache."""
        self._cache.clear()
