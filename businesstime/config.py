"""
Configuration management using Pydantic models loaded from YAML.
"""

from datetime import date, time
from pathlib import Path
from typing import List, Optional

import pendulum
import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .adapters.holiday_provider import HolidayProvider
from .domain.models import DEFAULT_DAY_END, DEFAULT_DAY_START, BusinessWindowConfig


class BusinessDayConfig(BaseModel):
    """Opening and closing time of a business day."""
    start: time = DEFAULT_DAY_START
    end: time = DEFAULT_DAY_END

    @model_validator(mode="after")
    def validate_window_order(self) -> "BusinessDayConfig":
        """Ensure the configured window opens before it closes."""
        if self.end <= self.start:
            raise ValueError("business_day.end must be later than business_day.start")
        return self


class HolidayConfig(BaseModel):
    """Explicit holiday dates plus an optional public holiday calendar."""
    dates: List[date] = Field(default_factory=list)
    country: Optional[str] = None
    subdivision: Optional[str] = None
    years: List[int] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_country_years(self) -> "HolidayConfig":
        """A public holiday calendar needs the years to load."""
        if self.country and not self.years:
            raise ValueError("holidays.years must be set when holidays.country is given")
        if self.subdivision and not self.country:
            raise ValueError("holidays.subdivision requires holidays.country")
        return self

    def get_provider(self) -> Optional[HolidayProvider]:
        """Build a holiday provider for the configured country, if any."""
        if not self.country:
            return None
        return HolidayProvider(country=self.country, subdivision=self.subdivision)


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "Europe/Berlin"
    business_day: BusinessDayConfig = Field(default_factory=BusinessDayConfig)
    exclude_days: List[int] = Field(default_factory=lambda: [5, 6])  # Saturday, Sunday
    holidays: HolidayConfig = Field(default_factory=HolidayConfig)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the time zone is a known IANA identifier."""
        try:
            pendulum.timezone(value)
        except Exception as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @field_validator("exclude_days")
    @classmethod
    def validate_exclude_days(cls, value: List[int]) -> List[int]:
        """Ensure weekdays are in valid range and deduplicated."""
        invalid_days = [day for day in value if day not in range(7)]
        if invalid_days:
            raise ValueError(f"exclude_days must be between 0 and 6, got {invalid_days}")
        # Preserve order while removing duplicates
        seen: set[int] = set()
        deduped: List[int] = []
        for day in value:
            if day not in seen:
                deduped.append(day)
                seen.add(day)
        if len(deduped) == 7:
            raise ValueError("exclude_days must leave at least one working day")
        return deduped

    @property
    def working_days(self) -> List[int]:
        return [day for day in range(7) if day not in self.exclude_days]

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)

    def build_window(self, holiday_provider: Optional[HolidayProvider] = None) -> BusinessWindowConfig:
        """
        Build the business window described by this configuration.

        Args:
            holiday_provider: Provider to use instead of the configured country

        Returns:
            BusinessWindowConfig combining explicit and public holidays
        """
        holiday_dates = set(self.holidays.dates)

        provider = holiday_provider or self.holidays.get_provider()
        if provider is not None:
            holiday_dates |= provider.get_holiday_dates(self.holidays.years)

        return BusinessWindowConfig(
            day_start=self.business_day.start,
            day_end=self.business_day.end,
            holidays=frozenset(holiday_dates),
            working_days=frozenset(self.working_days),
        )


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
