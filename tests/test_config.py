"""
Tests for YAML configuration loading.
"""

import pytest
from datetime import date, time
from pathlib import Path

from pydantic import ValidationError

from businesstime.config import AppConfig, BusinessDayConfig, HolidayConfig


class StubHolidayProvider:
    """Holiday provider returning fixed dates without touching the holidays library."""

    def __init__(self, dates):
        self.dates = frozenset(dates)
        self.requested_years = None

    def get_holiday_dates(self, years):
        self.requested_years = list(years)
        return self.dates


def _write_config(tmp_path: Path, content: str) -> Path:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(content, encoding="utf-8")
    return config_path


class TestAppConfigDefaults:
    """Tests for built-in defaults."""

    def test_defaults(self):
        config = AppConfig()

        assert config.timezone == "Europe/Berlin"
        assert config.business_day.start == time(9, 0)
        assert config.business_day.end == time(17, 0)
        assert config.exclude_days == [5, 6]
        assert config.working_days == [0, 1, 2, 3, 4]
        assert config.holidays.get_provider() is None

    def test_default_window(self):
        window = AppConfig().build_window()

        assert window.day_start == time(9, 0)
        assert window.day_end == time(17, 0)
        assert window.holidays == frozenset()
        assert window.working_days == frozenset({0, 1, 2, 3, 4})


class TestLoadFromYaml:
    """Tests for loading configuration files."""

    def test_full_config(self, tmp_path):
        config_path = _write_config(
            tmp_path,
            """
timezone: America/New_York
business_day:
  start: "08:30"
  end: "16:00"
exclude_days: [4, 5, 6, 5]
holidays:
  dates:
    - 2024-12-24
    - 2024-12-31
""",
        )

        config = AppConfig.load_from_yaml(config_path)

        assert config.timezone == "America/New_York"
        assert config.business_day.start == time(8, 30)
        assert config.business_day.end == time(16, 0)
        assert config.exclude_days == [4, 5, 6]
        assert config.working_days == [0, 1, 2, 3]
        assert config.holidays.dates == [date(2024, 12, 24), date(2024, 12, 31)]

    def test_empty_file_uses_defaults(self, tmp_path):
        config_path = _write_config(tmp_path, "")

        assert AppConfig.load_from_yaml(config_path) == AppConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            AppConfig.load_from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        config_path = _write_config(tmp_path, "business_day: [unclosed")

        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.load_from_yaml(config_path)

    def test_root_must_be_mapping(self, tmp_path):
        config_path = _write_config(tmp_path, "- 1\n- 2\n")

        with pytest.raises(ValueError, match="mapping at the root level"):
            AppConfig.load_from_yaml(config_path)

    def test_example_config_is_valid(self):
        example = Path(__file__).parent.parent / "config.example.yaml"

        config = AppConfig.load_from_yaml(example)

        assert config.holidays.country == "DE"
        assert config.holidays.subdivision == "HH"


class TestValidation:
    """Tests for configuration validation errors."""

    def test_end_before_start(self):
        with pytest.raises(ValidationError, match="must be later than"):
            BusinessDayConfig(start=time(17, 0), end=time(9, 0))

    def test_unknown_timezone(self):
        with pytest.raises(ValidationError, match="Unknown timezone"):
            AppConfig(timezone="Mars/Olympus_Mons")

    def test_invalid_exclude_day(self):
        with pytest.raises(ValidationError, match="between 0 and 6"):
            AppConfig(exclude_days=[5, 7])

    def test_all_days_excluded(self):
        with pytest.raises(ValidationError, match="at least one working day"):
            AppConfig(exclude_days=list(range(7)))

    def test_country_requires_years(self):
        with pytest.raises(ValidationError, match="holidays.years"):
            HolidayConfig(country="DE")

    def test_subdivision_requires_country(self):
        with pytest.raises(ValidationError, match="requires holidays.country"):
            HolidayConfig(subdivision="HH", years=[2024])

    def test_validation_error_is_value_error(self):
        """The CLI reports invalid configs by catching ValueError."""
        with pytest.raises(ValueError):
            AppConfig(exclude_days=[9])


class TestBuildWindow:
    """Tests for turning configuration into a business window."""

    def test_explicit_and_provider_holidays_are_merged(self):
        config = AppConfig(
            holidays=HolidayConfig(dates=[date(2024, 12, 24)], country="DE", years=[2024])
        )
        provider = StubHolidayProvider([date(2024, 12, 25), date(2024, 12, 26)])

        window = config.build_window(holiday_provider=provider)

        assert window.holidays == frozenset(
            {date(2024, 12, 24), date(2024, 12, 25), date(2024, 12, 26)}
        )
        assert provider.requested_years == [2024]

    def test_custom_working_week(self):
        config = AppConfig(
            business_day=BusinessDayConfig(start=time(8, 0), end=time(12, 0)),
            exclude_days=[4, 5],
        )

        window = config.build_window()

        assert window.working_days == frozenset({0, 1, 2, 3, 6})
        assert window.ticks_per_business_day == 4 * 3_600_000_000

    def test_country_builds_provider(self):
        provider = HolidayConfig(country="de", subdivision="HH", years=[2024]).get_provider()

        assert provider.country == "DE"
        assert provider.subdivision == "HH"
