"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import BusinessTimeError
from ..domain.models import WEEKDAY_NAMES, BusinessWindowConfig, TimeUnit
from ..domain.moment import BusinessMoment

app = typer.Typer(
    name="businesstime",
    help="Add and subtract business time, skipping nights, weekends and holidays",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml"),
]


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """Load the given config file, the default one if present, or built-in defaults."""
    if config_file is not None:
        return AppConfig.load_from_yaml(config_file)

    default_path = get_default_config_path()
    if default_path.exists():
        return AppConfig.load_from_yaml(default_path)
    return AppConfig()


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def _parse_start(value: str, tz: str) -> pendulum.DateTime:
    parsed = pendulum.parse(value, tz=tz)
    if not isinstance(parsed, pendulum.DateTime):
        raise ValueError(f"'{value}' is not a date and time")
    return parsed


def _describe_window(window: BusinessWindowConfig, tz: str) -> str:
    return f"{window}, {tz}"


def _format_moment(moment: BusinessMoment) -> str:
    return f"{WEEKDAY_NAMES[moment.day_of_week]} {moment.isoformat()}"


@app.command()
def move(
    start: Annotated[str, typer.Argument(help="Start date and time, e.g. '2024-11-25 16:30'")],
    amount: Annotated[int, typer.Argument(help="Number of units to move")],
    unit: Annotated[TimeUnit, typer.Argument(help="Unit to move by")],
    back: Annotated[bool, typer.Option("--back", "-b", help="Move backwards in business time.")] = False,
    config_file: ConfigOption = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")] = False,
):
    """
    Move a point in time by an amount of business time.

    Examples:

        businesstime move "2024-11-28 16:30" 3 hours

        businesstime move "2024-11-25 09:15" 30 minutes --back
    """
    _configure_logging(verbose)

    try:
        config = _load_config(config_file)
        window = config.build_window()

        moment = BusinessMoment(_parse_start(start, config.timezone), window)
        result = moment.minus(amount, unit) if back else moment.plus(amount, unit)

        console.print(f"Window: {_describe_window(window, config.timezone)}")
        console.print(f"Start:  {_format_moment(moment)}")
        console.print(f"Result: {_format_moment(result)}")

    except FileNotFoundError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    except (BusinessTimeError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def normalize(
    start: Annotated[str, typer.Argument(help="Date and time to snap onto business hours")],
    config_file: ConfigOption = None,
):
    """
    Show the business moment a point in time corresponds to.
    """
    try:
        config = _load_config(config_file)
        window = config.build_window()

        moment = BusinessMoment(_parse_start(start, config.timezone), window)
        console.print(_format_moment(moment))

    except FileNotFoundError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    except (BusinessTimeError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def holidays(
    config_file: ConfigOption = None,
):
    """
    List all configured holidays.
    """
    try:
        config = _load_config(config_file)

        names = {day: "Custom holiday" for day in config.holidays.dates}
        provider = config.holidays.get_provider()
        if provider is not None:
            names.update(provider.get_holidays(config.holidays.years))

        if not names:
            console.print("[yellow]No holidays configured.[/yellow]")
            return

        table = Table(
            title="Configured holidays",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Date", style="bold yellow")
        table.add_column("Weekday")
        table.add_column("Name", style="dim")

        for day in sorted(names):
            table.add_row(
                day.isoformat(),
                WEEKDAY_NAMES[day.weekday()],
                names[day]
            )

        console.print()
        console.print(table)
        console.print()

    except FileNotFoundError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    except (BusinessTimeError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]businesstime[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
