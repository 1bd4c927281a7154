"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import List, Optional, Annotated

import typer
from rich.console import Console
from rich.table import Table

from ..adapters.calendar_file import CalendarFileSource, format_minute_of_day
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import MeetingFinderError
from ..domain.models import TimeRange
from ..services.meeting_finder import MeetingFinderService

app = typer.Typer(
    name="meetingfinder",
    help="Find the best meeting windows of a day for mandatory and optional attendees",
    add_completion=False
)

console = Console()


def _configure_logging(level: str, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else level,
        format="%(levelname)s %(name)s: %(message)s"
    )


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """
    Load the configuration file.

    An explicitly passed file must exist; without one the defaults are used
    when no config.yaml can be found.
    """
    if config_file is not None:
        return AppConfig.load_from_yaml(config_file)

    default_path = get_default_config_path()
    if default_path.exists():
        return AppConfig.load_from_yaml(default_path)
    return AppConfig()


def _format_window(window: TimeRange) -> str:
    return f"{format_minute_of_day(window.start)} – {format_minute_of_day(window.end)} Uhr"


@app.command()
def find(
    attendees: Annotated[Optional[List[str]], typer.Argument(help="Pflicht-Teilnehmer (Namen oder Aliase).")] = None,
    optional: Annotated[Optional[List[str]], typer.Option("--optional", "-o", help="Optionaler Teilnehmer, mehrfach verwendbar.")] = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Meeting duration in minutes")] = None,
    calendar: Annotated[Optional[Path], typer.Option("--calendar", help="Kalender-Datei (JSON oder YAML).")] = None,
    skip_invalid: Annotated[bool, typer.Option("--skip-invalid", help="Ungültige Kalender-Einträge überspringen statt abzubrechen.")] = False,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug-Ausgaben aktivieren.")] = False,
):
    """
    Find meeting windows for one day.

    Examples:

        # Mandatory attendees only
        meetingfinder find alice bob --calendar day.json

        # With optional attendees and a custom duration
        meetingfinder find alice -o carol -o dave --duration 60
    """
    try:
        config = _load_config(config_file)
        _configure_logging(config.log_level, verbose)

        calendar_path = calendar or config.calendar_file
        if calendar_path is None:
            console.print(
                "[bold red]Fehler:[/bold red] Keine Kalender-Datei angegeben. "
                "Nutzen Sie --calendar oder calendar_file in der Config."
            )
            raise typer.Exit(1)

        mandatory = config.resolve_attendees(attendees or [])
        optional_attendees = [
            attendee for attendee in config.resolve_attendees(optional or [])
            if attendee not in mandatory
        ]
        min_duration = duration if duration is not None else config.defaults.duration_minutes

        console.print("[bold cyan]📊 Zusammenfassung:[/bold cyan]")
        console.print(f"   Pflicht-Teilnehmer: {', '.join(mandatory) or '-'}")
        console.print(f"   Optionale Teilnehmer: {', '.join(optional_attendees) or '-'}")
        console.print(f"   Mindestdauer: {min_duration} Minuten")
        console.print()

        service = MeetingFinderService(event_source=CalendarFileSource(calendar_path, skip_invalid=skip_invalid))
        windows = service.find_meeting_times(
            mandatory_attendees=mandatory,
            optional_attendees=optional_attendees,
            duration_minutes=min_duration
        )

        if not windows:
            console.print(
                "[yellow]⚠ Keine passenden Zeitfenster gefunden.[/yellow]\n"
                "Versuchen Sie eine kürzere Mindestdauer oder weniger Pflicht-Teilnehmer."
            )
            return

        table = Table(
            title=f"{len(windows)} Zeitfenster gefunden",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("#", style="dim")
        table.add_column("Zeitfenster", style="bold green")
        table.add_column("Dauer", justify="right")

        for idx, window in enumerate(windows, 1):
            table.add_row(str(idx), _format_window(window), f"{window.duration()} Min.")

        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError, MeetingFinderError) as e:
        console.print(f"[bold red]Fehler:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def list_colleagues(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to config file"
    )
):
    """
    List all configured colleagues.
    """
    try:
        config = _load_config(config_file)

        if not config.colleagues:
            console.print("[yellow]Keine Kollegen in der Config-Datei definiert.[/yellow]")
            return

        table = Table(
            title="Konfigurierte Kollegen",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Name (Alias)", style="bold yellow")
        table.add_column("Kalender-Name", style="dim")

        for colleague in config.colleagues:
            table.add_row(colleague.display_name(), colleague.identifier)

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Fehler:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]meetingfinder[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
