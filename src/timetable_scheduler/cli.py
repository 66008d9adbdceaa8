"""CLI entry point for the timetable scheduler."""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .algorithm import create_scheduler
from .config import parse_timeout
from .constants import DEFAULT_MAX_ITERATIONS
from .exceptions import ConfigurationError, DataLoadError
from .exporters import get_exporter
from .loaders import DataLoader, SchedulingData
from .models import ScheduleResult

app = typer.Typer(
    name="timetable-scheduler",
    help="Schedule courses into rooms and time slots with backtracking search",
    add_completion=False,
)
console = Console()

# Exit codes
EXIT_SUCCESS = 0
EXIT_PARTIAL = 1
EXIT_LOAD_ERROR = 2

# Default paths for input data
DEFAULT_DATA_DIR = Path("sample-data")
DEFAULT_COURSES_CSV = DEFAULT_DATA_DIR / "courses.csv"
DEFAULT_PROFESSORS_CSV = DEFAULT_DATA_DIR / "professors.csv"
DEFAULT_ROOMS_CSV = DEFAULT_DATA_DIR / "rooms.csv"
DEFAULT_TIMESLOTS_CSV = DEFAULT_DATA_DIR / "timeslots.csv"


class OutputFormat(str, Enum):
    """Output format options."""

    json = "json"
    csv = "csv"
    excel = "excel"


FORMAT_SUFFIXES = {
    OutputFormat.json: ".json",
    OutputFormat.csv: ".csv",
    OutputFormat.excel: ".xlsx",
}

CoursesOption = Annotated[
    Path, typer.Option("--courses", help="Path to courses.csv file")
]
ProfessorsOption = Annotated[
    Path, typer.Option("--professors", help="Path to professors.csv file")
]
RoomsOption = Annotated[Path, typer.Option("--rooms", help="Path to rooms.csv file")]
TimeslotsOption = Annotated[
    Path, typer.Option("--timeslots", help="Path to timeslots.csv file")
]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_data(
    courses: Path, professors: Path, rooms: Path, timeslots: Path
) -> SchedulingData:
    """Load input files, exiting with the load error code on failure."""
    loader = DataLoader(
        courses_csv=courses,
        professors_csv=professors,
        rooms_csv=rooms,
        timeslots_csv=timeslots,
    )
    try:
        with console.status("[bold green]Loading input data..."):
            return loader.load()
    except DataLoadError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(EXIT_LOAD_ERROR) from None


def _print_data_summary(data: SchedulingData) -> None:
    console.print("\n[bold]Loaded:[/bold]")
    console.print(f"  Time slots: {len(data.time_slots)}")
    console.print(f"  Professors: {len(data.professors)}")
    console.print(f"  Rooms: {len(data.rooms)}")
    console.print(f"  Courses: {len(data.courses)}")


@app.command()
def schedule(
    courses: CoursesOption = DEFAULT_COURSES_CSV,
    professors: ProfessorsOption = DEFAULT_PROFESSORS_CSV,
    rooms: RoomsOption = DEFAULT_ROOMS_CSV,
    timeslots: TimeslotsOption = DEFAULT_TIMESLOTS_CSV,
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Output file path"),
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("-f", "--format", help="Output format"),
    ] = OutputFormat.json,
    soft_preferences: Annotated[
        bool,
        typer.Option(
            "--soft-preferences",
            help="Treat preferred time windows as hard constraints",
        ),
    ] = False,
    timeout: Annotated[
        str,
        typer.Option("--timeout", help="Search timeout, e.g. 10s, 5m, 1h or seconds"),
    ] = "60s",
    seed: Annotated[
        Optional[int],
        typer.Option("--seed", help="Seed recorded for reproducible runs"),
    ] = None,
    max_iterations: Annotated[
        int,
        typer.Option("--max-iterations", help="Maximum number of search steps"),
    ] = DEFAULT_MAX_ITERATIONS,
    enforce_max_load: Annotated[
        bool,
        typer.Option("--enforce-max-load", help="Enforce professor maximum course load"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show detailed output"),
    ] = False,
) -> None:
    """Generate a timetable from CSV input files.

    Exits with 0 when every course is scheduled, 1 when the schedule is
    partial and 2 when the input cannot be loaded.
    """
    _configure_logging(verbose)

    try:
        scheduler = create_scheduler(
            treat_soft_as_hard=soft_preferences,
            timeout_millis=parse_timeout(timeout),
            seed=seed,
            max_iterations=max_iterations,
            enforce_max_load=enforce_max_load,
        )
    except ConfigurationError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(EXIT_LOAD_ERROR) from None

    data = _load_data(courses, professors, rooms, timeslots)
    _print_data_summary(data)

    with console.status("[bold green]Creating schedule..."):
        result = scheduler.schedule(
            data.courses, data.professors, data.rooms, data.time_slots
        )

    _show_results(result, verbose)

    if output:
        if not output.suffix:
            output = output.with_suffix(FORMAT_SUFFIXES[format])
        exporter = get_exporter(format.value)
        with console.status(f"[bold green]Exporting to {format.value}..."):
            exporter(result, output)
        console.print(f"\n[bold green]✓[/bold green] Schedule exported to: {output}")

    raise typer.Exit(EXIT_SUCCESS if result.success else EXIT_PARTIAL)


@app.command()
def validate(
    courses: CoursesOption = DEFAULT_COURSES_CSV,
    professors: ProfessorsOption = DEFAULT_PROFESSORS_CSV,
    rooms: RoomsOption = DEFAULT_ROOMS_CSV,
    timeslots: TimeslotsOption = DEFAULT_TIMESLOTS_CSV,
) -> None:
    """Check that the input files load without scheduling."""
    data = _load_data(courses, professors, rooms, timeslots)
    _print_data_summary(data)

    professor_ids = {p.id for p in data.professors}
    orphaned = [c.id for c in data.courses if c.professor_id not in professor_ids]
    if orphaned:
        console.print(
            f"\n[bold yellow]Warning:[/bold yellow] Courses with unknown professors: "
            f"{', '.join(orphaned)}"
        )

    console.print("\n[bold green]✓ Input files are valid[/bold green]")


def _show_results(result: ScheduleResult, verbose: bool) -> None:
    """Show schedule summary, assignments and unscheduled courses."""
    status = "[green]SUCCESS[/green]" if result.success else "[yellow]PARTIAL[/yellow]"
    console.print("\n[bold]Scheduling Results:[/bold]")
    console.print(f"  Status: {status}")
    console.print(f"  Execution time: {result.execution_time_millis} ms")
    console.print(f"  Courses scheduled: {result.scheduled_count}")
    console.print(f"  Unscheduled courses: {result.total_unscheduled}")

    if result.schedule.is_empty():
        console.print("\nNo courses scheduled.")
    else:
        table = Table(title="Course Timetable")
        table.add_column("Course ID", style="cyan")
        table.add_column("Course Name", max_width=35)
        table.add_column("Room", style="blue")
        table.add_column("Professor", style="magenta")
        table.add_column("Time Slots", style="green")

        for assignment in result.schedule.sorted_assignments():
            table.add_row(
                assignment.course.id,
                assignment.course.name,
                assignment.room.id,
                assignment.course.professor_id,
                "\n".join(str(slot) for slot in assignment.time_slots),
            )

        console.print(table)

    if result.unscheduled_courses:
        unscheduled_table = Table(title="Unscheduled Courses")
        unscheduled_table.add_column("Course ID", style="yellow")
        unscheduled_table.add_column("Reason", style="red")
        if verbose:
            unscheduled_table.add_column("Details")

        for unscheduled in result.unscheduled_courses:
            row = [unscheduled.course_id, unscheduled.reason.value]
            if verbose:
                row.append(unscheduled.details)
            unscheduled_table.add_row(*row)

        console.print(unscheduled_table)

    if result.messages:
        console.print(f"\n[bold yellow]Messages ({len(result.messages)}):[/bold yellow]")
        for message in result.messages:
            console.print(f"  [yellow]• {message}[/yellow]")


if __name__ == "__main__":
    app()
