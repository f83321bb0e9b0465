"""Focus Ramp developer CLI.

Runs the schedule generator, the plan store and the session timer locally,
through the same code paths the service uses.
"""

import time
from datetime import UTC, date, datetime

import typer
from loguru import logger
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

import cli.bootstrap  # noqa: F401  # sets up sys.path before focusramp imports
from focusramp.config.settings import settings
from focusramp.core.logger import setup_logger
from focusramp.db.session import get_engine, get_session
from focusramp.plans.errors import PartialPersistenceFailure
from focusramp.plans.models import Base
from focusramp.plans.repository import create_focus_plan
from focusramp.schedule.enums import Weekday
from focusramp.schedule.errors import ConfigurationError
from focusramp.schedule.generator import generate_schedule
from focusramp.schedule.models import Segment
from focusramp.schedule.schemas import PlanConfigRequest
from focusramp.schedule.segments import plan_segments
from focusramp.schedule.summary import build_day_rows, format_training_weekdays
from focusramp.session.models import TimerState, TimerStatus
from focusramp.session.recorder import SessionRecorder, restore_timer
from focusramp.session.snapshot import SnapshotCodec
from focusramp.session.store import InMemoryKeyValueStore, KeyValueStore, RedisKeyValueStore

console = Console()

app = typer.Typer(
    name="focusramp-cli",
    help="Focus Ramp CLI - schedule preview, plan creation and a terminal session timer",
    add_completion=False,
)

DEFAULT_USER_ID = "cli-user"
CLI_PLAN_ID = "cli-plan"


def _setup_logging(debug: bool = False) -> None:
    """Set up console logging.

    Args:
        debug: Enable debug logging level
    """
    setup_logger(level="DEBUG" if debug else settings.log_level)


def _parse_weekdays(raw: str) -> list[Weekday]:
    """Parse "mon,wed,fri" into weekday tags."""
    try:
        return [Weekday(part.strip().title()) for part in raw.split(",") if part.strip()]
    except ValueError as e:
        raise typer.BadParameter(f"Unknown weekday in '{raw}'. Use Mon,Tue,Wed,Thu,Fri,Sat,Sun.") from e


def _parse_date(raw: str | None) -> date | None:
    if raw is None:
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError as e:
        raise typer.BadParameter(f"Expected an ISO date (YYYY-MM-DD), got '{raw}'") from e


def _build_request(
    target: int,
    starting: int,
    weekdays: str,
    end: str | None,
    count: int | None,
) -> PlanConfigRequest:
    try:
        return PlanConfigRequest(
            target_daily_minutes=target,
            starting_daily_minutes=starting,
            training_weekdays=_parse_weekdays(weekdays),
            end_date=_parse_date(end),
            training_days_count=count,
        )
    except ValidationError as e:
        console.print(Panel(Text(str(e), style="red"), title="Invalid plan configuration", border_style="red"))
        raise typer.Exit(code=2) from e


def _format_clock(seconds: int) -> str:
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


@app.command()
def preview(
    target: int = typer.Option(..., "--target", "-t", help="Goal minutes per day"),
    starting: int = typer.Option(settings.default_starting_minutes, "--starting", "-s", help="Minutes on day one"),
    weekdays: str = typer.Option("Mon,Tue,Wed,Thu,Fri", "--weekdays", "-w", help="Comma-separated training weekdays"),
    start: str | None = typer.Option(None, "--start", help="Start date (YYYY-MM-DD), defaults to today"),
    end: str | None = typer.Option(None, "--end", help="Inclusive end date (YYYY-MM-DD)"),
    count: int | None = typer.Option(None, "--count", "-n", help="Number of training days"),
) -> None:
    """Print the generated schedule without storing anything."""
    request = _build_request(target, starting, weekdays, end, count)
    start_date = _parse_date(start) or datetime.now(UTC).date()

    try:
        days = generate_schedule(request.to_schedule_config(start_date), max_dates=settings.max_training_dates)
    except ConfigurationError as e:
        console.print(Panel(Text(str(e), style="red"), title="Invalid plan configuration", border_style="red"))
        raise typer.Exit(code=2) from e

    table = Table(title=f"Focus plan - {format_training_weekdays(request.training_weekdays)}")
    table.add_column("Day", justify="right")
    table.add_column("Date")
    table.add_column("+min", justify="right")
    table.add_column("Target", justify="right")
    table.add_column("Pomodoro plan")
    for row in build_day_rows(days):
        table.add_row(
            str(row.index),
            row.date_label,
            f"+{row.increment_minutes}" if row.increment_minutes else "",
            f"{row.daily_target_minutes} min",
            row.pomodoro_plan,
        )
    console.print(table)


@app.command()
def create_plan(
    user_id: str = typer.Option(DEFAULT_USER_ID, "--user-id", help="Owner of the plan"),
    target: int = typer.Option(..., "--target", "-t", help="Goal minutes per day"),
    starting: int = typer.Option(settings.default_starting_minutes, "--starting", "-s", help="Minutes on day one"),
    weekdays: str = typer.Option("Mon,Tue,Wed,Thu,Fri", "--weekdays", "-w", help="Comma-separated training weekdays"),
    end: str | None = typer.Option(None, "--end", help="Inclusive end date (YYYY-MM-DD)"),
    count: int | None = typer.Option(None, "--count", "-n", help="Number of training days"),
) -> None:
    """Generate a plan starting today and store it with all its days."""
    request = _build_request(target, starting, weekdays, end, count)
    today = datetime.now(UTC).date()

    try:
        with get_session() as session:
            plan_id = create_focus_plan(session, user_id, request, today)
    except ConfigurationError as e:
        console.print(Panel(Text(str(e), style="red"), title="Invalid plan configuration", border_style="red"))
        raise typer.Exit(code=2) from e
    except PartialPersistenceFailure as e:
        console.print(
            Panel(
                Text(str(e), style="bold red"),
                subtitle="The plan exists without all of its days. Regenerate it or retry.",
                border_style="red",
            )
        )
        raise typer.Exit(code=1) from e

    console.print(f"[green]Created plan[/green] {plan_id}")


@app.command()
def init_db() -> None:
    """Create the plan store tables."""
    Base.metadata.create_all(bind=get_engine())
    console.print("[green]Database tables created[/green]")


def _snapshot_store(use_redis: bool) -> KeyValueStore:
    if use_redis:
        return RedisKeyValueStore()
    return InMemoryKeyValueStore()


@app.command()
def timer(
    minutes: int = typer.Option(..., "--minutes", "-m", help="Focus minutes for the session"),
    user_id: str = typer.Option(DEFAULT_USER_ID, "--user-id", help="Owner of the snapshot slot"),
    use_redis: bool = typer.Option(False, "--redis", help="Mirror the snapshot to Redis so the session survives restarts"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Run one day's segments in the terminal.

    Ctrl+C pauses and leaves the snapshot in place; running the same command
    again resumes where it left off when --redis is used.
    """
    _setup_logging(debug)

    try:
        segments = plan_segments(minutes)
    except ConfigurationError as e:
        raise typer.BadParameter(str(e)) from e

    day_date = datetime.now(UTC).date().isoformat()
    day_id = f"cli-{day_date}-{minutes}"
    codec = SnapshotCodec(_snapshot_store(use_redis))
    recorder = SessionRecorder(
        codec,
        owner_id=user_id,
        plan_id=CLI_PLAN_ID,
        day_id=day_id,
        day_date=day_date,
        segments=segments,
    )

    def on_segment_complete(index: int, segment: Segment) -> None:
        console.print(f"[green]Work segment {index + 1} done[/green] ({segment.minutes} min)")

    def on_work_segment_start(index: int, segment: Segment) -> None:
        console.print(f"[cyan]Work segment {index + 1} started[/cyan] ({segment.minutes} min)")

    def on_state_change(state: TimerState) -> None:
        recorder.on_state_change(state)
        logger.debug(f"Timer state: {state}")

    session_timer = restore_timer(
        segments,
        codec.load(user_id),
        plan_id=CLI_PLAN_ID,
        day_id=day_id,
        on_state_change=on_state_change,
        on_segment_complete=on_segment_complete,
        on_work_segment_start=on_work_segment_start,
    )

    if session_timer.status == TimerStatus.IDLE:
        session_timer.start()
    else:
        console.print("[yellow]Resuming saved session[/yellow]")
        session_timer.resume()

    try:
        while session_timer.status != TimerStatus.FINISHED:
            time.sleep(settings.tick_interval_seconds)
            state = session_timer.tick()
            segment = session_timer.current_segment
            console.print(
                f"\r{segment.kind.value:<5} {state.segment_index + 1}/{len(segments)}  {_format_clock(state.seconds_remaining)}",
                end="",
            )
    except KeyboardInterrupt:
        session_timer.pause()
        console.print("\n[yellow]Paused. Snapshot kept.[/yellow]")
        raise typer.Exit(code=130) from None

    console.print(f"\n[bold green]Session complete: {minutes} focused minutes[/bold green]")


if __name__ == "__main__":
    app()
