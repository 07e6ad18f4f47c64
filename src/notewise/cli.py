from __future__ import annotations

import logging
from datetime import datetime, timezone

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from notewise.config import get_settings
from notewise.doctor import healthcheck, run_doctor
from notewise.enhance.base import EnhancementRequest
from notewise.export.json import build_payload, build_result_payload, dumps_payload
from notewise.schemas import CreateMeetingInput, UpdateMeetingInput
from notewise.services import MeetingService
from notewise.storage.models import MeetingRecord

app = typer.Typer(help="notewise - keep and enhance meeting notes")
console = Console()
err_console = Console(stderr=True)

MODES_HELP = "grammar|summary|action_items|full_enhancement"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
) -> None:
    """Configure logging before any command runs."""

    try:
        settings = get_settings()
    except ValidationError as exc:
        raise _fail("configuration error", exc) from exc

    level = "DEBUG" if verbose else settings.log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _fail(prefix: str, exc: Exception, code: int = 2) -> typer.Exit:
    console.print(f"[red]{prefix}:[/red] {escape(str(exc))}")
    return typer.Exit(code=code)


def _print_json(payload: object) -> None:
    # Unstyled, so output stays machine-readable.
    print(dumps_payload(payload))


def _render_meeting(meeting: MeetingRecord) -> None:
    table = Table(title=f"Meeting {meeting.id}", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Title", meeting.title)
    table.add_row("Date", meeting.date.isoformat())
    table.add_row("Attendees", ", ".join(meeting.attendees) or "-")
    table.add_row("General notes", meeting.general_notes or "-")
    table.add_row("Discussion points", "\n".join(f"- {item}" for item in meeting.discussion_points) or "-")
    table.add_row("Action items", "\n".join(f"- {item}" for item in meeting.action_items) or "-")
    table.add_row("Summary", meeting.summary or "-")
    table.add_row("Transcribed text", meeting.transcribed_text or "-")
    table.add_row("AI enhanced notes", meeting.ai_enhanced_notes or "-")
    table.add_row("Created", meeting.created_at.isoformat())
    table.add_row("Updated", meeting.updated_at.isoformat())
    console.print(table)


@app.command()
def create(
    title: str = typer.Argument(..., help="Meeting title"),
    date: str | None = typer.Option(None, "--date", help="ISO date/time; defaults to now"),
    attendee: list[str] | None = typer.Option(None, "--attendee", help="Repeat for each attendee"),
    notes: str | None = typer.Option(None, "--notes", help="General notes"),
    discussion: list[str] | None = typer.Option(None, "--discussion", help="Repeat for each point"),
    action: list[str] | None = typer.Option(None, "--action", help="Repeat for each action item"),
    summary: str | None = typer.Option(None, "--summary"),
    transcript: str | None = typer.Option(None, "--transcript", help="Transcribed text"),
) -> None:
    """Create a meeting record."""

    service = MeetingService()
    try:
        data = CreateMeetingInput(
            title=title,
            date=date or datetime.now(tz=timezone.utc),
            attendees=attendee or [],
            general_notes=notes,
            discussion_points=discussion or [],
            action_items=action or [],
            summary=summary,
            transcribed_text=transcript,
        )
        meeting = service.create_meeting(data)
    except ValueError as exc:
        raise _fail("create failed", exc) from exc

    console.print(f"[green]Meeting ID:[/green] {meeting.id}")


@app.command("list")
def list_cmd(
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
) -> None:
    """List stored meetings."""

    meetings = MeetingService().list_meetings()
    if as_json:
        _print_json([build_payload(item) for item in meetings])
        return
    if not meetings:
        console.print("[yellow]No meetings stored yet.[/yellow]")
        return

    table = Table(title="Meetings")
    table.add_column("ID")
    table.add_column("Title")
    table.add_column("Date")
    table.add_column("Attendees")
    table.add_column("Action items")
    table.add_column("Updated")
    for meeting in meetings:
        table.add_row(
            str(meeting.id),
            meeting.title,
            meeting.date.strftime("%Y-%m-%d %H:%M"),
            str(len(meeting.attendees)),
            str(len(meeting.action_items)),
            meeting.updated_at.strftime("%Y-%m-%d %H:%M:%S"),
        )
    console.print(table)


@app.command()
def show(
    meeting_id: int = typer.Argument(..., help="Meeting ID"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
) -> None:
    """Show one meeting record."""

    try:
        meeting = MeetingService().get_meeting(meeting_id)
    except LookupError as exc:
        raise _fail("show failed", exc) from exc

    if as_json:
        _print_json(build_payload(meeting))
    else:
        _render_meeting(meeting)


@app.command()
def update(
    meeting_id: int = typer.Argument(..., help="Meeting ID"),
    title: str | None = typer.Option(None, "--title"),
    date: str | None = typer.Option(None, "--date", help="ISO date/time"),
    attendee: list[str] | None = typer.Option(None, "--attendee", help="Replaces all attendees"),
    notes: str | None = typer.Option(None, "--notes"),
    discussion: list[str] | None = typer.Option(None, "--discussion", help="Replaces all points"),
    action: list[str] | None = typer.Option(None, "--action", help="Replaces all action items"),
    summary: str | None = typer.Option(None, "--summary"),
    transcript: str | None = typer.Option(None, "--transcript"),
    enhanced: str | None = typer.Option(None, "--enhanced", help="AI enhanced notes"),
    clear_notes: bool = typer.Option(False, "--clear-notes"),
    clear_summary: bool = typer.Option(False, "--clear-summary"),
    clear_transcript: bool = typer.Option(False, "--clear-transcript"),
    clear_enhanced: bool = typer.Option(False, "--clear-enhanced"),
) -> None:
    """Update only the fields given on the command line."""

    fields: dict[str, object] = {}
    for name, value in (
        ("title", title),
        ("date", date),
        ("attendees", attendee),
        ("general_notes", notes),
        ("discussion_points", discussion),
        ("action_items", action),
        ("summary", summary),
        ("transcribed_text", transcript),
        ("ai_enhanced_notes", enhanced),
    ):
        if value is not None:
            fields[name] = value
    for name, clear in (
        ("general_notes", clear_notes),
        ("summary", clear_summary),
        ("transcribed_text", clear_transcript),
        ("ai_enhanced_notes", clear_enhanced),
    ):
        if clear:
            fields[name] = None

    service = MeetingService()
    try:
        meeting = service.update_meeting(UpdateMeetingInput(id=meeting_id, **fields))
    except (LookupError, ValueError) as exc:
        raise _fail("update failed", exc) from exc

    console.print(f"[green]Meeting updated:[/green] {meeting.id}")


@app.command()
def delete(meeting_id: int = typer.Argument(..., help="Meeting ID")) -> None:
    """Delete a meeting record."""

    if not MeetingService().delete_meeting(meeting_id):
        console.print(f"[yellow]Meeting not found:[/yellow] {meeting_id}")
        raise typer.Exit(code=1)
    console.print(f"[green]Meeting deleted:[/green] {meeting_id}")


@app.command("enhance")
def enhance_cmd(
    meeting_id: int = typer.Argument(..., help="Meeting ID"),
    enhance_type: str | None = typer.Option(None, "--type", help=MODES_HELP),
    transcript: str | None = typer.Option(None, "--transcript", help="Override stored transcript"),
    notes: str | None = typer.Option(None, "--notes", help="Override stored general notes"),
    apply: bool = typer.Option(True, "--apply/--no-apply", help="Merge the result into the meeting"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Run a note enhancement on a stored meeting."""

    service = MeetingService()
    request = EnhancementRequest(
        meeting_id=meeting_id,
        enhance_type=enhance_type or service.settings.default_enhance_type,
        transcribed_text=transcript,
        user_notes=notes,
    )
    try:
        if apply:
            result, _ = service.enhance_and_apply(request)
        else:
            result = service.enhance_notes(request)
    except (LookupError, ValueError) as exc:
        raise _fail("enhance failed", exc) from exc

    if as_json:
        _print_json(build_result_payload(result))
        return
    if result.enhanced_notes:
        console.print("[green]Enhanced notes:[/green]")
        console.print(result.enhanced_notes, markup=False)
    if result.generated_summary:
        console.print("[green]Summary:[/green]")
        console.print(result.generated_summary, markup=False)
    if result.extracted_action_items:
        console.print("[green]Action items:[/green]")
        for item in result.extracted_action_items:
            console.print(f"- {item}", markup=False)
    if apply:
        console.print(f"[green]Meeting updated:[/green] {meeting_id}")


@app.command()
def doctor() -> None:
    """Check local runtime prerequisites."""

    settings = get_settings()
    checks = run_doctor(settings)

    table = Table(title="notewise doctor")
    table.add_column("Check")
    table.add_column("Status")
    table.add_column("Detail")

    failed = False
    for check in checks:
        status = check.status.upper()
        color = {"ok": "green", "warn": "yellow", "fail": "red"}.get(check.status, "white")
        table.add_row(check.name, f"[{color}]{status}[/{color}]", check.detail)
        if check.status == "fail":
            failed = True

    console.print(table)
    if failed:
        raise typer.Exit(code=1)


@app.command()
def health() -> None:
    """Print a JSON health payload."""

    _print_json(healthcheck())


if __name__ == "__main__":
    app()
