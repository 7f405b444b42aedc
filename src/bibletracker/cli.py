"""Command-line interface for bibletracker.

Built with Typer for commands and Rich for output.
"""

from datetime import date, datetime
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .canon import BIBLE_BOOKS, Testament, resolve_book_name
from .config import get_config
from .db import get_db
from .errors import LedgerError
from .ledger import LedgerManager
from .logger import setup_logging
from .notes import NotesManager
from .progress import (
    all_book_progress,
    completed_books,
    in_progress_books,
    summarize,
    top_progress,
)
from .stats import build_dashboard, plan_preview, this_week_chapters, weekly_histogram
from .streaks import streak_status

# Create the main app
app = typer.Typer(
    name="bibletracker",
    help="Track your Bible reading progress, streaks, and pace.",
    no_args_is_help=True,
)

notes_app = typer.Typer(help="Keep notes on what you read.")
app.add_typer(notes_app, name="notes")

# Rich console for pretty output
console = Console()


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[dim]{message}[/dim]")


def parse_date(value: Optional[str]) -> Optional[date]:
    """Parse a YYYY-MM-DD option value."""
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter("Invalid date format. Use YYYY-MM-DD")


def get_ledger() -> LedgerManager:
    config = get_config()
    return LedgerManager(config.owner_id, get_db(str(config.db_path)))


def get_notes() -> NotesManager:
    config = get_config()
    return NotesManager(config.owner_id, get_db(str(config.db_path)))


def progress_bar(percentage: int, width: int = 20) -> str:
    filled = round(width * percentage / 100)
    return "█" * filled + "░" * (width - filled)


def format_book_table(books: list, title: str = "Book Progress") -> Table:
    """Create a rich table for displaying book progress."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Book", style="cyan")
    table.add_column("Read", justify="right")
    table.add_column("Progress")
    table.add_column("Chapters", style="dim", max_width=40)

    for book in books:
        table.add_row(
            book.name,
            f"{book.read}/{book.chapters}",
            f"{progress_bar(book.percentage, 10)} {book.percentage}%",
            book.chapter_ranges or "-",
        )

    return table


@app.callback()
def main() -> None:
    """Track your Bible reading progress, streaks, and pace."""
    config = get_config()
    setup_logging(config.log_level, config.log_file)


@app.command()
def version() -> None:
    """Show the installed version."""
    console.print(f"bibletracker {__version__}")


# ============================================================================
# Reading Commands
# ============================================================================


@app.command()
def add(
    book: str = typer.Argument(..., help="Book name, e.g. 'Genesis' or '1 John'"),
    start_chapter: int = typer.Argument(..., help="First chapter read"),
    end_chapter: Optional[int] = typer.Argument(None, help="Last chapter read"),
    date_str: Optional[str] = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD)"),
    start_verse: Optional[int] = typer.Option(None, "--start-verse", help="First verse"),
    end_verse: Optional[int] = typer.Option(None, "--end-verse", help="Last verse"),
) -> None:
    """Log a reading."""
    reading_date = parse_date(date_str)
    ledger = get_ledger()

    try:
        entry = ledger.add_reading(
            resolve_book_name(book),
            start_chapter,
            end_chapter,
            reading_date=reading_date,
            start_verse=start_verse,
            end_verse=end_verse,
        )
    except LedgerError as e:
        print_error(str(e))
        raise typer.Exit(1)

    streak = ledger.streak()
    print_success(f"Logged {entry.reference} on {entry.reading_date.isoformat()}")
    console.print(f"Current Streak: {streak.current_streak} days")
    print_info(f"ID: {entry.id}")


@app.command()
def edit(
    entry_id: str = typer.Argument(..., help="Reading ID"),
    book: Optional[str] = typer.Option(None, "--book", "-b", help="Book name"),
    start_chapter: Optional[int] = typer.Option(None, "--start", "-s", help="First chapter"),
    end_chapter: Optional[int] = typer.Option(None, "--end", "-e", help="Last chapter"),
    date_str: Optional[str] = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD)"),
    start_verse: Optional[int] = typer.Option(None, "--start-verse", help="First verse"),
    end_verse: Optional[int] = typer.Option(None, "--end-verse", help="Last verse"),
) -> None:
    """Edit a reading. Options not given keep their current value.

    Verses are dropped when the book or chapters change and no new verses
    are given.
    """
    reading_date = parse_date(date_str)
    ledger = get_ledger()

    try:
        existing = ledger.get_reading(entry_id)
        book_name = resolve_book_name(book) if book else existing.book_name
        start = start_chapter if start_chapter is not None else existing.start_chapter
        end = end_chapter if end_chapter is not None else max(start, existing.end_chapter)

        same_reference = (book_name, start, end) == (
            existing.book_name, existing.start_chapter, existing.end_chapter
        )
        if start_verse is None and end_verse is None and same_reference:
            start_verse, end_verse = existing.start_verse, existing.end_verse

        entry = ledger.edit_reading(
            entry_id,
            book_name,
            start,
            end,
            reading_date=reading_date or existing.reading_date,
            start_verse=start_verse,
            end_verse=end_verse,
        )
    except LedgerError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success(f"Updated: {entry.reference} on {entry.reading_date.isoformat()}")


@app.command()
def delete(
    entry_id: str = typer.Argument(..., help="Reading ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a reading."""
    ledger = get_ledger()

    try:
        entry = ledger.get_reading(entry_id)
        if not yes and not typer.confirm(f"Delete {entry.reference}?", default=False):
            print_info("Cancelled.")
            raise typer.Exit(0)
        ledger.delete_reading(entry_id)
    except LedgerError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success(f"Deleted: {entry.reference}")


@app.command("list")
def list_readings(
    limit: int = typer.Option(10, "--limit", "-n", help="Readings to show"),
) -> None:
    """Show recent readings."""
    entries = get_ledger().ledger()[:limit]

    if not entries:
        print_info("No readings yet. Start your journey!")
        return

    table = Table(title="Recent Readings", show_header=True, header_style="bold magenta")
    table.add_column("Date")
    table.add_column("Reading", style="cyan")
    table.add_column("Chapters", justify="right")
    table.add_column("ID", style="dim")

    for entry in entries:
        table.add_row(
            entry.reading_date.strftime("%b %d, %Y"),
            entry.reference,
            str(entry.chapters_count),
            entry.id,
        )

    console.print(table)


# ============================================================================
# Progress Commands
# ============================================================================


@app.command()
def status() -> None:
    """Show overall progress, streaks, and daily target."""
    ledger = get_ledger()
    dashboard = build_dashboard(ledger.ledger(), ledger.refresh_streak())
    progress = dashboard.progress

    content = (
        f"[bold]{progress.percentage}%[/bold] {progress_bar(progress.percentage)}\n"
        f"{progress.chapters_read} of {progress.chapters_total} chapters completed\n\n"
        f"Current Streak: {dashboard.streak.current_streak} days\n"
        f"Longest Streak: {dashboard.streak.longest_streak} days\n"
        f"Daily Target: {dashboard.pacing.daily_target} chapters\n"
        f"Days Remaining: {dashboard.pacing.days_remaining} days\n\n"
        f"This Week: {dashboard.this_week_chapters} chapters\n"
        f"Books Started: {dashboard.books_started}  Completed: {dashboard.books_completed}"
    )
    console.print(Panel(content, title="[blue]Reading Progress[/blue]"))


@app.command()
def books(
    show_all: bool = typer.Option(False, "--all", "-a", help="Show every book"),
    completed: bool = typer.Option(False, "--completed", "-c", help="Completed books only"),
    in_progress: bool = typer.Option(False, "--in-progress", "-p", help="Unfinished books only"),
    limit: int = typer.Option(10, "--limit", "-n", help="Books to show in the default view"),
) -> None:
    """Show per-book progress."""
    entries = get_ledger().ledger()

    if show_all:
        rows, title = all_book_progress(entries), "All Books"
    elif completed:
        rows, title = completed_books(entries), "Completed Books"
    elif in_progress:
        rows, title = in_progress_books(entries), "Books In Progress"
    else:
        rows, title = top_progress(entries, limit=limit), "Book Progress"

    if not rows:
        print_info("No books to show.")
        return

    console.print(format_book_table(rows, title=title))


@app.command()
def testaments() -> None:
    """Show Old and New Testament progress."""
    summary = summarize(get_ledger().ledger())

    table = Table(title="Testament Progress", show_header=True, header_style="bold magenta")
    table.add_column("Testament", style="cyan")
    table.add_column("Chapters", justify="right")
    table.add_column("Progress")
    table.add_column("Books Completed", justify="right")

    for label, part in (
        ("Old Testament", summary.old_testament),
        ("New Testament", summary.new_testament),
    ):
        table.add_row(
            label,
            f"{part.chapters_read}/{part.chapters_total}",
            f"{progress_bar(part.percentage, 10)} {part.percentage}%",
            f"{part.books_completed}/{part.books_total}",
        )

    console.print(table)


@app.command()
def plan(
    days: Optional[int] = typer.Option(None, "--days", "-n", help="Days to preview"),
) -> None:
    """Show the reading plan for the coming days."""
    days = days or get_config().plan_days
    preview = plan_preview(get_ledger().ledger(), days=days)

    table = Table(title=f"Reading Plan (Next {days} days)")
    table.add_column("Date")
    table.add_column("Target", justify="right")
    table.add_column("Read", justify="right")
    table.add_column("", justify="center")

    for day in preview:
        label = day.date.strftime("%a %b %d")
        if day.is_today:
            label = f"[bold]{label} (today)[/bold]"
        mark = "[green]✓[/green]" if day.target_met else ("•" if day.has_reading else "")
        table.add_row(
            label,
            str(day.suggested_target),
            str(day.chapters_read) if day.has_reading else "-",
            mark,
        )

    console.print(table)


@app.command()
def week() -> None:
    """Show chapters read over the last seven days."""
    entries = get_ledger().ledger()
    buckets = weekly_histogram(entries)
    peak = max((b.chapters for b in buckets), default=0) or 1

    table = Table(title="This Week", show_header=False)
    table.add_column("Day", style="cyan")
    table.add_column("Chapters")

    for bucket in buckets:
        bar = "█" * round(20 * bucket.chapters / peak)
        table.add_row(bucket.label, f"{bar} {bucket.chapters}")

    console.print(table)
    console.print(f"Chapters in the last 7 days: {this_week_chapters(entries, datetime.now())}")


@app.command()
def streak() -> None:
    """Show current streak status."""
    state = get_ledger().refresh_streak()
    current_status = streak_status(state)

    if state.last_reading_date is None and state.longest_streak == 0:
        print_info("No reading activity yet. Start your streak!")
        return

    status_display = {
        "active": "[green]Active[/green]",
        "at_risk": "[yellow]At Risk[/yellow]",
        "ended": "[red]Ended[/red]",
    }.get(current_status.value, current_status.value)

    last = state.last_reading_date.isoformat() if state.last_reading_date else "never"
    content = (
        f"[bold]Current Streak:[/bold] {state.current_streak} days {status_display}\n"
        f"[bold]Longest Streak:[/bold] {state.longest_streak} days\n"
        f"Last Reading: {last}"
    )
    console.print(Panel(content, title="[blue]Streak Status[/blue]"))


@app.command()
def canon(
    testament: Optional[Testament] = typer.Option(None, "--testament", "-t", help="old or new"),
) -> None:
    """List the books of the Bible with chapter counts."""
    table = Table(title="Books of the Bible")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Book", style="cyan")
    table.add_column("Chapters", justify="right")
    table.add_column("Testament")

    for book in BIBLE_BOOKS:
        if testament is not None and book.testament != testament:
            continue
        table.add_row(str(book.position + 1), book.name, str(book.chapters), book.testament.value)

    console.print(table)


# ============================================================================
# Notes Commands
# ============================================================================


@notes_app.command("add")
def notes_add(
    content: str = typer.Argument(..., help="Note text"),
    book: Optional[str] = typer.Option(None, "--book", "-b", help="Book name"),
    chapter: Optional[int] = typer.Option(None, "--chapter", "-c", help="Chapter"),
    entry_id: Optional[str] = typer.Option(None, "--reading", "-r", help="Reading ID"),
) -> None:
    """Add a note."""
    try:
        note = get_notes().add_note(
            content,
            book_name=resolve_book_name(book) if book else None,
            chapter=chapter,
            reading_entry_id=entry_id,
        )
    except LedgerError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success("Note added")
    print_info(f"ID: {note.id}")


@notes_app.command("list")
def notes_list(
    book: Optional[str] = typer.Option(None, "--book", "-b", help="Filter by book"),
    chapter: Optional[int] = typer.Option(None, "--chapter", "-c", help="Filter by chapter"),
) -> None:
    """List notes."""
    try:
        book_name = resolve_book_name(book) if book else None
    except LedgerError as e:
        print_error(str(e))
        raise typer.Exit(1)

    notes = get_notes().list_notes(book_name=book_name, chapter=chapter)
    if not notes:
        print_info("No notes yet.")
        return

    for note in notes:
        where = note.book_name or "General"
        if note.chapter:
            where += f" {note.chapter}"
        console.print(Panel(
            note.content,
            title=f"[cyan]{where}[/cyan]",
            subtitle=f"[dim]{note.created_at:%b %d, %Y} · {note.id}[/dim]",
        ))


@notes_app.command("edit")
def notes_edit(
    note_id: str = typer.Argument(..., help="Note ID"),
    content: str = typer.Argument(..., help="New note text"),
) -> None:
    """Replace a note's text."""
    try:
        get_notes().update_note(note_id, content)
    except LedgerError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success("Note updated")


@notes_app.command("delete")
def notes_delete(
    note_id: str = typer.Argument(..., help="Note ID"),
) -> None:
    """Delete a note."""
    try:
        get_notes().delete_note(note_id)
    except LedgerError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success("Note deleted")


if __name__ == "__main__":
    app()
