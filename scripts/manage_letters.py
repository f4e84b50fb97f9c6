#!/usr/bin/env python3
"""
Command-line interface for the cover letter learning store.

Reads and updates the store configured by HERALD_* environment variables (or a
YAML file passed with --config). Intended for reporting and for manually
recording feedback that arrived outside the web flow.

Commands:
    stats    - Show summary statistics
    list     - List stored letters (optionally filter by tone / feedback)
    show     - Show one letter with its feedback
    feedback - Record feedback for a letter
    examples - Preview the reference examples a new generation would receive
    events   - Show recent learning events
"""

import json
from pathlib import Path
from typing import Optional

import typer

from herald.contexts.learning import (
    LearningConfig,
    LearningStats,
    LearningSystem,
    NotFoundError,
    StorageIOError,
    Tone,
    ValidationError,
)
from herald.contexts.learning.logger import setup_learning_logger
from herald.utils.event_logging import get_recent_events
from herald.utils.timestamp import format_timestamp

app = typer.Typer(
    add_completion=False,
    help="Inspect and update the cover letter learning store",
    invoke_without_command=True,
)

EMPTY_STATS = LearningStats(total_generated=0, with_feedback=0, average_rating=0.0, success_rate=0.0)


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML config file with a 'learning' section"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Echo debug logging to stderr"),
):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    try:
        settings = LearningConfig.from_yaml(config) if config else LearningConfig.from_env()
    except ValidationError as e:
        typer.secho(f"Invalid configuration: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)

    store = str(settings.store_path) if settings.store_path else "in-memory"
    setup_learning_logger(
        settings.log_dir, store=store, console_level="DEBUG" if verbose else "WARNING"
    )
    ctx.obj = settings


def _system(ctx: typer.Context) -> LearningSystem:
    return LearningSystem.from_config(ctx.obj)


@app.command("stats")
def stats_command(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON"),
):
    """
    Show store statistics.

    Examples:\n

        $ manage_letters.py stats

        $ manage_letters.py stats --json
    """
    try:
        with _system(ctx) as learning:
            stats = learning.statistics.stats()
    except StorageIOError as e:
        typer.secho(f"Store unavailable, showing no data: {e}", fg=typer.colors.YELLOW, err=True)
        stats = EMPTY_STATS

    if as_json:
        typer.echo(json.dumps(stats.to_dict()))
        return

    typer.secho("\nLearning Store Statistics", fg=typer.colors.BLUE, bold=True)
    typer.echo("=" * 80)
    typer.echo(f"Total generated: {stats.total_generated}")
    typer.echo(f"With feedback:   {stats.with_feedback}")
    typer.echo(f"Average rating:  {stats.average_rating:.2f}")
    typer.echo(f"Success rate:    {stats.success_rate:.1%}")


@app.command("list")
def list_command(
    ctx: typer.Context,
    tone: Optional[str] = typer.Option(None, "--tone", "-t", help="Filter by tone"),
    with_feedback: bool = typer.Option(
        False, "--with-feedback", "-f", help="Only letters that received feedback"
    ),
):
    """
    List stored letters in storage order.

    Examples:\n

        $ manage_letters.py list

        $ manage_letters.py list --tone formal --with-feedback
    """
    try:
        tone_filter = Tone.parse(tone) if tone else None
    except ValidationError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    with _system(ctx) as learning:
        records = learning.repository.scan_all()

    if tone_filter:
        records = [r for r in records if r.tone == tone_filter]
    if with_feedback:
        records = [r for r in records if r.has_feedback]

    if not records:
        typer.echo("  (none)")
        return

    max_id_len = max(len(r.id) for r in records)
    for record in records:
        rating = str(record.feedback.rating) if record.feedback else "-"
        typer.echo(
            f"  {record.id:{max_id_len}}  {format_timestamp(record.created_at)}  "
            f"{record.tone.value:14}  {rating:>2}  {record.job_title} @ {record.company_name}"
        )

    typer.echo(f"\nTotal: {len(records)}")


@app.command("show")
def show_command(
    ctx: typer.Context,
    letter_id: str = typer.Argument(..., help="Letter id (e.g., letter_1731512345678_k3j9x0a1b)"),
):
    """
    Show one stored letter.

    Examples:\n

        $ manage_letters.py show letter_1731512345678_k3j9x0a1b
    """
    try:
        with _system(ctx) as learning:
            record = learning.repository.get(letter_id)
    except NotFoundError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"\n{record.id}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"  Created:  {format_timestamp(record.created_at)}")
    typer.echo(f"  Role:     {record.job_title} @ {record.company_name}")
    if record.industry:
        typer.echo(f"  Industry: {record.industry}")
    typer.echo(f"  Tone:     {record.tone.value}")

    if record.feedback is None:
        typer.echo("  Feedback: (none)")
    else:
        fb = record.feedback
        interview = "unknown" if fb.got_interview is None else ("yes" if fb.got_interview else "no")
        typer.echo(f"  Feedback: rating {fb.rating}, used {'yes' if fb.was_used else 'no'}, "
                   f"interview {interview}")
        if fb.comments:
            typer.echo(f"  Comments: {fb.comments}")

    typer.echo("")
    typer.echo(record.text)


@app.command("feedback")
def feedback_command(
    ctx: typer.Context,
    letter_id: str = typer.Argument(..., help="Letter id to rate"),
    rating: int = typer.Argument(..., help="Rating from 1 to 5"),
    used: bool = typer.Option(False, "--used/--not-used", help="Whether the letter was sent"),
    interview: Optional[bool] = typer.Option(
        None, "--interview/--no-interview", help="Whether it led to an interview"
    ),
    comments: Optional[str] = typer.Option(None, "--comments", "-m", help="Free-form remarks"),
):
    """
    Record feedback for a letter. Replaces any earlier feedback.

    Examples:\n

        $ manage_letters.py feedback letter_1731512345678_k3j9x0a1b 5 --used --interview

        $ manage_letters.py feedback letter_1731512345678_k3j9x0a1b 2 -m "Too stiff"
    """
    try:
        with _system(ctx) as learning:
            learning.feedback.submit(
                letter_id,
                rating=rating,
                was_used=used,
                got_interview=interview,
                comments=comments,
            )
    except (NotFoundError, ValidationError) as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"✓ Feedback recorded for {letter_id} (rating {rating})", fg=typer.colors.GREEN)


@app.command("examples")
def examples_command(
    ctx: typer.Context,
    job_title: str = typer.Argument(..., help="Job title of the letter to generate"),
    tone: str = typer.Argument(..., help="Tone: professional, conversational, enthusiastic, formal"),
    limit: Optional[int] = typer.Option(
        None, "--limit", "-n", help="Maximum examples (default: configured example_limit)"
    ),
):
    """
    Preview the reference examples a new generation would receive.

    Examples:\n

        $ manage_letters.py examples "Senior Software Engineer" professional

        $ manage_letters.py examples "Data Analyst" formal -n 5
    """
    try:
        with _system(ctx) as learning:
            examples = learning.examples_for(job_title, tone, limit)
    except ValidationError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    except StorageIOError as e:
        typer.secho(f"Store unavailable, no examples: {e}", fg=typer.colors.YELLOW, err=True)
        examples = []

    if not examples:
        typer.echo("No matching examples.")
        return

    for index, example in enumerate(examples, 1):
        typer.secho(
            f"\nExample {index} for {example.job_title} at {example.company_name}",
            fg=typer.colors.BLUE,
            bold=True,
        )
        typer.echo(example.text_excerpt)


@app.command("events")
def events_command(
    ctx: typer.Context,
    n: int = typer.Option(10, "--num", "-n", help="Number of recent events to show"),
    letter_id: Optional[str] = typer.Option(
        None, "--record", "-r", help="Filter to events for this letter"
    ),
    event_type: Optional[str] = typer.Option(
        None, "--event-type", "-e", help="Filter to events of this type"
    ),
):
    """
    Show recent learning events.

    Examples:\n

        $ manage_letters.py events -n 20

        $ manage_letters.py events -e feedback_submitted
    """
    events_file = ctx.obj.events_file
    if events_file is None:
        typer.secho(
            "Event log disabled (set HERALD_EVENTS_FILE)", fg=typer.colors.YELLOW, err=True
        )
        raise typer.Exit(code=1)

    events = get_recent_events(events_file, n=n, record_id=letter_id, event_type=event_type)
    if not events:
        typer.secho("No events found", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)

    for event in events:
        when = format_timestamp(event.get("timestamp", ""), relative=True)
        details = {
            k: v
            for k, v in event.items()
            if k not in ("timestamp", "event_type", "record_id", "source")
        }
        typer.echo(
            f"{when:>10}  {event.get('event_type', '?'):20}  {event.get('record_id') or '-'}  "
            f"{json.dumps(details) if details else ''}"
        )


if __name__ == "__main__":
    app()
