"""
Learning event logging utilities for HERALD (Tier 2 logging).

Appends store events to a JSON Lines file so that every record creation and
feedback submission leaves an audit trail, including the feedback value a
resubmission overwrote.

For detailed within-context logging (Tier 1), use herald.utils.logger instead.

Usage:
    from herald.utils.event_logging import log_learning_event, get_recent_events

    log_learning_event(
        events_file,
        event_type="feedback_submitted",
        record_id="letter_1731512345678_k3j9x0a1b",
        source="repository",
        rating=5,
    )

    events = get_recent_events(events_file, n=20, event_type="feedback_submitted")
"""

import json
from pathlib import Path
from typing import Optional

from herald.utils.timestamp import now_exact

RECORD_CREATED = "record_created"
FEEDBACK_SUBMITTED = "feedback_submitted"
STORE_CORRUPT = "store_corrupt"


def log_learning_event(
    events_file: Path, event_type: str, record_id: Optional[str], source: str, **extra_fields
) -> None:
    """
    Log an event to the learning event log.

    Events are appended in JSON Lines format (one JSON object per line), which
    keeps the log streamable and easy to filter by event_type or record_id.

    Args:
        events_file: Path of the JSON Lines log
        event_type: Type of event (e.g., "record_created", "feedback_submitted")
        record_id: Record identifier (None for store-wide events)
        source: Event source (e.g., "repository", "cli")
        **extra_fields: Additional event-specific fields
    """
    events_file.parent.mkdir(parents=True, exist_ok=True)

    event = {
        "timestamp": now_exact(),
        "event_type": event_type,
        "record_id": record_id,
        "source": source,
        **extra_fields,
    }

    with open(events_file, "a", encoding="utf-8") as f:
        f.write(json.dumps(event) + "\n")


def get_recent_events(
    events_file: Path,
    n: int = 10,
    record_id: Optional[str] = None,
    event_type: Optional[str] = None,
) -> list[dict]:
    """
    Get the last n events from the event log, optionally filtered.

    Args:
        events_file: Path of the JSON Lines log
        n: Number of recent events to return (default: 10)
        record_id: Filter to only events for this record (optional)
        event_type: Filter to only events of this type (optional)

    Returns:
        List of event dicts (most recent last)

    Example:
        # Last 5 feedback events for one letter
        events = get_recent_events(
            events_file, 5, record_id="letter_1731512345678_k3j9x0a1b",
            event_type="feedback_submitted",
        )
    """
    if not events_file.exists():
        return []

    events = []
    with open(events_file, "r", encoding="utf-8") as f:
        for line in f:
            try:
                events.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                # Skip malformed lines
                continue

    if record_id:
        events = [e for e in events if e.get("record_id") == record_id]

    if event_type:
        events = [e for e in events if e.get("event_type") == event_type]

    if n <= 0:
        return []
    return events[-n:]
