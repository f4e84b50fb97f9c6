"""Unit tests for the JSON Lines learning event log."""

import json

import pytest

from herald.utils.event_logging import get_recent_events, log_learning_event
from herald.utils.timestamp import format_timestamp


@pytest.mark.unit
def test_log_appends_json_lines(events_file):
    """Test that each event is one JSON object per line with standard fields."""
    log_learning_event(events_file, "record_created", "letter_1", source="test", tone="formal")
    log_learning_event(events_file, "feedback_submitted", "letter_1", source="test", rating=4)

    lines = events_file.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2

    first = json.loads(lines[0])
    assert first["event_type"] == "record_created"
    assert first["record_id"] == "letter_1"
    assert first["source"] == "test"
    assert first["tone"] == "formal"
    assert "timestamp" in first


@pytest.mark.unit
def test_recent_events_filters(events_file):
    """Test filtering by record id and event type, most recent last."""
    for i in range(3):
        log_learning_event(events_file, "record_created", f"letter_{i}", source="test")
    log_learning_event(events_file, "feedback_submitted", "letter_1", source="test")

    assert [e["record_id"] for e in get_recent_events(events_file, n=2)] == [
        "letter_2",
        "letter_1",
    ]
    assert len(get_recent_events(events_file, record_id="letter_1")) == 2
    assert len(get_recent_events(events_file, event_type="record_created")) == 3
    assert get_recent_events(events_file, n=0) == []


@pytest.mark.unit
def test_recent_events_missing_file_and_bad_lines(events_file):
    """Test that a missing log is empty and malformed lines are skipped."""
    assert get_recent_events(events_file) == []

    events_file.parent.mkdir(parents=True)
    events_file.write_text('not json\n{"event_type": "store_corrupt", "record_id": null}\n')

    events = get_recent_events(events_file)
    assert [e["event_type"] for e in events] == ["store_corrupt"]


@pytest.mark.unit
def test_format_timestamp():
    """Test absolute formatting and passthrough of unparseable input."""
    assert format_timestamp("2025-11-13T18:45:40.572549+00:00") == "2025-11-13 18:45:40"
    assert format_timestamp("yesterday") == "yesterday"
    assert format_timestamp("2020-01-01T00:00:00+00:00", relative=True).endswith("d ago")
