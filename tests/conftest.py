"""Shared fixtures for learning store tests."""

from pathlib import Path

import pytest
from loguru import logger

from herald.contexts.learning import (
    Feedback,
    InMemoryBacking,
    JsonFileBacking,
    RecordDraft,
    RecordMetadata,
    RecordRepository,
)


@pytest.fixture(autouse=True)
def _reset_loguru():
    """Drop sinks added during a test (CLI runs bind loguru to short-lived streams)."""
    yield
    logger.remove()


@pytest.fixture
def repository():
    """Open in-memory repository."""
    with RecordRepository(InMemoryBacking()) as repo:
        yield repo


@pytest.fixture
def store_path(tmp_path) -> Path:
    return tmp_path / "data" / "cover-letters.json"


@pytest.fixture
def events_file(tmp_path) -> Path:
    return tmp_path / "logs" / "learning_events.log"


@pytest.fixture
def file_repository(store_path, events_file):
    """Open file-backed repository with an event log."""
    with RecordRepository(JsonFileBacking(store_path), events_file=events_file) as repo:
        yield repo


def make_draft(
    job_title: str = "Software Engineer",
    company_name: str = "Planet Express",
    tone: str = "professional",
    text: str = "Dear Hiring Manager, I am writing to apply.",
    **kwargs,
) -> RecordDraft:
    return RecordDraft(
        job_title=job_title, company_name=company_name, tone=tone, text=text, **kwargs
    )


def add_letter(
    repo: RecordRepository, feedback: Feedback = None, **draft_fields
) -> str:
    """Create a letter and optionally attach feedback; returns its id."""
    letter_id = repo.create(make_draft(**draft_fields))
    if feedback is not None:
        repo.update_feedback(letter_id, feedback)
    return letter_id


@pytest.fixture
def sample_draft() -> RecordDraft:
    return make_draft(
        industry="Delivery",
        metadata=RecordMetadata(key_skills="Python, SQL", professional_summary="Backend dev"),
    )


@pytest.fixture
def draft_factory():
    """Callable building RecordDrafts with sensible defaults."""
    return make_draft


@pytest.fixture
def letter_factory():
    """Callable ``(repo, feedback=None, **draft_fields) -> id``."""
    return add_letter
