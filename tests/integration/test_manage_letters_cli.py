"""Integration tests for scripts/manage_letters.py."""

import importlib.util
import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from herald.contexts.learning import Feedback, JsonFileBacking, RecordRepository
from herald.contexts.learning.config import ENV_VARS

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "scripts" / "manage_letters.py"

runner = CliRunner()


def _load_cli():
    spec = importlib.util.spec_from_file_location("manage_letters", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module.app


app = _load_cli()


@pytest.fixture
def cli_env(monkeypatch, store_path, events_file):
    """Point the CLI at a temp store and event log."""
    for var in ENV_VARS.values():
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("HERALD_STORE_PATH", str(store_path))
    monkeypatch.setenv("HERALD_EVENTS_FILE", str(events_file))
    return store_path


@pytest.fixture
def seeded_ids(cli_env, events_file, draft_factory):
    with RecordRepository(JsonFileBacking(cli_env), events_file=events_file) as repo:
        rated = repo.create(draft_factory(company_name="MomCorp", tone="formal"))
        repo.update_feedback(rated, Feedback(rating=5, was_used=True, got_interview=True))
        unrated = repo.create(draft_factory(company_name="Slurm", tone="formal"))
    return rated, unrated


@pytest.mark.integration
def test_stats_json(seeded_ids):
    """Test machine-readable stats output."""
    result = runner.invoke(app, ["stats", "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {
        "totalGenerated": 2,
        "withFeedback": 1,
        "averageRating": 5.0,
        "successRate": 0.5,
    }


@pytest.mark.integration
def test_stats_on_fresh_store(cli_env):
    """Test that a new store reports zeros."""
    result = runner.invoke(app, ["stats"])

    assert result.exit_code == 0, result.output
    assert "Total generated: 0" in result.stdout


@pytest.mark.integration
def test_list_and_show(seeded_ids):
    """Test listing with a feedback filter and showing one letter."""
    rated, unrated = seeded_ids

    result = runner.invoke(app, ["list", "--with-feedback"])
    assert result.exit_code == 0, result.output
    assert rated in result.stdout
    assert unrated not in result.stdout

    result = runner.invoke(app, ["show", rated])
    assert result.exit_code == 0, result.output
    assert "MomCorp" in result.stdout
    assert "rating 5" in result.stdout


@pytest.mark.integration
def test_feedback_command_updates_store(seeded_ids, cli_env):
    """Test recording feedback through the CLI."""
    _, unrated = seeded_ids

    result = runner.invoke(app, ["feedback", unrated, "4", "--used", "-m", "Sent it"])
    assert result.exit_code == 0, result.output

    with RecordRepository(JsonFileBacking(cli_env)) as repo:
        assert repo.get(unrated).feedback == Feedback(rating=4, was_used=True, comments="Sent it")


@pytest.mark.integration
@pytest.mark.parametrize("args", [["letter_missing", "4"], ["__ID__", "6"]])
def test_feedback_command_rejects(seeded_ids, args):
    """Test that unknown ids and invalid ratings exit with code 1."""
    rated, _ = seeded_ids
    args = [rated if a == "__ID__" else a for a in args]

    result = runner.invoke(app, ["feedback", *args])
    assert result.exit_code == 1


@pytest.mark.integration
def test_examples_command(seeded_ids):
    """Test previewing examples for a broader job title."""
    result = runner.invoke(app, ["examples", "Senior Software Engineer", "formal"])

    assert result.exit_code == 0, result.output
    assert "Example 1 for Software Engineer at MomCorp" in result.stdout

    result = runner.invoke(app, ["examples", "Data Analyst", "formal"])
    assert "No matching examples." in result.stdout

    result = runner.invoke(app, ["examples", "Data Analyst", "Formal"])
    assert result.exit_code == 1


@pytest.mark.integration
def test_events_command(seeded_ids):
    """Test tailing the event log."""
    rated, _ = seeded_ids

    result = runner.invoke(app, ["events", "-e", "feedback_submitted"])

    assert result.exit_code == 0, result.output
    assert rated in result.stdout
