"""Unit tests for LearningConfig."""

from pathlib import Path

import pytest

from herald.contexts.learning import LearningConfig, LearningSystem, ValidationError
from herald.contexts.learning.config import ENV_VARS


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start each test without HERALD_* variables and without reading a stray .env."""
    for var in ENV_VARS.values():
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr("herald.contexts.learning.config.load_dotenv", lambda *a, **k: False)


@pytest.mark.unit
def test_defaults():
    """Test default settings when nothing is configured."""
    config = LearningConfig.from_env()

    assert config.store_path == Path("data/cover-letters.json")
    assert config.events_file is None
    assert config.log_dir is None
    assert config.example_limit == 2
    assert config.excerpt_length == 400


@pytest.mark.unit
def test_from_env(monkeypatch, tmp_path):
    """Test that environment variables override defaults."""
    monkeypatch.setenv("HERALD_STORE_PATH", str(tmp_path / "letters.json"))
    monkeypatch.setenv("HERALD_EVENTS_FILE", str(tmp_path / "events.log"))
    monkeypatch.setenv("HERALD_EXAMPLE_LIMIT", "3")

    config = LearningConfig.from_env()

    assert config.store_path == tmp_path / "letters.json"
    assert config.events_file == tmp_path / "events.log"
    assert config.example_limit == 3


@pytest.mark.unit
def test_empty_store_path_selects_memory(monkeypatch):
    """Test that an empty HERALD_STORE_PATH means an in-memory store."""
    monkeypatch.setenv("HERALD_STORE_PATH", "")
    assert LearningConfig.from_env().store_path is None


@pytest.mark.unit
@pytest.mark.parametrize("value", ["zero", "0", "-2"])
def test_invalid_numbers(monkeypatch, value):
    """Test that non-positive or non-numeric limits are rejected."""
    monkeypatch.setenv("HERALD_EXAMPLE_LIMIT", value)
    with pytest.raises(ValidationError):
        LearningConfig.from_env()


@pytest.mark.unit
def test_from_yaml_overrides_env(monkeypatch, tmp_path):
    """Test that YAML values win over the environment, which fills the gaps."""
    monkeypatch.setenv("HERALD_EXCERPT_LENGTH", "250")
    monkeypatch.setenv("HERALD_EXAMPLE_LIMIT", "7")
    config_file = tmp_path / "herald.yaml"
    config_file.write_text(
        "learning:\n"
        f"  store_path: {tmp_path / 'store.json'}\n"
        "  example_limit: 4\n",
        encoding="utf-8",
    )

    config = LearningConfig.from_yaml(config_file)

    assert config.store_path == tmp_path / "store.json"
    assert config.example_limit == 4
    assert config.excerpt_length == 250


@pytest.mark.unit
def test_from_yaml_requires_learning_section(tmp_path):
    """Test that a YAML file without a learning section is rejected."""
    config_file = tmp_path / "other.yaml"
    config_file.write_text("rendering:\n  engine: pdflatex\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        LearningConfig.from_yaml(config_file)


@pytest.mark.unit
def test_system_from_memory_config(draft_factory):
    """Test building a working in-memory system from config."""
    config = LearningConfig(store_path=None, example_limit=1)

    with LearningSystem.from_config(config) as learning:
        letter_id = learning.repository.create(draft_factory())
        learning.feedback.submit(letter_id, rating=5, was_used=True)
        learning.repository.create(draft_factory())
        learning.feedback.submit(learning.repository.scan_all()[1].id, rating=4, was_used=True)

        assert len(learning.examples_for("Software Engineer", "professional")) == 1
        assert len(learning.examples_for("Software Engineer", "professional", limit=5)) == 2
        assert learning.statistics.stats().total_generated == 2
