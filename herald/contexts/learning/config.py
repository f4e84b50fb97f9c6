"""
Learning context configuration.

Settings come from environment variables (a .env file is honoured via
python-dotenv) or from a YAML file with a ``learning:`` section. Values missing
from the YAML file fall back to the environment, then to defaults.

Environment variables:
    HERALD_STORE_PATH      JSON collection file (default: data/cover-letters.json)
                           (set but empty: in-memory store)
    HERALD_EVENTS_FILE     JSON Lines event log (unset: no event log)
    HERALD_LOG_DIR         Directory for learn.log (unset: console only)
    HERALD_EXAMPLE_LIMIT   Default number of examples per request (default: 2)
    HERALD_EXCERPT_LENGTH  Excerpt cut-off in characters (default: 400)

Example YAML:
    learning:
      store_path: data/cover-letters.json
      events_file: outs/logs/learning_events.log
      example_limit: 3
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

from herald.contexts.learning.exceptions import ValidationError

DEFAULT_STORE_PATH = Path("data/cover-letters.json")
DEFAULT_EXAMPLE_LIMIT = 2
DEFAULT_EXCERPT_LENGTH = 400

ENV_VARS = {
    "store_path": "HERALD_STORE_PATH",
    "events_file": "HERALD_EVENTS_FILE",
    "log_dir": "HERALD_LOG_DIR",
    "example_limit": "HERALD_EXAMPLE_LIMIT",
    "excerpt_length": "HERALD_EXCERPT_LENGTH",
}


def _as_path(value: Any) -> Optional[Path]:
    if value is None or value == "":
        return None
    return Path(value)


def _as_positive_int(name: str, value: Any, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be an integer, got {value!r}")
    if number < 1:
        raise ValidationError(f"{name} must be positive, got {number}")
    return number


@dataclass
class LearningConfig:
    """
    Attributes:
        store_path: JSON collection file; None selects the in-memory backing
        events_file: JSON Lines event log; None disables it
        log_dir: Directory for the learn.log file sink; None logs to console only
        example_limit: Default number of examples per selection
        excerpt_length: Excerpt cut-off in characters
    """

    store_path: Optional[Path] = field(default_factory=lambda: DEFAULT_STORE_PATH)
    events_file: Optional[Path] = None
    log_dir: Optional[Path] = None
    example_limit: int = DEFAULT_EXAMPLE_LIMIT
    excerpt_length: int = DEFAULT_EXCERPT_LENGTH

    @classmethod
    def from_mapping(cls, values: Dict[str, Any]) -> "LearningConfig":
        """Build a config from raw (string or native) values; missing keys use defaults."""
        store_path = values.get("store_path", DEFAULT_STORE_PATH)
        return cls(
            store_path=_as_path(store_path),
            events_file=_as_path(values.get("events_file")),
            log_dir=_as_path(values.get("log_dir")),
            example_limit=_as_positive_int(
                "example_limit", values.get("example_limit"), DEFAULT_EXAMPLE_LIMIT
            ),
            excerpt_length=_as_positive_int(
                "excerpt_length", values.get("excerpt_length"), DEFAULT_EXCERPT_LENGTH
            ),
        )

    @classmethod
    def from_env(cls) -> "LearningConfig":
        load_dotenv()
        values = {key: os.getenv(var) for key, var in ENV_VARS.items() if os.getenv(var) is not None}
        return cls.from_mapping(values)

    @classmethod
    def from_yaml(cls, config_path: Path) -> "LearningConfig":
        """
        Load the ``learning`` section of a YAML file, filling gaps from the environment.

        Raises:
            ValidationError: If the file has no ``learning`` mapping or a value is invalid
        """
        load_dotenv()
        loaded = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)
        section = loaded.get("learning") if isinstance(loaded, dict) else None
        if not isinstance(section, dict):
            raise ValidationError(f"{config_path} has no 'learning' section")

        values = {key: os.getenv(var) for key, var in ENV_VARS.items() if os.getenv(var) is not None}
        values.update(section)
        return cls.from_mapping(values)
