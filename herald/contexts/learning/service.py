"""
Learning system facade.

Wires one RecordRepository to the selector, feedback ingestion and statistics
components, and gives them a single open/close lifecycle. Generation
orchestrators, feedback endpoints and reporting tools should hold one
LearningSystem per process.

Usage:
    config = LearningConfig.from_env()
    with LearningSystem.from_config(config) as learning:
        letter_id = learning.repository.create(draft)
        examples = learning.examples_for("Software Engineer", Tone.FORMAL)
        learning.feedback.submit(letter_id, rating=5, was_used=True)
        print(learning.statistics.stats().to_dict())
"""

from typing import List, Optional

from herald.contexts.learning.config import LearningConfig
from herald.contexts.learning.example_selector import ExampleSelector
from herald.contexts.learning.feedback import FeedbackIngestion
from herald.contexts.learning.record_data_structure import ExampleRef
from herald.contexts.learning.record_repository import (
    InMemoryBacking,
    JsonFileBacking,
    RecordRepository,
)
from herald.contexts.learning.statistics import StatisticsAggregator


class LearningSystem:
    """
    Attributes:
        config: Settings the system was built from
        repository: Shared record store
        selector: Example selector over the repository
        feedback: Feedback ingestion over the repository
        statistics: Statistics aggregator over the repository
    """

    def __init__(self, repository: RecordRepository, config: Optional[LearningConfig] = None):
        self.config = config or LearningConfig(store_path=None)
        self.repository = repository
        self.selector = ExampleSelector(repository, excerpt_length=self.config.excerpt_length)
        self.feedback = FeedbackIngestion(repository)
        self.statistics = StatisticsAggregator(repository)

    @classmethod
    def from_config(cls, config: LearningConfig) -> "LearningSystem":
        """Build (but do not open) a system from config; store_path=None uses memory."""
        if config.store_path is None:
            backing = InMemoryBacking()
        else:
            backing = JsonFileBacking(config.store_path)
        return cls(RecordRepository(backing, events_file=config.events_file), config=config)

    def open(self) -> "LearningSystem":
        self.repository.open()
        return self

    def close(self) -> None:
        self.repository.close()

    def __enter__(self) -> "LearningSystem":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def examples_for(self, job_title: str, tone, limit: Optional[int] = None) -> List[ExampleRef]:
        """Select examples using the configured default limit when none is given."""
        if limit is None:
            limit = self.config.example_limit
        return self.selector.select(job_title, tone, limit)
