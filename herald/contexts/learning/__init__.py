"""
Learning Context

Responsibilities:
- Records every generated cover letter with its job context and tone
- Accepts user feedback (rating, usage, interview outcome) on past letters
- Selects successful past letters as reference examples for new generations
- Reports summary statistics over the store

Owns: Record persistence, feedback validation, example scoring and ranking
Never: Builds prompts, calls the language model, or serves HTTP
"""

from herald.contexts.learning.config import LearningConfig
from herald.contexts.learning.example_selector import ExampleSelector
from herald.contexts.learning.exceptions import (
    LearningStoreError,
    NotFoundError,
    StorageIOError,
    ValidationError,
)
from herald.contexts.learning.feedback import FeedbackIngestion
from herald.contexts.learning.record_data_structure import (
    ExampleRef,
    Feedback,
    LetterRecord,
    RecordDraft,
    RecordMetadata,
    Tone,
)
from herald.contexts.learning.record_repository import (
    InMemoryBacking,
    JsonFileBacking,
    RecordRepository,
)
from herald.contexts.learning.service import LearningSystem
from herald.contexts.learning.statistics import LearningStats, StatisticsAggregator

__all__ = [
    "ExampleRef",
    "ExampleSelector",
    "Feedback",
    "FeedbackIngestion",
    "InMemoryBacking",
    "JsonFileBacking",
    "LearningConfig",
    "LearningStats",
    "LearningStoreError",
    "LearningSystem",
    "LetterRecord",
    "NotFoundError",
    "RecordDraft",
    "RecordMetadata",
    "RecordRepository",
    "StatisticsAggregator",
    "StorageIOError",
    "Tone",
    "ValidationError",
]
