"""Summary metrics over the cover letter store."""

from dataclasses import dataclass
from typing import Dict, Iterable, Union

from herald.contexts.learning.record_data_structure import LetterRecord
from herald.contexts.learning.record_repository import RecordRepository


@dataclass(frozen=True)
class LearningStats:
    """
    Attributes:
        total_generated: Number of stored letters
        with_feedback: Letters that received feedback
        average_rating: Mean rating over letters with feedback (0.0 if none)
        success_rate: Fraction of all letters marked as used (0.0 if store is empty)
    """

    total_generated: int
    with_feedback: int
    average_rating: float
    success_rate: float

    def to_dict(self) -> Dict[str, Union[int, float]]:
        return {
            "totalGenerated": self.total_generated,
            "withFeedback": self.with_feedback,
            "averageRating": self.average_rating,
            "successRate": self.success_rate,
        }


def compute_stats(records: Iterable[LetterRecord]) -> LearningStats:
    records = list(records)
    rated = [r.feedback.rating for r in records if r.feedback is not None]
    used = sum(1 for r in records if r.feedback is not None and r.feedback.was_used)

    return LearningStats(
        total_generated=len(records),
        with_feedback=len(rated),
        average_rating=sum(rated) / len(rated) if rated else 0.0,
        success_rate=used / len(records) if records else 0.0,
    )


class StatisticsAggregator:
    def __init__(self, repository: RecordRepository):
        self.repository = repository

    def stats(self) -> LearningStats:
        """
        Raises:
            StorageIOError: If the store cannot be read
        """
        return compute_stats(self.repository.scan_all())
