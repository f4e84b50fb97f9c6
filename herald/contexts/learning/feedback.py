"""
Feedback ingestion for generated cover letters.

Validates a user's rating before anything touches storage, then replaces the
record's feedback. Resubmitting overwrites the previous feedback entirely; the
overwritten value survives only in the event log.
"""

from typing import Optional

from herald.contexts.learning.record_data_structure import Feedback
from herald.contexts.learning.record_repository import RecordRepository


class FeedbackIngestion:
    """Attaches outcome signals to stored letters."""

    def __init__(self, repository: RecordRepository):
        self.repository = repository

    def submit(
        self,
        record_id: str,
        rating: int,
        was_used: bool,
        got_interview: Optional[bool] = None,
        comments: Optional[str] = None,
    ) -> Feedback:
        """
        Validate and store feedback for a letter.

        Args:
            record_id: Id returned by RecordRepository.create
            rating: Integer in [1, 5]
            was_used: Whether the letter was actually sent
            got_interview: Whether it led to an interview (optional)
            comments: Free-form remarks (optional)

        Returns:
            The stored Feedback

        Raises:
            ValidationError: If any field is invalid (store untouched)
            NotFoundError: If record_id is unknown (store untouched)
            StorageIOError: If the store cannot be written
        """
        feedback = Feedback(
            rating=rating,
            was_used=was_used,
            got_interview=got_interview,
            comments=comments,
        )
        self.repository.update_feedback(record_id, feedback)
        return feedback
