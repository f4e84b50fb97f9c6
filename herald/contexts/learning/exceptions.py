"""Exceptions raised by the learning context."""

from pathlib import Path
from typing import Optional


class LearningStoreError(Exception):
    """Base class for all learning store failures."""


class ValidationError(LearningStoreError, ValueError):
    """
    Raised for malformed input: rating outside [1, 5], missing required record
    fields, an unrecognized tone, or a malformed selection query.

    Never raised after state has been mutated.
    """


class NotFoundError(LearningStoreError, LookupError):
    """
    Raised when feedback targets a record id that is not in the store.

    Attributes:
        record_id: The id that was looked up
    """

    def __init__(self, record_id: str):
        self.record_id = record_id
        super().__init__(f"No cover letter record with id '{record_id}'")


class StorageIOError(LearningStoreError):
    """
    Raised when the durable medium is unavailable or a write failed.

    Attributes:
        message: Error description
        path: Location of the store, if file-backed
        original_error: The underlying OS or serialization error
    """

    def __init__(
        self,
        message: str,
        path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.path = path
        self.original_error = original_error

        parts = [message]
        if path is not None:
            parts.append(f"Store: {path}")
        if original_error is not None:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))
