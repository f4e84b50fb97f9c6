"""
Cover Letter Record Repository

Authoritative store for every generated cover letter and the feedback it received.

The persisted form is a single JSON array with no per-record addressability, so
every mutation is a whole-collection read-modify-write. All mutations run under
one lock and each write lands through an atomic replace (temp file in the same
directory, fsync, move over the original), so a crash mid-write leaves the
previous collection intact.

Records are never deleted. The only in-place change is replacing a record's
feedback.

Usage:
    from herald.contexts.learning.record_repository import JsonFileBacking, RecordRepository

    with RecordRepository(JsonFileBacking(Path("data/cover-letters.json"))) as repo:
        letter_id = repo.create(draft)
        repo.update_feedback(letter_id, Feedback(rating=5, was_used=True))
        records = repo.scan_all()
"""

import copy
import json
import os
import secrets
import shutil
import tempfile
import threading
import time
from pathlib import Path
from typing import List, Optional, Tuple

from herald.contexts.learning.exceptions import NotFoundError, StorageIOError, ValidationError
from herald.contexts.learning.logger import _log_debug, _log_error, _log_success, _log_warning
from herald.contexts.learning.record_data_structure import Feedback, LetterRecord, RecordDraft
from herald.utils.event_logging import (
    FEEDBACK_SUBMITTED,
    RECORD_CREATED,
    STORE_CORRUPT,
    log_learning_event,
)
from herald.utils.timestamp import now_exact


class CorruptStoreError(Exception):
    """Raised by a backing when the persisted collection cannot be decoded."""


class InMemoryBacking:
    """Process-local backing for tests and ephemeral runs."""

    def __init__(self, rows: Optional[List[dict]] = None):
        self._rows = copy.deepcopy(rows) if rows else []

    def describe(self) -> str:
        return "in-memory"

    def open(self) -> None:
        pass

    def load(self) -> List[dict]:
        return copy.deepcopy(self._rows)

    def save(self, rows: List[dict]) -> None:
        self._rows = copy.deepcopy(rows)

    def quarantine(self) -> Optional[Path]:
        return None


class JsonFileBacking:
    """
    Single JSON file holding the full record collection.

    Attributes:
        path: Location of the collection file
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def describe(self) -> str:
        return str(self.path)

    def open(self) -> None:
        """Create the parent directory and an empty collection if the file doesn't exist."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageIOError("Cannot create store directory", self.path, e)
        if not self.path.exists():
            self.save([])

    def load(self) -> List[dict]:
        """
        Read the full collection.

        Returns:
            List of serialized records ([] if the file doesn't exist yet)

        Raises:
            CorruptStoreError: If the file is not a JSON array
            StorageIOError: If the file exists but cannot be read
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            raise StorageIOError("Cannot read cover letter store", self.path, e)

        try:
            rows = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptStoreError(f"Invalid JSON: {e}")
        if not isinstance(rows, list):
            raise CorruptStoreError(f"Expected a JSON array, found {type(rows).__name__}")
        return rows

    def save(self, rows: List[dict]) -> None:
        """
        Replace the collection atomically.

        Raises:
            StorageIOError: If the temp file cannot be written or moved into place
        """
        temp_path = None
        try:
            # Temp file must share a filesystem with the target for the move to be a rename
            temp_fd, temp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp", text=True
            )
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(rows, f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())

            shutil.move(temp_path, self.path)
        except (OSError, TypeError, ValueError) as e:
            if temp_path is not None and os.path.exists(temp_path):
                os.unlink(temp_path)
            raise StorageIOError("Failed to write cover letter store", self.path, e)

    def quarantine(self) -> Optional[Path]:
        """
        Copy the current (corrupt) file aside before it gets overwritten.

        Returns:
            Path of the copy, or None if there was nothing to copy
        """
        if not self.path.exists():
            return None
        stamp = now_exact().replace(":", "").replace("+", "_")
        target = self.path.with_name(f"{self.path.name}.corrupt-{stamp}")
        try:
            shutil.copy2(self.path, target)
        except OSError as e:
            raise StorageIOError("Cannot preserve corrupt store before overwrite", self.path, e)
        return target


def generate_record_id() -> str:
    """Fresh letter id: millisecond clock plus 9 random hex characters."""
    return f"letter_{int(time.time() * 1000)}_{secrets.token_hex(5)[:9]}"


class RecordRepository:
    """
    Durable, append-only store of LetterRecords.

    Attributes:
        backing: Storage medium (JsonFileBacking or InMemoryBacking)
        events_file: JSON Lines event log (disabled if None)
        corrupt_reads: Number of times the persisted collection was unreadable
            and treated as empty
    """

    def __init__(self, backing, events_file: Optional[Path] = None):
        self.backing = backing
        self.events_file = events_file
        self.corrupt_reads = 0
        self._lock = threading.Lock()
        self._is_open = False

    # ========================================================================
    # Lifecycle
    # ========================================================================

    def open(self) -> "RecordRepository":
        with self._lock:
            if not self._is_open:
                self.backing.open()
                self._is_open = True
                _log_debug(f"Opened cover letter store: {self.backing.describe()}")
        return self

    def close(self) -> None:
        with self._lock:
            if self._is_open:
                self._is_open = False
                _log_debug(f"Closed cover letter store: {self.backing.describe()}")

    @property
    def is_open(self) -> bool:
        return self._is_open

    def __enter__(self) -> "RecordRepository":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ========================================================================
    # Operations
    # ========================================================================

    def create(self, draft: RecordDraft) -> str:
        """
        Assign an id and timestamp to a draft and durably append it.

        Args:
            draft: Validated record payload

        Returns:
            The new record id

        Raises:
            ValidationError: If draft is not a RecordDraft
            StorageIOError: If the store cannot be written (the record is not saved)
        """
        if not isinstance(draft, RecordDraft):
            raise ValidationError("create() expects a RecordDraft")

        with self._lock:
            self._ensure_open()
            records = self._load_records(for_write=True)

            existing_ids = {record.id for record in records}
            record_id = generate_record_id()
            while record_id in existing_ids:
                record_id = generate_record_id()

            record = LetterRecord.from_draft(draft, record_id=record_id, created_at=now_exact())
            records.append(record)
            self._save_records(records)

        _log_success(f"Saved letter {record_id} ({draft.job_title} @ {draft.company_name})")
        self._log_event(
            RECORD_CREATED,
            record_id,
            job_title=record.job_title,
            company_name=record.company_name,
            tone=record.tone.value,
        )
        return record_id

    def update_feedback(self, record_id: str, feedback: Feedback) -> None:
        """
        Replace the feedback of an existing record.

        Raises:
            ValidationError: If feedback is not a Feedback
            NotFoundError: If record_id is not in the store (nothing is written)
            StorageIOError: If the store cannot be written
        """
        if not isinstance(feedback, Feedback):
            raise ValidationError("update_feedback() expects a Feedback")

        with self._lock:
            self._ensure_open()
            records = self._load_records(for_write=True)

            index = next((i for i, r in enumerate(records) if r.id == record_id), None)
            if index is None:
                raise NotFoundError(record_id)

            previous = records[index].feedback
            records[index] = records[index].with_feedback(feedback)
            self._save_records(records)

        if previous is not None:
            _log_warning(
                f"Feedback for {record_id} overwritten (rating {previous.rating} -> {feedback.rating})"
            )
        else:
            _log_debug(f"Feedback recorded for {record_id} (rating {feedback.rating})")

        extra = {"feedback": feedback.to_dict()}
        if previous is not None:
            extra["previous_feedback"] = previous.to_dict()
        self._log_event(FEEDBACK_SUBMITTED, record_id, **extra)

    def scan_all(self) -> Tuple[LetterRecord, ...]:
        """
        Snapshot of every record in storage order.

        Raises:
            StorageIOError: If the store cannot be read
        """
        with self._lock:
            self._ensure_open()
            return tuple(self._load_records())

    def get(self, record_id: str) -> LetterRecord:
        """
        Look up a single record.

        Raises:
            NotFoundError: If record_id is not in the store
        """
        for record in self.scan_all():
            if record.id == record_id:
                return record
        raise NotFoundError(record_id)

    def __len__(self) -> int:
        return len(self.scan_all())

    # ========================================================================
    # Internals (caller holds the lock)
    # ========================================================================

    def _ensure_open(self) -> None:
        if not self._is_open:
            raise StorageIOError(
                "Cover letter store is not open", getattr(self.backing, "path", None)
            )

    def _load_records(self, for_write: bool = False) -> List[LetterRecord]:
        """
        Decode the persisted collection.

        A corrupt collection is treated as empty. Before a write replaces it, the
        corrupt file is copied aside so the old history can still be recovered.
        """
        try:
            rows = self.backing.load()
            return [LetterRecord.from_dict(row) for row in rows]
        except (CorruptStoreError, KeyError, TypeError, AttributeError, ValueError) as e:
            # ValidationError is a ValueError
            self.corrupt_reads += 1
            _log_error(
                f"Cover letter store {self.backing.describe()} is unreadable, "
                f"treating it as empty: {e}"
            )
            quarantined = self.backing.quarantine() if for_write else None
            if quarantined is not None:
                _log_error(f"Corrupt store preserved at {quarantined}")
            self._log_event(
                STORE_CORRUPT,
                None,
                error=str(e),
                quarantined_to=str(quarantined) if quarantined else None,
            )
            return []

    def _save_records(self, records: List[LetterRecord]) -> None:
        self.backing.save([record.to_dict() for record in records])

    def _log_event(self, event_type: str, record_id: Optional[str], **extra_fields) -> None:
        if self.events_file is None:
            return
        try:
            log_learning_event(
                self.events_file, event_type, record_id, source="repository", **extra_fields
            )
        except OSError as e:
            # The store write already succeeded; a lost audit line must not undo it
            _log_warning(f"Could not append {event_type} event to {self.events_file}: {e}")

