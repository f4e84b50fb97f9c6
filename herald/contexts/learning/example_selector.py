"""
Example Selector

Picks past cover letters worth showing to the generator as reference material.

A candidate must have feedback that signals success, share the query's tone,
and have a job title that contains (or is contained in) the query title,
case-insensitively. Survivors are scored on their feedback and the top ``limit``
are returned as excerpts.

Scoring weights:
    rating         +rating (1-5)
    was_used       +2
    got_interview  +3

Equal scores are broken by recency: the record stored later ranks first.
"""

from typing import Iterable, List, Optional

from herald.contexts.learning.exceptions import ValidationError
from herald.contexts.learning.logger import _log_debug
from herald.contexts.learning.record_data_structure import (
    ExampleRef,
    Feedback,
    LetterRecord,
    Tone,
)
from herald.contexts.learning.record_repository import RecordRepository

DEFAULT_EXCERPT_LENGTH = 400
TRUNCATION_MARKER = "..."
SUCCESS_RATING = 4

USED_WEIGHT = 2
INTERVIEW_WEIGHT = 3


def score_feedback(feedback: Feedback) -> int:
    """Weighted success score: rating + 2 if used + 3 if it led to an interview."""
    return (
        feedback.rating
        + (USED_WEIGHT if feedback.was_used else 0)
        + (INTERVIEW_WEIGHT if feedback.got_interview else 0)
    )


def is_successful(feedback: Optional[Feedback]) -> bool:
    """Quality filter: rated 4+, or actually sent, or led to an interview."""
    if feedback is None:
        return False
    return feedback.rating >= SUCCESS_RATING or feedback.was_used or bool(feedback.got_interview)


def titles_match(query_title: str, candidate_title: str) -> bool:
    """
    Loose title similarity: either title contains the other, ignoring case.

    "Senior Software Engineer" matches "Software Engineer" and vice versa.
    """
    query = query_title.lower()
    candidate = candidate_title.lower()
    return candidate in query or query in candidate


def make_excerpt(text: str, length: int = DEFAULT_EXCERPT_LENGTH) -> str:
    """Cut text to at most ``length`` characters, appending "..." when cut."""
    if len(text) <= length:
        return text
    return text[:length] + TRUNCATION_MARKER


def rank_examples(
    records: Iterable[LetterRecord],
    job_title: str,
    tone: Tone,
    limit: int,
    excerpt_length: int = DEFAULT_EXCERPT_LENGTH,
) -> List[ExampleRef]:
    """
    Filter, score and rank records without touching storage.

    Args:
        records: Records in storage order
        job_title: Title of the letter about to be generated
        tone: Tone of the letter about to be generated
        limit: Maximum number of examples to return
        excerpt_length: Excerpt cut-off in characters

    Returns:
        Up to ``limit`` ExampleRefs, best first
    """
    candidates = []
    for position, record in enumerate(records):
        if not is_successful(record.feedback):
            continue
        if record.tone != tone:
            continue
        if not titles_match(job_title, record.job_title):
            continue
        candidates.append((score_feedback(record.feedback), position, record))

    # Higher score first, then later storage position first
    candidates.sort(key=lambda c: (c[0], c[1]), reverse=True)

    _log_debug(
        f"{len(candidates)} example candidate(s) for '{job_title}' ({tone.value}), "
        f"returning up to {limit}"
    )

    return [
        ExampleRef(
            job_title=record.job_title,
            company_name=record.company_name,
            text_excerpt=make_excerpt(record.text, excerpt_length),
        )
        for _, _, record in candidates[:limit]
    ]


class ExampleSelector:
    """
    Serves ranked reference examples from a RecordRepository.

    Attributes:
        repository: Store to scan
        excerpt_length: Excerpt cut-off in characters (default 400)
    """

    def __init__(self, repository: RecordRepository, excerpt_length: int = DEFAULT_EXCERPT_LENGTH):
        if excerpt_length < 1:
            raise ValidationError(f"excerpt_length must be positive, got {excerpt_length}")
        self.repository = repository
        self.excerpt_length = excerpt_length

    def select(self, job_title: str, tone, limit: int) -> List[ExampleRef]:
        """
        Return up to ``limit`` successful past letters similar to the query.

        An empty list is a normal outcome, not an error.

        Args:
            job_title: Title of the letter about to be generated
            tone: Tone or tone string (case-sensitive)
            limit: Maximum number of examples (0 returns [])

        Raises:
            ValidationError: If job_title is not a string, tone is unrecognized,
                or limit is negative
            StorageIOError: If the store cannot be read
        """
        if not isinstance(job_title, str):
            raise ValidationError("job_title must be a string")
        tone = Tone.parse(tone)
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
            raise ValidationError(f"limit must be a non-negative integer, got {limit!r}")
        if limit == 0:
            return []

        return rank_examples(
            self.repository.scan_all(),
            job_title=job_title,
            tone=tone,
            limit=limit,
            excerpt_length=self.excerpt_length,
        )
