"""
Cover letter record data structures for the Learning context.

A LetterRecord is one generated cover letter plus the immutable context it was
generated under. Feedback is the only part of a record that ever changes, and
its absence is modelled explicitly as ``feedback=None``.

Serialized layout (one JSON object per record, absent optionals omitted):

    {
      "id": "letter_1731512345678_k3j9x0a1b",
      "timestamp": "2025-11-13T18:45:40.572549+00:00",
      "jobTitle": "Software Engineer",
      "companyName": "MomCorp",
      "industry": "Robotics",
      "tone": "professional",
      "generatedLetter": "Dear Hiring Manager, ...",
      "userFeedback": {"rating": 5, "wasUsed": true, "gotInterview": true, "comments": "..."},
      "metadata": {"keySkills": "Python, SQL", "professionalSummary": "..."}
    }
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional

from herald.contexts.learning.exceptions import ValidationError

MIN_RATING = 1
MAX_RATING = 5


class Tone(str, Enum):
    """Closed set of writing tones a letter can be generated under."""

    PROFESSIONAL = "professional"
    CONVERSATIONAL = "conversational"
    ENTHUSIASTIC = "enthusiastic"
    FORMAL = "formal"

    @classmethod
    def parse(cls, value: Any) -> "Tone":
        """
        Coerce a Tone or its string value into a Tone.

        Matching is exact and case-sensitive.

        Raises:
            ValidationError: If value is not one of the enumerated tones
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(t.value for t in cls)
            raise ValidationError(
                f"Unrecognized tone {value!r} (expected one of: {allowed})"
            ) from None


def _require_text(name: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"'{name}' is required and must be a non-empty string")
    return value


def _optional_text(name: str, value: Any) -> Optional[str]:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"'{name}' must be a string when provided")
    return value


@dataclass(frozen=True)
class RecordMetadata:
    """Bookkeeping strings captured at generation time. Not used for selection."""

    key_skills: Optional[str] = None
    professional_summary: Optional[str] = None

    def __post_init__(self):
        _optional_text("key_skills", self.key_skills)
        _optional_text("professional_summary", self.professional_summary)

    def to_dict(self) -> Dict[str, str]:
        data = {}
        if self.key_skills is not None:
            data["keySkills"] = self.key_skills
        if self.professional_summary is not None:
            data["professionalSummary"] = self.professional_summary
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "RecordMetadata":
        data = data or {}
        return cls(
            key_skills=data.get("keySkills"),
            professional_summary=data.get("professionalSummary"),
        )


@dataclass(frozen=True)
class Feedback:
    """
    User-supplied outcome signal for a generated letter.

    Attributes:
        rating: Integer score in [1, 5]
        was_used: Whether the user actually sent the letter
        got_interview: Whether the application led to an interview (None if unknown)
        comments: Free-form remarks

    Raises:
        ValidationError: On construction, if any field has the wrong type or
            rating is out of range
    """

    rating: int
    was_used: bool
    got_interview: Optional[bool] = None
    comments: Optional[str] = None

    def __post_init__(self):
        # bool is an int subclass; True must not pass as a rating of 1
        if isinstance(self.rating, bool) or not isinstance(self.rating, int):
            raise ValidationError(f"Rating must be an integer, got {self.rating!r}")
        if not MIN_RATING <= self.rating <= MAX_RATING:
            raise ValidationError(
                f"Rating must be between {MIN_RATING} and {MAX_RATING}, got {self.rating}"
            )
        if not isinstance(self.was_used, bool):
            raise ValidationError(f"'was_used' must be a boolean, got {self.was_used!r}")
        if self.got_interview is not None and not isinstance(self.got_interview, bool):
            raise ValidationError(
                f"'got_interview' must be a boolean when provided, got {self.got_interview!r}"
            )
        _optional_text("comments", self.comments)

    def to_dict(self) -> Dict[str, Any]:
        data = {"rating": self.rating, "wasUsed": self.was_used}
        if self.got_interview is not None:
            data["gotInterview"] = self.got_interview
        if self.comments is not None:
            data["comments"] = self.comments
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Feedback":
        return cls(
            rating=data["rating"],
            was_used=data["wasUsed"],
            got_interview=data.get("gotInterview"),
            comments=data.get("comments"),
        )


@dataclass(frozen=True)
class RecordDraft:
    """
    Payload for a new record, before the store assigns an id and timestamp.

    ``tone`` accepts either a Tone or its string value and is normalized to Tone.

    Raises:
        ValidationError: If a required field is missing/empty or tone is unrecognized
    """

    job_title: str
    company_name: str
    tone: Tone
    text: str
    industry: Optional[str] = None
    metadata: RecordMetadata = field(default_factory=RecordMetadata)

    def __post_init__(self):
        _require_text("job_title", self.job_title)
        _require_text("company_name", self.company_name)
        _require_text("text", self.text)
        _optional_text("industry", self.industry)
        if not isinstance(self.metadata, RecordMetadata):
            raise ValidationError("'metadata' must be a RecordMetadata")
        object.__setattr__(self, "tone", Tone.parse(self.tone))


@dataclass(frozen=True)
class LetterRecord:
    """One persisted cover letter with its generation context and optional feedback."""

    id: str
    created_at: str
    job_title: str
    company_name: str
    tone: Tone
    text: str
    industry: Optional[str] = None
    metadata: RecordMetadata = field(default_factory=RecordMetadata)
    feedback: Optional[Feedback] = None

    @classmethod
    def from_draft(cls, draft: RecordDraft, record_id: str, created_at: str) -> "LetterRecord":
        return cls(
            id=record_id,
            created_at=created_at,
            job_title=draft.job_title,
            company_name=draft.company_name,
            tone=draft.tone,
            text=draft.text,
            industry=draft.industry,
            metadata=draft.metadata,
        )

    @property
    def has_feedback(self) -> bool:
        return self.feedback is not None

    def with_feedback(self, feedback: Feedback) -> "LetterRecord":
        """Return a copy of this record with its feedback replaced."""
        return replace(self, feedback=feedback)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "timestamp": self.created_at,
            "jobTitle": self.job_title,
            "companyName": self.company_name,
        }
        if self.industry is not None:
            data["industry"] = self.industry
        data["tone"] = self.tone.value
        data["generatedLetter"] = self.text
        if self.feedback is not None:
            data["userFeedback"] = self.feedback.to_dict()
        data["metadata"] = self.metadata.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LetterRecord":
        """
        Build a record from its serialized form.

        Raises:
            ValidationError: If a field violates the record invariants
            KeyError: If a required key is missing
            TypeError: If data is not a mapping
        """
        feedback_data = data.get("userFeedback")
        return cls(
            id=_require_text("id", data["id"]),
            created_at=_require_text("timestamp", data["timestamp"]),
            job_title=_require_text("jobTitle", data["jobTitle"]),
            company_name=_require_text("companyName", data["companyName"]),
            tone=Tone.parse(data["tone"]),
            text=_require_text("generatedLetter", data["generatedLetter"]),
            industry=_optional_text("industry", data.get("industry")),
            metadata=RecordMetadata.from_dict(data.get("metadata")),
            feedback=Feedback.from_dict(feedback_data) if feedback_data is not None else None,
        )


@dataclass(frozen=True)
class ExampleRef:
    """A past letter surfaced to the generator as reference material."""

    job_title: str
    company_name: str
    text_excerpt: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "jobTitle": self.job_title,
            "companyName": self.company_name,
            "textExcerpt": self.text_excerpt,
        }
