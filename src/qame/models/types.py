"""Pydantic models for QAME API.

Report models serialize with the camelCase field names the dashboard
reads (``totalRespondents``, ``dailyRatings`` ...). Python code uses
the snake_case attribute names.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class QuestionStats(BaseModel):
    """Accumulated statistics for a single question."""

    sum: float = 0.0
    count: int = 0
    avg: float = 0.0


class DailyRatingStats(BaseModel):
    """Per-day category means."""

    overall: float = 0.0
    pmt: float = 0.0
    meals: float = 0.0
    venue: float = 0.0


class CommentCollection(BaseModel):
    """Free-text comments in submission order."""

    strengths: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)


class AggregateReport(BaseModel):
    """Descriptive statistics over all submissions.

    Rebuilt from scratch on every request; never updated in place.
    """

    model_config = ConfigDict(populate_by_name=True)

    total_respondents: int = Field(alias="totalRespondents")
    daily_respondents: dict[int, int] = Field(alias="dailyRespondents")
    overall_rating: float = Field(alias="overallRating")
    daily_ratings: dict[int, DailyRatingStats] = Field(alias="dailyRatings")
    sex_distribution: dict[str, int] = Field(alias="sexDistribution")
    position_distribution: dict[str, int] = Field(alias="positionDistribution")
    general_ratings: dict[str, QuestionStats] = Field(alias="generalRatings")
    session_ratings: dict[str, dict[str, QuestionStats]] = Field(alias="sessionRatings")
    comments: CommentCollection


class SubmissionCreate(BaseModel):
    """Evaluation submitted by a respondent."""

    name: str = ""
    email: str
    sex: Literal["Male", "Female"]
    position: str
    school: str
    selected_day: Literal[1, 2, 3]
    general_ratings: dict[str, int] = Field(default_factory=dict)
    session_ratings: dict[str, dict[str, int]] = Field(default_factory=dict)
    strengths: str = ""
    improvements: str = ""

    @field_validator("email", "position", "school")
    @classmethod
    def profile_not_blank(cls, value: str, info: ValidationInfo) -> str:
        """Profile fields are required; email format is not checked."""
        if not value.strip():
            raise ValueError(f"{info.field_name} must not be empty")
        return value

    @field_validator("general_ratings")
    @classmethod
    def general_in_scale(cls, value: dict[str, int]) -> dict[str, int]:
        """General ratings must be on the 1-5 scale."""
        for question_id, rating in value.items():
            _check_scale(question_id, rating)
        return value

    @field_validator("session_ratings")
    @classmethod
    def session_in_scale(cls, value: dict[str, dict[str, int]]) -> dict[str, dict[str, int]]:
        """Session ratings must be on the 1-5 scale."""
        for session_id, answers in value.items():
            for question_id, rating in answers.items():
                _check_scale(f"{session_id}.{question_id}", rating)
        return value


def _check_scale(key: str, rating: int) -> None:
    if not 1 <= rating <= 5:
        raise ValueError(f"rating for {key} must be between 1 and 5, got {rating}")


class QuestionDetail(BaseModel):
    """Question details for API response."""

    id: str
    text: str
    category: Literal["program_management", "venue", "meals", "session"]


class SpeakerDetail(BaseModel):
    """Speaker details for API response."""

    id: str
    name: str
    topic: str
    role: str | None = None


class SessionDetail(BaseModel):
    """Session details for API response."""

    id: str
    day: int
    title: str
    speakers: list[SpeakerDetail]


class EventDetail(BaseModel):
    """Event metadata for API response."""

    title: str
    date: str
    venue: str
    organizer: str


class CatalogDetail(BaseModel):
    """Full form catalog for API response."""

    event: EventDetail | None
    positions: list[str]
    program_questions: list[QuestionDetail]
    venue_questions: list[QuestionDetail]
    meal_questions: list[QuestionDetail]
    session_questions: list[QuestionDetail]
    sessions: list[SessionDetail]
