"""Evaluation results aggregation.

Reduces raw submissions into an AggregateReport: per-question means,
per-day category means, demographic distributions and comments.
Domain logic is pure - database operations go through repo.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from qame.aggregation.coerce import (
    coerce_rating,
    comment_text,
    distribution_key,
    normalize_day,
)
from qame.catalog import get_catalog
from qame.db import repo
from qame.db.repo import DbSession
from qame.models.domain import (
    DAYS,
    QuestionCatalog,
    QuestionCategory,
    SubmissionEntity,
    category_for_id,
)
from qame.models.types import (
    AggregateReport,
    CommentCollection,
    DailyRatingStats,
    QuestionStats,
)

logger = logging.getLogger(__name__)


@dataclass
class Accumulator:
    """Running sum and count for one series of ratings.

    Values are kept so the total can be summed with ``math.fsum``,
    which makes the result independent of submission order.
    """

    values: list[float] = field(default_factory=list)

    def add(self, value: float) -> None:
        self.values.append(value)

    @property
    def count(self) -> int:
        return len(self.values)

    @property
    def total(self) -> float:
        return math.fsum(self.values)

    @property
    def mean(self) -> float:
        """Mean of the series, 0 when empty."""
        return self.total / self.count if self.count else 0.0

    def to_stats(self) -> QuestionStats:
        return QuestionStats(sum=self.total, count=self.count, avg=self.mean)


@dataclass
class DayAccumulators:
    """Category accumulators for a single event day."""

    overall: Accumulator = field(default_factory=Accumulator)
    program_management: Accumulator = field(default_factory=Accumulator)
    meals: Accumulator = field(default_factory=Accumulator)
    venue: Accumulator = field(default_factory=Accumulator)

    def for_category(self, category: QuestionCategory) -> Accumulator:
        """Return the category bucket a general question feeds."""
        if category == "program_management":
            return self.program_management
        if category == "meals":
            return self.meals
        if category == "venue":
            return self.venue
        raise ValueError(f"No day bucket for category: {category}")

    def to_stats(self) -> DailyRatingStats:
        return DailyRatingStats(
            overall=self.overall.mean,
            pmt=self.program_management.mean,
            meals=self.meals.mean,
            venue=self.venue.mean,
        )


@dataclass
class ReportAccumulators:
    """All accumulators for one aggregation pass, seeded from the catalog."""

    categories: dict[str, QuestionCategory]
    general: dict[str, Accumulator]
    sessions: dict[str, dict[str, Accumulator]]
    days: dict[int, DayAccumulators] = field(
        default_factory=lambda: {day: DayAccumulators() for day in DAYS}
    )
    daily_respondents: dict[int, int] = field(default_factory=lambda: dict.fromkeys(DAYS, 0))
    grand: Accumulator = field(default_factory=Accumulator)
    total_respondents: int = 0
    sex: Counter = field(default_factory=Counter)
    position: Counter = field(default_factory=Counter)
    strengths: list[str] = field(default_factory=list)
    improvements: list[str] = field(default_factory=list)

    @classmethod
    def from_catalog(cls, catalog: QuestionCatalog) -> ReportAccumulators:
        return cls(
            categories={q.id: q.category for q in catalog.general_questions},
            general={q.id: Accumulator() for q in catalog.general_questions},
            sessions={
                s.id: {q.id: Accumulator() for q in catalog.session_questions}
                for s in catalog.sessions
            },
        )


def aggregate(
    submissions: Iterable[SubmissionEntity],
    catalog: QuestionCatalog,
) -> AggregateReport:
    """Compute the aggregate report for a set of submissions.

    Pure function - no database access, inputs are not mutated.
    Numeric results do not depend on submission order; comment lists
    follow iteration order.

    Args:
        submissions: Submissions in any order. May be empty.
        catalog: Question catalog used to seed every accumulator.

    Returns:
        AggregateReport with every catalog question present.
    """
    acc = ReportAccumulators.from_catalog(catalog)

    for submission in submissions:
        _accumulate_submission(acc, submission)

    logger.debug(
        f"Aggregated {acc.total_respondents} submissions, {acc.grand.count} ratings"
    )
    return _build_report(acc)


def summarize_submissions(
    session: DbSession,
    catalog: QuestionCatalog | None = None,
) -> AggregateReport:
    """Fetch every stored submission and aggregate it.

    Args:
        session: Database session.
        catalog: Catalog to aggregate against. Defaults to the deployment catalog.

    Returns:
        AggregateReport as of this fetch.
    """
    submissions = repo.get_all_submissions(session)
    report = aggregate(submissions, catalog or get_catalog())
    logger.info(f"Built results report for {report.total_respondents} respondents")
    return report


def _accumulate_submission(acc: ReportAccumulators, submission: SubmissionEntity) -> None:
    """Fold one submission into the accumulators."""
    acc.total_respondents += 1

    day = normalize_day(submission.selected_day)
    day_acc = acc.days[day] if day is not None else None
    if day is not None:
        acc.daily_respondents[day] += 1
    elif submission.selected_day is not None:
        logger.debug(
            f"Submission {submission.submission_id}: unrecognized day "
            f"{submission.selected_day!r}"
        )

    acc.sex[distribution_key(submission.sex)] += 1
    acc.position[distribution_key(submission.position)] += 1

    for question_id, raw in _items(submission.general_ratings):
        value = coerce_rating(raw)
        if value is None:
            logger.debug(
                f"Submission {submission.submission_id}: skipping {question_id}={raw!r}"
            )
            continue
        acc.grand.add(value)
        # Retired or renamed ids still count toward totals, routed by prefix
        category = acc.categories.get(question_id) or category_for_id(question_id)
        if day_acc is not None:
            day_acc.overall.add(value)
            day_acc.for_category(category).add(value)
        accumulator = acc.general.get(question_id)
        if accumulator is None:
            logger.debug(
                f"Submission {submission.submission_id}: uncatalogued question {question_id}"
            )
            continue
        accumulator.add(value)

    for session_id, answers in _items(submission.session_ratings):
        questions = acc.sessions.get(session_id)
        if questions is None:
            logger.debug(f"Submission {submission.submission_id}: unknown session {session_id}")
            continue
        for question_id, raw in _items(answers):
            accumulator = questions.get(question_id)
            value = coerce_rating(raw)
            if accumulator is None or value is None:
                logger.debug(
                    f"Submission {submission.submission_id}: skipping "
                    f"{session_id}.{question_id}={raw!r}"
                )
                continue
            accumulator.add(value)
            acc.grand.add(value)
            # Session ratings only feed the day's overall bucket
            if day_acc is not None:
                day_acc.overall.add(value)

    strengths = comment_text(submission.strengths)
    if strengths is not None:
        acc.strengths.append(strengths)
    improvements = comment_text(submission.improvements)
    if improvements is not None:
        acc.improvements.append(improvements)


def _items(mapping: Any) -> list[tuple[str, Any]]:
    """Items of a stored mapping, or nothing if it is not a mapping."""
    if not isinstance(mapping, Mapping):
        return []
    return [(str(key), value) for key, value in mapping.items()]


def _build_report(acc: ReportAccumulators) -> AggregateReport:
    """Derive means from the accumulators."""
    return AggregateReport(
        total_respondents=acc.total_respondents,
        daily_respondents=dict(acc.daily_respondents),
        overall_rating=acc.grand.mean,
        daily_ratings={day: day_acc.to_stats() for day, day_acc in acc.days.items()},
        sex_distribution=dict(acc.sex),
        position_distribution=dict(acc.position),
        general_ratings={qid: a.to_stats() for qid, a in acc.general.items()},
        session_ratings={
            sid: {qid: a.to_stats() for qid, a in questions.items()}
            for sid, questions in acc.sessions.items()
        },
        comments=CommentCollection(
            strengths=list(acc.strengths),
            improvements=list(acc.improvements),
        ),
    )
