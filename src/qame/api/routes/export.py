"""Export API endpoint.

GET /api/results/export - Export the labelled results report as JSON
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from qame.aggregation.labels import rating_label
from qame.aggregation.summary import summarize_submissions
from qame.api.app import get_db_session, require_access_code
from qame.catalog import get_catalog
from qame.db.repo import DbSession
from qame.models.domain import QuestionCatalog
from qame.models.types import AggregateReport

router = APIRouter()


class LabelledRating(BaseModel):
    """Mean rating with its descriptive label."""

    avg: float
    label: str


class ExportedQuestion(BaseModel):
    """General question result."""

    id: str
    text: str
    category: str
    count: int
    avg: float
    label: str


class ExportedSession(BaseModel):
    """Session result with per-question labels."""

    id: str
    day: int
    title: str
    speakers: list[str]
    questions: dict[str, LabelledRating]


class ExportedReport(BaseModel):
    """Full results export."""

    event: dict | None
    overall: LabelledRating
    daily: dict[int, dict[str, LabelledRating]]
    general_questions: list[ExportedQuestion]
    sessions: list[ExportedSession]
    report: AggregateReport
    export_version: str = "1.0"


def _labelled(value: float) -> LabelledRating:
    return LabelledRating(avg=value, label=rating_label(value))


def build_export(report: AggregateReport, catalog: QuestionCatalog) -> ExportedReport:
    """Attach labels and catalog text to an aggregate report.

    Pure function - no database access.
    """
    daily = {
        day: {
            "overall": _labelled(stats.overall),
            "pmt": _labelled(stats.pmt),
            "meals": _labelled(stats.meals),
            "venue": _labelled(stats.venue),
        }
        for day, stats in report.daily_ratings.items()
    }

    general_questions = [
        ExportedQuestion(
            id=q.id,
            text=q.text,
            category=q.category,
            count=report.general_ratings[q.id].count,
            avg=report.general_ratings[q.id].avg,
            label=rating_label(report.general_ratings[q.id].avg),
        )
        for q in catalog.general_questions
    ]

    sessions = [
        ExportedSession(
            id=s.id,
            day=s.day,
            title=s.title,
            speakers=[speaker.name for speaker in s.speakers],
            questions={
                q.id: _labelled(report.session_ratings[s.id][q.id].avg)
                for q in catalog.session_questions
            },
        )
        for s in catalog.sessions
    ]

    event = None
    if catalog.event:
        event = {
            "title": catalog.event.title,
            "date": catalog.event.date,
            "venue": catalog.event.venue,
            "organizer": catalog.event.organizer,
        }

    return ExportedReport(
        event=event,
        overall=_labelled(report.overall_rating),
        daily=daily,
        general_questions=general_questions,
        sessions=sessions,
        report=report,
    )


@router.get("/results/export", dependencies=[Depends(require_access_code)])
def export_results(session: DbSession = Depends(get_db_session)) -> JSONResponse:
    """Export results as downloadable JSON.

    Returns:
        JSON response with Content-Disposition header for download.
    """
    catalog = get_catalog()
    report = summarize_submissions(session, catalog)
    export_data = build_export(report, catalog)

    return JSONResponse(
        content=export_data.model_dump(mode="json", by_alias=True),
        headers={"Content-Disposition": 'attachment; filename="qame_results.json"'},
    )
