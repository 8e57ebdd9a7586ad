"""Submissions API endpoint.

POST /api/submissions - Submit a completed evaluation
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from qame.api.app import get_db_session
from qame.catalog import get_catalog
from qame.db.repo import DbSession
from qame.eval.submissions import (
    SubmissionInput,
    SubmissionRejectedError,
    SubmissionStoreError,
    check_against_catalog,
    submit_evaluation,
)
from qame.models.types import SubmissionCreate

router = APIRouter()

STORE_FAILURE_DETAIL = "Failed to submit evaluation. Please try again."


class SubmissionCreatedResponse(BaseModel):
    """Response for evaluation submission."""

    submission_id: str


@router.post("/submissions", response_model=SubmissionCreatedResponse, status_code=201)
def create_submission(
    submission: SubmissionCreate,
    session: DbSession = Depends(get_db_session),
) -> SubmissionCreatedResponse:
    """Submit a completed evaluation.

    Args:
        submission: Evaluation data.
        session: Database session (injected).

    Returns:
        SubmissionCreatedResponse with submission_id.

    Raises:
        HTTPException: 422 if the answers do not fit the catalog,
            503 if the store rejects the record.
    """
    submission_input = SubmissionInput(
        name=submission.name,
        email=submission.email,
        sex=submission.sex,
        position=submission.position,
        school=submission.school,
        selected_day=submission.selected_day,
        general_ratings=submission.general_ratings,
        session_ratings=submission.session_ratings,
        strengths=submission.strengths,
        improvements=submission.improvements,
    )

    try:
        check_against_catalog(submission_input, get_catalog())
    except SubmissionRejectedError as e:
        raise HTTPException(status_code=422, detail=e.problems) from e

    try:
        result = submit_evaluation(session=session, submission_input=submission_input)
    except SubmissionStoreError as e:
        raise HTTPException(status_code=503, detail=STORE_FAILURE_DETAIL) from e

    return SubmissionCreatedResponse(submission_id=result.submission_id)
