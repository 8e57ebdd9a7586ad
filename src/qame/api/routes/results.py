"""Results API endpoints.

POST /api/admin/verify - Check an admin access code
GET /api/results - Aggregate report over all submissions
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from qame.aggregation.summary import summarize_submissions
from qame.api.app import get_db_session, require_access_code
from qame.db.repo import DbSession
from qame.eval.access import verify_access_code
from qame.models.types import AggregateReport

router = APIRouter()


class AccessCodeRequest(BaseModel):
    """Access code submitted from the admin login."""

    code: str


class AccessCodeResponse(BaseModel):
    """Access check result."""

    valid: bool


@router.post("/admin/verify", response_model=AccessCodeResponse)
def verify_admin(
    request: AccessCodeRequest,
    session: DbSession = Depends(get_db_session),
) -> AccessCodeResponse:
    """Verify an admin access code.

    Raises:
        HTTPException: 401 if the code is invalid.
    """
    if not verify_access_code(session, request.code):
        raise HTTPException(status_code=401, detail="Invalid access code")
    return AccessCodeResponse(valid=True)


@router.get(
    "/results",
    response_model=AggregateReport,
    dependencies=[Depends(require_access_code)],
)
def get_results(session: DbSession = Depends(get_db_session)) -> AggregateReport:
    """Get the aggregate report, recomputed from every stored submission."""
    return summarize_submissions(session)
