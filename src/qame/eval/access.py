"""Access-code gate for the results dashboard."""

from __future__ import annotations

import logging
import secrets

from qame.db import repo
from qame.db.repo import DbSession

logger = logging.getLogger(__name__)


def verify_access_code(session: DbSession, code: str | None) -> bool:
    """Check *code* against the active access codes.

    Returns only True/False; callers must not reveal why a code failed.
    """
    if not code or not code.strip():
        return False

    candidate = code.strip().encode("utf-8")
    valid = False
    # Compare against every code so timing does not reveal which matched
    for entity in repo.get_active_access_codes(session):
        if secrets.compare_digest(candidate, entity.code.encode("utf-8")):
            valid = True

    if not valid:
        logger.warning("Rejected results access attempt")
    return valid
