#!/usr/bin/env python3
"""Seed a demo database with an access code and sample evaluations.

Usage:
    python scripts/seed_demo.py [--code CODE] [--count N]

This script:
1. Initializes the demo database
2. Creates an admin access code
3. Stores N random evaluations across the three event days
4. Prints the resulting overall rating
"""

from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from qame.aggregation.labels import rating_label  # noqa: E402
from qame.aggregation.summary import summarize_submissions  # noqa: E402
from qame.catalog import get_catalog  # noqa: E402
from qame.db import repo  # noqa: E402
from qame.db.session import get_db_session, init_db  # noqa: E402
from qame.eval.submissions import SubmissionInput, submit_evaluation  # noqa: E402
from qame.models.domain import AccessCodeEntity  # noqa: E402

DEMO_DB_PATH = PROJECT_ROOT / "demo.db"
DEMO_ACCESS_CODE = "qame-demo"

DEMO_STRENGTHS = [
    "The speakers were very knowledgeable.",
    "Clear discussion of the legal bases.",
    "",
    "Good venue and well organized sessions.",
]
DEMO_IMPROVEMENTS = [
    "More time for open forum.",
    "",
    "Provide soft copies of the presentations.",
]


def build_demo_input(rng: random.Random, index: int) -> SubmissionInput:
    """Build one random evaluation."""
    catalog = get_catalog()
    day = rng.choice([1, 2, 3])
    return SubmissionInput(
        name=f"Demo Respondent {index}",
        email=f"respondent{index}@example.org",
        sex=rng.choice(["Male", "Female"]),
        position=rng.choice(list(catalog.positions)),
        school="Demo School",
        selected_day=day,
        general_ratings={q.id: rng.randint(2, 5) for q in catalog.general_questions},
        session_ratings={
            s.id: {q.id: rng.randint(2, 5) for q in catalog.session_questions}
            for s in catalog.sessions_for_day(day)
        },
        strengths=rng.choice(DEMO_STRENGTHS),
        improvements=rng.choice(DEMO_IMPROVEMENTS),
    )


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--code", default=DEMO_ACCESS_CODE, help="Admin access code")
    parser.add_argument("--count", type=int, default=25, help="Number of evaluations")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    args = parser.parse_args()

    print(f"Initializing database at {DEMO_DB_PATH}...")
    init_db(DEMO_DB_PATH)

    with get_db_session(DEMO_DB_PATH) as session:
        active = {c.code for c in repo.get_active_access_codes(session)}
        if args.code not in active:
            repo.create_access_code(session, AccessCodeEntity(code=args.code, label="demo"))
            print(f"Created access code: {args.code}")

    rng = random.Random(args.seed)
    with get_db_session(DEMO_DB_PATH) as session:
        for index in range(1, args.count + 1):
            submit_evaluation(session, build_demo_input(rng, index))
        total = repo.count_submissions(session)
        report = summarize_submissions(session)

    print(f"Stored {args.count} evaluations ({total} total)")
    print(
        f"Overall rating: {report.overall_rating:.2f} "
        f"({rating_label(report.overall_rating)})"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
