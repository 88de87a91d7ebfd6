# scripts/seed_baseline.py
"""
Make sure the schema, an active quiz and the exercise catalog exist.

    python scripts/seed_baseline.py
    python scripts/seed_baseline.py --activate 3
"""
import argparse
import logging
import sys

from sqlmodel import Session

from oncoliving.core.db import get_engine, init_db
from oncoliving.core.errors import QuizNotFound
from oncoliving.core.exercises import ensure_baseline_exercises
from oncoliving.core.quiz_config import activate_quiz
from oncoliving.core.quiz_snapshot import load_active_quiz

logger = logging.getLogger("seed_baseline")


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Seed the oncoliving database with baseline content")
    p.add_argument("--activate", type=int, default=None, help="make this quiz id the active quiz")
    args = p.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    init_db()

    with Session(get_engine()) as session:
        if args.activate is not None:
            try:
                activate_quiz(session, args.activate)
            except QuizNotFound as e:
                logger.error("[seed] %s", e.message)
                return 1

        quiz = load_active_quiz(session)
        logger.info("[seed] active quiz: #%s %s (%d questions, %d scoring rules)",
                    quiz.id, quiz.name, len(quiz.questions), len(quiz.rules))

        added = ensure_baseline_exercises(session)
        logger.info("[seed] exercise catalog ready (%d added)", added)
    return 0


if __name__ == "__main__":
    sys.exit(main())
