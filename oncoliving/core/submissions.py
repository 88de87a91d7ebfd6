# oncoliving/core/submissions.py
"""
Daily submission guard and response history.

One accepted response per (patient, quiz, calendar day). The day is a DATE
value in the check-in timezone and the store enforces it with a UNIQUE
constraint on (user_id, quiz_id, response_date); the pre-insert lookup only
avoids scoring work that would be thrown away. Two racing submissions for
the same key cannot both commit: the loser hits the constraint and gets
DuplicateSubmission. Different patients/quizzes never contend.

The response row and its answers are written in one transaction.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import date
from typing import Iterable, Iterator, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from oncoliving.core.answers import RawAnswer, validate_answer_set
from oncoliving.core.errors import DuplicateSubmission, QuizNotFound, StorageFault
from oncoliving.core.quiz_snapshot import load_quiz
from oncoliving.core.recommendation import resolve
from oncoliving.core.scoring import compute_score
from oncoliving.core.security import (
    CallerIdentity,
    require_authenticated,
    require_clinician,
    require_patient,
)
from oncoliving.core.settings import settings
from oncoliving.models.db_models import QuizResponse, QuizResponseAnswer

logger = logging.getLogger(__name__)


@contextmanager
def _storage_guard(session: Session, action: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception("[submit] storage failure while trying to %s", action)
        raise StorageFault(f"storage unavailable while trying to {action}") from e


def _clamp_limit(limit: Optional[int]) -> int:
    if limit is None:
        limit = settings.HISTORY_DEFAULT_LIMIT
    return max(1, min(int(limit), settings.HISTORY_MAX_LIMIT))


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------
def find_response_for_day(session: Session, user_id: int, quiz_id: int, day: date) -> Optional[QuizResponse]:
    stmt = (
        select(QuizResponse)
        .where(
            QuizResponse.user_id == user_id,
            QuizResponse.quiz_id == quiz_id,
            QuizResponse.response_date == day,
        )
        .options(selectinload(QuizResponse.answers))
    )
    return session.exec(stmt).first()


def get_response(session: Session, response_id: int) -> Optional[QuizResponse]:
    """A response together with its answers."""
    stmt = (
        select(QuizResponse)
        .where(QuizResponse.id == response_id)
        .options(selectinload(QuizResponse.answers))
    )
    with _storage_guard(session, "read a response"):
        return session.exec(stmt).first()


def _history(session: Session, user_id: int, limit: Optional[int]) -> List[QuizResponse]:
    stmt = (
        select(QuizResponse)
        .where(QuizResponse.user_id == user_id)
        .order_by(QuizResponse.response_date.desc(), QuizResponse.id.desc())
        .limit(_clamp_limit(limit))
        .options(selectinload(QuizResponse.answers))
    )
    with _storage_guard(session, "read response history"):
        return list(session.exec(stmt).all())


def get_my_history(session: Session, caller: CallerIdentity, limit: Optional[int] = None) -> List[QuizResponse]:
    """The caller's own responses, most recent first."""
    user_id = require_authenticated(caller)
    return _history(session, user_id, limit)


def get_patient_history(
    session: Session,
    caller: CallerIdentity,
    patient_id: int,
    limit: Optional[int] = None,
) -> List[QuizResponse]:
    """A patient's responses for a clinician, most recent first."""
    require_clinician(caller)
    return _history(session, patient_id, limit)


def get_today_response(
    session: Session,
    caller: CallerIdentity,
    quiz_id: int,
    *,
    today: Optional[date] = None,
) -> Optional[QuizResponse]:
    user_id = require_patient(caller, "view their responses")
    day = today or settings.today()
    with _storage_guard(session, "read today's response"):
        return find_response_for_day(session, user_id, quiz_id, day)


# ---------------------------------------------------------------------------
# Submit
# ---------------------------------------------------------------------------
def submit_daily_response(
    session: Session,
    caller: CallerIdentity,
    quiz_id: int,
    answers: Iterable[RawAnswer],
    *,
    general_observations: Optional[str] = None,
    today: Optional[date] = None,
) -> QuizResponse:
    """
    Score and record today's check-in for the calling patient.

    Order matters: role check, then the same-day lookup (nothing is computed
    for a duplicate), then validation against the quiz's current questions,
    then scoring/resolution on the exact weighted sum, then a single write.
    """
    user_id = require_patient(caller)
    day = today or settings.today()

    with _storage_guard(session, "check for an existing response"):
        existing = find_response_for_day(session, user_id, quiz_id, day)
        quiz = load_quiz(session, quiz_id) if existing is None else None
    if existing is not None:
        logger.info("[submit] duplicate rejected user=%s quiz=%s date=%s (existing response %s)",
                    user_id, quiz_id, day, existing.id)
        raise DuplicateSubmission(existing)
    if quiz is None:
        raise QuizNotFound(quiz_id)

    typed = validate_answer_set(quiz, answers)
    score = compute_score(quiz, typed)
    recommendation = resolve(score, quiz.rules, quiz_id=quiz.id)

    def build() -> QuizResponse:
        r = QuizResponse(
            user_id=user_id,
            quiz_id=quiz.id,
            response_date=day,
            total_score=score,
            is_good_day_for_exercise=recommendation.is_good_day,
            recommended_exercise_type=recommendation.exercise_type,
            exercise_description=recommendation.description,
            general_observations=general_observations,
        )
        r.answers = [QuizResponseAnswer(question_id=a.question.id, answer_value=a.raw) for a in typed]
        return r

    response = build()
    session.add(response)
    try:
        session.flush()
        response_id, created_at = response.id, response.created_at
        session.commit()
    except IntegrityError as e:
        session.rollback()
        with _storage_guard(session, "check for an existing response"):
            winner = find_response_for_day(session, user_id, quiz_id, day)
        if winner is None:
            logger.exception("[submit] integrity error without a same-day response user=%s quiz=%s",
                             user_id, quiz_id)
            raise StorageFault("could not record the response") from e
        logger.info("[submit] concurrent duplicate rejected user=%s quiz=%s date=%s", user_id, quiz_id, day)
        raise DuplicateSubmission(winner) from e
    except SQLAlchemyError as e:
        session.rollback()
        logger.exception("[submit] storage failure user=%s quiz=%s", user_id, quiz_id)
        raise StorageFault("could not record the response") from e

    # committed: a failed read-back still returns the recorded values
    try:
        stored = get_response(session, response_id)
    except StorageFault:
        stored = None
    if stored is None:
        logger.warning("[submit] response %s recorded but could not be read back; returning submitted values",
                       response_id)
        stored = build()
        stored.id, stored.created_at = response_id, created_at

    logger.info("[submit] recorded response %s user=%s quiz=%s date=%s score=%s good_day=%s type=%r",
                stored.id, user_id, quiz.id, day, stored.total_score,
                stored.is_good_day_for_exercise, stored.recommended_exercise_type)
    return stored
