# oncoliving/core/quiz_config.py
"""
Configuration side of quizzes: the only place that writes quizzes,
questions, options and scoring rules.

Invariants kept here:
- at most one quiz is active; activating one deactivates every other quiz
  in the same transaction
- every change to a quiz's questions/options/rules bumps its config_version,
  which invalidates cached snapshots
- weights, option scoreValues and rule bounds carry at most two decimal
  places, so a weighted sum is always stored exactly
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from oncoliving.core.baseline import BASELINE_QUESTIONS, BASELINE_QUIZ, BASELINE_SCORING
from oncoliving.core.errors import QuizNotFound
from oncoliving.core.quiz_snapshot import INPUT_PLACES, has_places
from oncoliving.models.db_models import (
    QuestionType,
    Quiz,
    QuizQuestion,
    QuizQuestionOption,
    QuizScoringRule,
)

logger = logging.getLogger(__name__)

Number = Union[int, float, str, Decimal]


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _decimal(value: Number, field: str) -> Decimal:
    try:
        d = Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"{field} must be a decimal number, got {value!r}")
    if not d.is_finite():
        raise ValueError(f"{field} must be finite, got {value!r}")
    if not has_places(d):
        raise ValueError(f"{field} allows at most {INPUT_PLACES} decimal places, got {value!r}")
    return d


def _touch(quiz: Quiz) -> None:
    quiz.config_version = (quiz.config_version or 0) + 1
    quiz.updated_at = _now()


def _get_quiz(session: Session, quiz_id: int) -> Quiz:
    quiz = session.get(Quiz, quiz_id)
    if quiz is None:
        raise QuizNotFound(quiz_id)
    return quiz


def _get_question(session: Session, question_id: int) -> QuizQuestion:
    question = session.get(QuizQuestion, question_id)
    if question is None:
        raise LookupError(f"Question {question_id} not found")
    return question


def _deactivate_all(session: Session, except_id: Optional[int] = None) -> None:
    stmt = (
        update(Quiz)
        .where(Quiz.is_active == True)  # noqa: E712
        .values(is_active=False, config_version=Quiz.config_version + 1, updated_at=_now())
    )
    if except_id is not None:
        stmt = stmt.where(Quiz.id != except_id)
    session.execute(stmt.execution_options(synchronize_session="fetch"))
    session.flush()


# ---------------------------------------------------------------------------
# Quizzes
# ---------------------------------------------------------------------------
def create_quiz(
    session: Session,
    *,
    name: str,
    description: Optional[str] = None,
    is_active: bool = False,
    created_by: Optional[int] = None,
) -> Quiz:
    if not (name or "").strip():
        raise ValueError("quiz name is required")
    if is_active:
        _deactivate_all(session)
    quiz = Quiz(name=name.strip(), description=description, is_active=is_active, created_by=created_by)
    session.add(quiz)
    session.commit()
    session.refresh(quiz)
    return quiz


def activate_quiz(session: Session, quiz_id: int) -> Quiz:
    quiz = _get_quiz(session, quiz_id)
    if quiz.is_active:
        return quiz
    _deactivate_all(session, except_id=quiz_id)
    quiz.is_active = True
    _touch(quiz)
    session.add(quiz)
    session.commit()
    session.refresh(quiz)
    logger.info("[config] quiz %s is now the active quiz", quiz_id)
    return quiz


# ---------------------------------------------------------------------------
# Questions / options / rules
# ---------------------------------------------------------------------------
def add_question(
    session: Session,
    quiz_id: int,
    *,
    text: str,
    question_type: Union[QuestionType, str],
    order: int,
    weight: Number = 1,
) -> QuizQuestion:
    quiz = _get_quiz(session, quiz_id)
    w = _decimal(weight, "weight")
    if w < 0:
        raise ValueError("weight must be non-negative")
    question = QuizQuestion(
        quiz_id=quiz.id,
        text=text,
        question_type=QuestionType(question_type),
        weight=w,
        order=order,
    )
    session.add(question)
    _touch(quiz)
    session.add(quiz)
    session.commit()
    session.refresh(question)
    return question


def update_question(
    session: Session,
    question_id: int,
    *,
    text: Optional[str] = None,
    weight: Optional[Number] = None,
    order: Optional[int] = None,
) -> QuizQuestion:
    question = _get_question(session, question_id)
    if text is not None:
        question.text = text
    if weight is not None:
        w = _decimal(weight, "weight")
        if w < 0:
            raise ValueError("weight must be non-negative")
        question.weight = w
    if order is not None:
        question.order = order
    question.updated_at = _now()
    quiz = _get_quiz(session, question.quiz_id)
    _touch(quiz)
    session.add(question)
    session.add(quiz)
    session.commit()
    session.refresh(question)
    return question


def remove_question(session: Session, question_id: int) -> bool:
    question = session.get(QuizQuestion, question_id)
    if question is None:
        return False
    quiz = _get_quiz(session, question.quiz_id)
    session.delete(question)
    _touch(quiz)
    session.add(quiz)
    session.commit()
    return True


def add_option(
    session: Session,
    question_id: int,
    *,
    text: str,
    score_value: Number,
    order: int,
) -> QuizQuestionOption:
    question = _get_question(session, question_id)
    if question.question_type != QuestionType.MULTIPLE_CHOICE:
        raise ValueError(f"question {question_id} is {question.question_type.value}; options need MULTIPLE_CHOICE")
    token = str(score_value).strip()
    _decimal(token, "scoreValue")
    option = QuizQuestionOption(question_id=question.id, text=text, score_value=token, order=order)
    session.add(option)
    quiz = _get_quiz(session, question.quiz_id)
    _touch(quiz)
    session.add(quiz)
    session.commit()
    session.refresh(option)
    return option


def add_scoring_rule(
    session: Session,
    quiz_id: int,
    *,
    min_score: Number,
    max_score: Number,
    is_good_day: bool,
    recommended_exercise_type: str,
    exercise_description: Optional[str] = None,
) -> QuizScoringRule:
    quiz = _get_quiz(session, quiz_id)
    lo = _decimal(min_score, "minScore")
    hi = _decimal(max_score, "maxScore")
    if lo > hi:
        raise ValueError(f"minScore {lo} is greater than maxScore {hi}")
    rule = QuizScoringRule(
        quiz_id=quiz.id,
        min_score=lo,
        max_score=hi,
        is_good_day=is_good_day,
        recommended_exercise_type=recommended_exercise_type,
        exercise_description=exercise_description,
    )
    session.add(rule)
    _touch(quiz)
    session.add(quiz)
    session.commit()
    session.refresh(rule)
    return rule


# ---------------------------------------------------------------------------
# Baseline bootstrap
# ---------------------------------------------------------------------------
def _active_quiz(session: Session) -> Optional[Quiz]:
    return session.exec(select(Quiz).where(Quiz.is_active == True)).first()  # noqa: E712


def ensure_baseline_quiz(session: Session) -> Quiz:
    """
    Materialize the baseline quiz as the active quiz if no quiz is active.
    Idempotent: keyed on "is there an active quiz", not on content.
    """
    existing = _active_quiz(session)
    if existing is not None:
        return existing

    quiz = Quiz(name=BASELINE_QUIZ["name"], description=BASELINE_QUIZ["description"], is_active=True)
    for q in BASELINE_QUESTIONS:
        question = QuizQuestion(
            text=q["text"],
            question_type=QuestionType(q["question_type"]),
            weight=Decimal(q["weight"]),
            order=q["order"],
        )
        question.options = [
            QuizQuestionOption(text=o["text"], score_value=o["score_value"], order=o["order"])
            for o in q.get("options", [])
        ]
        quiz.questions.append(question)
    quiz.scoring_rules = [
        QuizScoringRule(
            min_score=Decimal(r["min_score"]),
            max_score=Decimal(r["max_score"]),
            is_good_day=r["is_good_day"],
            recommended_exercise_type=r["recommended_exercise_type"],
            exercise_description=r["exercise_description"],
        )
        for r in BASELINE_SCORING
    ]

    session.add(quiz)
    try:
        session.commit()
    except IntegrityError:
        # another request bootstrapped first; the single-active index kept us out
        session.rollback()
        winner = _active_quiz(session)
        if winner is None:
            raise
        return winner

    session.refresh(quiz)
    logger.info("[snapshot] no active quiz found; baseline quiz %s created", quiz.id)
    return quiz
