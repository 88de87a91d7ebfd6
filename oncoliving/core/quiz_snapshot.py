# oncoliving/core/quiz_snapshot.py
"""
Immutable view of one quiz: ordered questions (with ordered options) and the
scoring table. This is what answer validation, the score calculator and the
recommendation resolver consume; they never touch ORM rows.

Snapshots are cached per (quiz_id, config_version). Every configuration
mutation bumps the version, so a changed question set is never served from
the cache.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from functools import cached_property
from typing import Dict, Optional, Tuple

from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from oncoliving.models.db_models import Quiz, QuizQuestion, QuestionType

logger = logging.getLogger(__name__)

# decimal places allowed in a weight, an option scoreValue or a rule bound;
# two of them multiplied fit the four places of quiz_responses.total_score
INPUT_PLACES = 2


def has_places(value: Decimal, places: int = INPUT_PLACES) -> bool:
    if not value.is_finite():
        return False
    try:
        return value == value.quantize(Decimal(1).scaleb(-places))
    except InvalidOperation:
        return False


@dataclass(frozen=True)
class OptionSnapshot:
    id: int
    text: str
    score_token: str
    score_value: Decimal
    order: int


@dataclass(frozen=True)
class QuestionSnapshot:
    id: int
    text: str
    question_type: QuestionType
    weight: Decimal
    order: int
    options: Tuple[OptionSnapshot, ...] = ()

    def option_for_token(self, token: str) -> Optional[OptionSnapshot]:
        for opt in self.options:
            if opt.score_token == token:
                return opt
        return None


@dataclass(frozen=True)
class RuleSnapshot:
    min_score: Decimal
    max_score: Decimal
    is_good_day: bool
    recommended_exercise_type: str
    exercise_description: Optional[str] = None
    id: Optional[int] = None


@dataclass(frozen=True)
class QuizSnapshot:
    id: int
    name: str
    description: Optional[str]
    is_active: bool
    config_version: int
    questions: Tuple[QuestionSnapshot, ...]
    rules: Tuple[RuleSnapshot, ...]

    @cached_property
    def _by_id(self) -> Dict[int, QuestionSnapshot]:
        return {q.id: q for q in self.questions}

    def question(self, question_id: int) -> Optional[QuestionSnapshot]:
        return self._by_id.get(question_id)

    @property
    def question_ids(self) -> Tuple[int, ...]:
        return tuple(q.id for q in self.questions)


# ---------------------------------------------------------------------------
# Building
# ---------------------------------------------------------------------------
def _option_snapshots(question: QuizQuestion) -> Tuple[OptionSnapshot, ...]:
    out = []
    for opt in sorted(question.options, key=lambda o: (o.order, o.id or 0)):
        try:
            value = Decimal(opt.score_value)
        except InvalidOperation:
            logger.warning("[snapshot] option %s of question %s has non-numeric scoreValue %r; skipped",
                           opt.id, question.id, opt.score_value)
            continue
        if not has_places(value):
            logger.warning("[snapshot] option %s of question %s scoreValue %r is not a finite decimal with at most %d places; skipped",
                           opt.id, question.id, opt.score_value, INPUT_PLACES)
            continue
        out.append(OptionSnapshot(id=opt.id, text=opt.text, score_token=opt.score_value,
                                  score_value=value, order=opt.order))
    return tuple(out)


def build_snapshot(quiz: Quiz) -> QuizSnapshot:
    questions = tuple(
        QuestionSnapshot(
            id=q.id,
            text=q.text,
            question_type=QuestionType(q.question_type),
            weight=Decimal(q.weight),
            order=q.order,
            options=_option_snapshots(q) if q.question_type == QuestionType.MULTIPLE_CHOICE else (),
        )
        for q in sorted(quiz.questions, key=lambda q: (q.order, q.id or 0))
    )
    rules = tuple(
        RuleSnapshot(
            id=r.id,
            min_score=Decimal(r.min_score),
            max_score=Decimal(r.max_score),
            is_good_day=bool(r.is_good_day),
            recommended_exercise_type=r.recommended_exercise_type,
            exercise_description=r.exercise_description,
        )
        for r in quiz.scoring_rules
    )
    return QuizSnapshot(
        id=quiz.id,
        name=quiz.name,
        description=quiz.description,
        is_active=bool(quiz.is_active),
        config_version=quiz.config_version,
        questions=questions,
        rules=rules,
    )


# ---------------------------------------------------------------------------
# Cache
# ---------------------------------------------------------------------------
_cache: Dict[Tuple[int, int], QuizSnapshot] = {}
_cache_lock = threading.Lock()


def clear_snapshot_cache() -> None:
    with _cache_lock:
        _cache.clear()


def _cached(quiz_id: int, version: int) -> Optional[QuizSnapshot]:
    with _cache_lock:
        return _cache.get((quiz_id, version))


def _store(snapshot: QuizSnapshot) -> None:
    with _cache_lock:
        for key in [k for k in _cache if k[0] == snapshot.id]:
            del _cache[key]
        _cache[(snapshot.id, snapshot.config_version)] = snapshot


def _fetch_aggregate(session: Session, quiz_id: int) -> Optional[Quiz]:
    stmt = (
        select(Quiz)
        .where(Quiz.id == quiz_id)
        .options(
            selectinload(Quiz.questions).selectinload(QuizQuestion.options),
            selectinload(Quiz.scoring_rules),
        )
        .execution_options(populate_existing=True)
    )
    return session.exec(stmt).first()


def snapshot_for(session: Session, quiz: Quiz) -> QuizSnapshot:
    hit = _cached(quiz.id, quiz.config_version)
    if hit is not None:
        return hit

    aggregate = _fetch_aggregate(session, quiz.id)
    snapshot = build_snapshot(aggregate)
    _store(snapshot)
    return snapshot


# ---------------------------------------------------------------------------
# Public reads
# ---------------------------------------------------------------------------
def load_quiz(session: Session, quiz_id: int) -> Optional[QuizSnapshot]:
    """Snapshot of any quiz by id, or None if it does not exist."""
    quiz = session.get(Quiz, quiz_id)
    if quiz is None:
        return None
    return snapshot_for(session, quiz)


def load_active_quiz(session: Session, *, bootstrap: bool = True) -> Optional[QuizSnapshot]:
    """
    Snapshot of the single active quiz.
    When no quiz is active the baseline quiz is materialized first (once).
    """
    quiz = session.exec(select(Quiz).where(Quiz.is_active == True)).first()  # noqa: E712
    if quiz is None:
        if not bootstrap:
            return None
        # local import: quiz_config builds on this module
        from oncoliving.core.quiz_config import ensure_baseline_quiz

        quiz = ensure_baseline_quiz(session)
    return snapshot_for(session, quiz)
