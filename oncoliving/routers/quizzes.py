# oncoliving/routers/quizzes.py
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from sqlmodel import Session

from oncoliving.core.db import get_session
from oncoliving.core.errors import QuizNotFound
from oncoliving.core.quiz_snapshot import load_active_quiz, load_quiz
from oncoliving.models.schemas import QuizView

router = APIRouter(prefix="/quizzes", tags=["quizzes"])


@router.get("/active", response_model=Optional[QuizView])
def get_active_quiz_with_questions(session: Session = Depends(get_session)):
    """The quiz patients answer today (baseline quiz is created on first use)."""
    quiz = load_active_quiz(session)
    return QuizView.from_snapshot(quiz) if quiz else None


@router.get("/{quiz_id}", response_model=QuizView)
def get_quiz(quiz_id: int, session: Session = Depends(get_session)):
    quiz = load_quiz(session, quiz_id)
    if quiz is None:
        raise QuizNotFound(quiz_id)
    return QuizView.from_snapshot(quiz)
