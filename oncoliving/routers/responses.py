# oncoliving/routers/responses.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from oncoliving.core.answers import RawAnswer
from oncoliving.core.db import get_session
from oncoliving.core.security import CallerIdentity, get_caller
from oncoliving.core.settings import settings
from oncoliving.core.submissions import (
    get_my_history,
    get_patient_history,
    get_today_response,
    submit_daily_response,
)
from oncoliving.models.schemas import QuizResponseOut, SubmitDailyIn

router = APIRouter(prefix="/responses", tags=["responses"])


@router.post("/daily", response_model=QuizResponseOut, status_code=201)
def submit_daily(
    payload: SubmitDailyIn,
    caller: CallerIdentity = Depends(get_caller),
    session: Session = Depends(get_session),
):
    response = submit_daily_response(
        session,
        caller,
        payload.quizId,
        [RawAnswer(question_id=a.questionId, answer_value=a.answerValue) for a in payload.answers],
        general_observations=payload.generalObservations,
    )
    return QuizResponseOut.from_row(response)


@router.get("/me", response_model=List[QuizResponseOut])
def my_history(
    limit: int = Query(settings.HISTORY_DEFAULT_LIMIT, ge=1, le=settings.HISTORY_MAX_LIMIT),
    caller: CallerIdentity = Depends(get_caller),
    session: Session = Depends(get_session),
):
    return [QuizResponseOut.from_row(r) for r in get_my_history(session, caller, limit)]


@router.get("/patients/{patient_id}", response_model=List[QuizResponseOut])
def patient_history(
    patient_id: int,
    limit: int = Query(settings.HISTORY_DEFAULT_LIMIT, ge=1, le=settings.HISTORY_MAX_LIMIT),
    caller: CallerIdentity = Depends(get_caller),
    session: Session = Depends(get_session),
):
    return [QuizResponseOut.from_row(r) for r in get_patient_history(session, caller, patient_id, limit)]


@router.get("/today", response_model=Optional[QuizResponseOut])
def today_response(
    quiz_id: int = Query(..., alias="quizId"),
    caller: CallerIdentity = Depends(get_caller),
    session: Session = Depends(get_session),
):
    response = get_today_response(session, caller, quiz_id)
    return QuizResponseOut.from_row(response) if response else None
