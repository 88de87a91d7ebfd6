# oncoliving/routers/exercises.py
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from oncoliving.core.db import get_session
from oncoliving.core.exercises import list_exercises
from oncoliving.models.db_models import IntensityLevel
from oncoliving.models.schemas import ExerciseOut

router = APIRouter(prefix="/exercises", tags=["exercises"])


@router.get("", response_model=List[ExerciseOut])
def exercises(
    intensity: Optional[IntensityLevel] = Query(None, description="LIGHT | MODERATE | STRONG"),
    session: Session = Depends(get_session),
):
    return [ExerciseOut.from_row(e) for e in list_exercises(session, intensity)]
