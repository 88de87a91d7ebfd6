# oncoliving/core/exercises.py
from __future__ import annotations

import logging
from typing import List, Optional, Union

from sqlalchemy import func
from sqlmodel import Session, select

from oncoliving.core.baseline import BASELINE_EXERCISES
from oncoliving.models.db_models import ExerciseTutorial, IntensityLevel

logger = logging.getLogger(__name__)


def ensure_baseline_exercises(session: Session) -> int:
    """Seed the starter catalog when the table is empty. Returns rows inserted."""
    count = session.exec(select(func.count()).select_from(ExerciseTutorial)).one()
    if count:
        return 0
    for ex in BASELINE_EXERCISES:
        session.add(ExerciseTutorial(
            name=ex["name"],
            description=ex["description"],
            intensity_level=IntensityLevel(ex["intensity_level"]),
            safety_guidelines=ex["safety_guidelines"],
        ))
    session.commit()
    logger.info("[exercises] seeded %d baseline tutorials", len(BASELINE_EXERCISES))
    return len(BASELINE_EXERCISES)


def list_exercises(
    session: Session,
    intensity: Optional[Union[IntensityLevel, str]] = None,
) -> List[ExerciseTutorial]:
    ensure_baseline_exercises(session)
    stmt = select(ExerciseTutorial).order_by(ExerciseTutorial.id)
    if intensity is not None:
        stmt = stmt.where(ExerciseTutorial.intensity_level == IntensityLevel(intensity))
    return list(session.exec(stmt).all())
