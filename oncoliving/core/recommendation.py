# oncoliving/core/recommendation.py
"""
Score -> recommendation, through the quiz's scoring table.

Rules are scanned in ascending minScore order and the first rule whose
inclusive [minScore, maxScore] range contains the score wins, so a score on
a shared boundary goes to the lower rule. When nothing matches (no rules,
a gap, or above the top range) the fallback policy applies:
good day iff score >= 50, "Light Walk" on a good day, "Rest Day" otherwise.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from oncoliving.core.quiz_snapshot import RuleSnapshot

logger = logging.getLogger(__name__)

FALLBACK_GOOD_DAY_THRESHOLD = Decimal(50)
FALLBACK_GOOD_DAY_EXERCISE = "Light Walk"
FALLBACK_REST_EXERCISE = "Rest Day"


@dataclass(frozen=True)
class Recommendation:
    is_good_day: bool
    exercise_type: str
    description: Optional[str] = None
    rule_id: Optional[int] = None
    fallback: bool = False


def fallback_recommendation(score: Decimal) -> Recommendation:
    good = Decimal(score) >= FALLBACK_GOOD_DAY_THRESHOLD
    return Recommendation(
        is_good_day=good,
        exercise_type=FALLBACK_GOOD_DAY_EXERCISE if good else FALLBACK_REST_EXERCISE,
        description=None,
        fallback=True,
    )


def resolve(score: Decimal, rules: Iterable[RuleSnapshot], *, quiz_id: Optional[int] = None) -> Recommendation:
    score = Decimal(score)
    # sorted() is stable: rules sharing a minScore keep their stored order
    ordered: Sequence[RuleSnapshot] = sorted(rules, key=lambda r: Decimal(r.min_score))

    if not ordered:
        logger.warning("[resolve] quiz %s has no scoring rules configured; using fallback policy", quiz_id)
        return fallback_recommendation(score)

    for rule in ordered:
        if Decimal(rule.min_score) <= score <= Decimal(rule.max_score):
            return Recommendation(
                is_good_day=bool(rule.is_good_day),
                exercise_type=rule.recommended_exercise_type,
                description=rule.exercise_description,
                rule_id=rule.id,
            )

    logger.warning("[resolve] score %s of quiz %s is not covered by any scoring rule; using fallback policy",
                   score, quiz_id)
    return fallback_recommendation(score)
