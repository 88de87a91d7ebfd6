# oncoliving/core/scoring.py
"""
Weighted wellness score.

    score = sum(raw_points(answer) * question.weight)

raw points: YES_NO -> 10 for YES, 0 for NO; SCALE_0_10 -> the value;
MULTIPLE_CHOICE -> the chosen option's scoreValue. No normalization: the
range depends on how many questions a quiz has and their weights.

The sum is exact. Weights and option values carry at most two decimal
places (enforced when a quiz is configured), so every term and the total fit
in four; total_score is stored at that scale and is never rounded.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from oncoliving.core.answers import ChoiceAnswer, ScaleAnswer, TypedAnswer, YesNoAnswer
from oncoliving.core.quiz_snapshot import QuizSnapshot

YES_POINTS = Decimal(10)
NO_POINTS = Decimal(0)


def raw_points(answer: TypedAnswer) -> Decimal:
    if isinstance(answer, YesNoAnswer):
        return YES_POINTS if answer.value else NO_POINTS
    if isinstance(answer, ScaleAnswer):
        return Decimal(answer.value)
    if isinstance(answer, ChoiceAnswer):
        return answer.option.score_value
    raise TypeError(f"unsupported answer {answer!r}")


def compute_score(quiz: QuizSnapshot, answers: Iterable[TypedAnswer]) -> Decimal:
    """Weighted sum of the answers. Answers to questions not in the quiz are ignored."""
    total = Decimal(0)
    for answer in answers:
        question = quiz.question(answer.question.id)
        if question is None:
            continue
        total += raw_points(answer) * question.weight
    return total
