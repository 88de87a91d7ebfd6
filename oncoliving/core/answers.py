# oncoliving/core/answers.py
"""
Question/answer model.

Raw answers arrive as (questionId, answerValue) with a string value whose
meaning depends on the question type. They are turned into typed answers
here, once, so scoring never re-parses strings:

    YES_NO           "YES" / "NO"                   -> YesNoAnswer(bool)
    SCALE_0_10       "0".."10" (ASCII digits only)  -> ScaleAnswer(int)
    MULTIPLE_CHOICE  exact scoreValue of an option  -> ChoiceAnswer(option)

Validation fails closed: an unknown value is an error, never a zero.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Union

from oncoliving.core.errors import AnswerIssue, AnswerValidationError
from oncoliving.core.quiz_snapshot import OptionSnapshot, QuestionSnapshot, QuizSnapshot
from oncoliving.models.db_models import QuestionType

YES = "YES"
NO = "NO"
SCALE_MIN = 0
SCALE_MAX = 10

_DIGITS = re.compile(r"[0-9]{1,2}")


@dataclass(frozen=True)
class RawAnswer:
    question_id: int
    answer_value: str


@dataclass(frozen=True)
class YesNoAnswer:
    question: QuestionSnapshot
    value: bool
    raw: str


@dataclass(frozen=True)
class ScaleAnswer:
    question: QuestionSnapshot
    value: int
    raw: str


@dataclass(frozen=True)
class ChoiceAnswer:
    question: QuestionSnapshot
    option: OptionSnapshot
    raw: str


TypedAnswer = Union[YesNoAnswer, ScaleAnswer, ChoiceAnswer]


def parse_answer(question: QuestionSnapshot, answer_value: str) -> TypedAnswer:
    """Interpret one raw value for one question or raise AnswerValidationError."""
    issue = None
    value = answer_value if isinstance(answer_value, str) else None

    if question.question_type == QuestionType.YES_NO:
        if value in (YES, NO):
            return YesNoAnswer(question=question, value=(value == YES), raw=value)
        issue = f"question {question.id} expects YES or NO, got {answer_value!r}"

    elif question.question_type == QuestionType.SCALE_0_10:
        if value is not None and _DIGITS.fullmatch(value):
            n = int(value)
            if SCALE_MIN <= n <= SCALE_MAX:
                return ScaleAnswer(question=question, value=n, raw=value)
        issue = f"question {question.id} expects an integer from {SCALE_MIN} to {SCALE_MAX}, got {answer_value!r}"

    elif question.question_type == QuestionType.MULTIPLE_CHOICE:
        if not question.options:
            raise AnswerValidationError([
                AnswerIssue(question.id, "no_options", f"question {question.id} has no options configured"),
            ])
        option = question.option_for_token(value) if value is not None else None
        if option is not None:
            return ChoiceAnswer(question=question, option=option, raw=value)
        allowed = ", ".join(o.score_token for o in question.options)
        issue = f"question {question.id} expects one of [{allowed}], got {answer_value!r}"

    else:  # pragma: no cover - QuestionType is closed
        issue = f"question {question.id} has unsupported type {question.question_type!r}"

    raise AnswerValidationError([AnswerIssue(question.id, "invalid_value", issue)])


def validate_answer_set(quiz: QuizSnapshot, answers: Iterable[RawAnswer]) -> List[TypedAnswer]:
    """
    Validate a full submission against the quiz's current question set.

    The answer set must cover exactly the quiz's questions: no missing ids,
    no foreign ids, no question answered twice, and every value valid for its
    question type. All problems are collected and reported together; the
    result is returned in question order.
    """
    answers = list(answers)
    issues: List[AnswerIssue] = []

    if not quiz.questions:
        raise AnswerValidationError([AnswerIssue(None, "empty_quiz", f"quiz {quiz.id} has no questions")])

    seen: dict[int, RawAnswer] = {}
    for a in answers:
        if quiz.question(a.question_id) is None:
            issues.append(AnswerIssue(a.question_id, "unexpected",
                                      f"question {a.question_id} is not part of quiz {quiz.id}"))
            continue
        if a.question_id in seen:
            issues.append(AnswerIssue(a.question_id, "duplicate",
                                      f"question {a.question_id} answered more than once"))
            continue
        seen[a.question_id] = a

    for qid in quiz.question_ids:
        if qid not in seen:
            issues.append(AnswerIssue(qid, "missing", f"question {qid} was not answered"))

    typed: List[TypedAnswer] = []
    for question in quiz.questions:
        raw = seen.get(question.id)
        if raw is None:
            continue
        try:
            typed.append(parse_answer(question, raw.answer_value))
        except AnswerValidationError as e:
            issues.extend(e.issues)

    if issues:
        raise AnswerValidationError(issues)
    return typed

