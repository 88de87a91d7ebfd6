# oncoliving/core/errors.py
"""
Error taxonomy of the check-in core.

Validation and authorization errors are raised before any side effect.
Storage faults abort the submission after the session has been rolled back.
A missing scoring table is not an error: the resolver logs it and applies
the fallback recommendation.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional


class WellnessError(Exception):
    """Base class for every expected failure of the core."""

    code = "wellness_error"
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"ok": False, "error": self.code, "detail": self.message}


@dataclass(frozen=True)
class AnswerIssue:
    question_id: Optional[int]
    code: str  # missing | unexpected | duplicate | invalid_value | no_options | empty_quiz
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {"questionId": self.question_id, "code": self.code, "message": self.message}


class AnswerValidationError(WellnessError):
    """Malformed or incomplete answer set. Nothing is processed."""

    code = "validation_error"
    status_code = 422

    def __init__(self, issues: List[AnswerIssue]):
        self.issues = list(issues)
        summary = "; ".join(i.message for i in self.issues) or "invalid answers"
        super().__init__(summary)

    @property
    def missing_question_ids(self) -> List[int]:
        return [i.question_id for i in self.issues if i.code == "missing"]

    @property
    def unexpected_question_ids(self) -> List[int]:
        return [i.question_id for i in self.issues if i.code == "unexpected"]

    def to_dict(self) -> dict[str, Any]:
        out = super().to_dict()
        out["issues"] = [i.to_dict() for i in self.issues]
        return out


class DuplicateSubmission(WellnessError):
    """The patient already has a response for this quiz today."""

    code = "duplicate_submission"
    status_code = 409

    def __init__(self, existing: Any = None):
        super().__init__("You have already completed the quiz today. Please come back tomorrow!")
        self.existing = existing


class AuthorizationError(WellnessError):
    code = "forbidden"
    status_code = 403

    def __init__(self, message: str, *, authenticated: bool = True):
        super().__init__(message)
        if not authenticated:
            self.code = "unauthenticated"
            self.status_code = 401


class QuizNotFound(WellnessError):
    code = "quiz_not_found"
    status_code = 404

    def __init__(self, quiz_id: int):
        super().__init__(f"Quiz {quiz_id} not found")
        self.quiz_id = quiz_id


class StorageFault(WellnessError):
    """The store failed; the request is aborted with nothing written."""

    code = "storage_unavailable"
    status_code = 503
