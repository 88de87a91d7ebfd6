from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from sqlalchemy import Column, Index, String, UniqueConstraint, text
from sqlmodel import Field, Relationship, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class QuestionType(str, Enum):
    YES_NO = "YES_NO"
    SCALE_0_10 = "SCALE_0_10"
    MULTIPLE_CHOICE = "MULTIPLE_CHOICE"


class IntensityLevel(str, Enum):
    LIGHT = "LIGHT"
    MODERATE = "MODERATE"
    STRONG = "STRONG"


class Quiz(SQLModel, table=True):
    __tablename__ = "quizzes"
    # at most one active quiz; partial index on the true rows only
    __table_args__ = (
        Index(
            "uq_quizzes_single_active",
            "is_active",
            unique=True,
            sqlite_where=text("is_active = 1"),
            postgresql_where=text("is_active"),
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    description: Optional[str] = None
    is_active: bool = Field(default=False)
    created_by: Optional[int] = None
    # bumped on every question/option/rule change; part of the snapshot cache key
    config_version: int = Field(default=1)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    questions: List["QuizQuestion"] = Relationship(
        back_populates="quiz",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "QuizQuestion.order"},
    )
    scoring_rules: List["QuizScoringRule"] = Relationship(
        back_populates="quiz",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "QuizScoringRule.id"},
    )


class QuizQuestion(SQLModel, table=True):
    __tablename__ = "quiz_questions"

    id: Optional[int] = Field(default=None, primary_key=True)
    quiz_id: int = Field(foreign_key="quizzes.id", index=True)
    text: str
    question_type: QuestionType
    weight: Decimal = Field(default=Decimal("1.00"), max_digits=5, decimal_places=2)
    order: int = 0
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    quiz: Optional[Quiz] = Relationship(back_populates="questions")
    options: List["QuizQuestionOption"] = Relationship(
        back_populates="question",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "QuizQuestionOption.order"},
    )


class QuizQuestionOption(SQLModel, table=True):
    __tablename__ = "quiz_question_options"

    id: Optional[int] = Field(default=None, primary_key=True)
    question_id: int = Field(foreign_key="quiz_questions.id", index=True)
    text: str
    # literal token echoed back by clients, e.g. "8" or "2.5"
    score_value: str = Field(sa_column=Column(String(32), nullable=False))
    order: int = 0
    created_at: datetime = Field(default_factory=_utcnow)

    question: Optional[QuizQuestion] = Relationship(back_populates="options")


class QuizScoringRule(SQLModel, table=True):
    __tablename__ = "quiz_scoring_rules"

    id: Optional[int] = Field(default=None, primary_key=True)
    quiz_id: int = Field(foreign_key="quizzes.id", index=True)
    min_score: Decimal = Field(max_digits=8, decimal_places=2)
    max_score: Decimal = Field(max_digits=8, decimal_places=2)
    is_good_day: bool
    recommended_exercise_type: str = Field(max_length=100)
    exercise_description: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    quiz: Optional[Quiz] = Relationship(back_populates="scoring_rules")


class QuizResponse(SQLModel, table=True):
    __tablename__ = "quiz_responses"
    __table_args__ = (
        UniqueConstraint("user_id", "quiz_id", "response_date", name="uq_quiz_responses_user_quiz_day"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(index=True)
    quiz_id: int = Field(foreign_key="quizzes.id", index=True)
    response_date: date = Field(index=True)
    # exact weighted sum: 2-place weights times 2-place values
    total_score: Decimal = Field(max_digits=12, decimal_places=4)
    is_good_day_for_exercise: bool
    recommended_exercise_type: str = Field(max_length=100)
    exercise_description: Optional[str] = None
    general_observations: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)

    answers: List["QuizResponseAnswer"] = Relationship(
        back_populates="response",
        sa_relationship_kwargs={"cascade": "all, delete-orphan", "order_by": "QuizResponseAnswer.id"},
    )


class QuizResponseAnswer(SQLModel, table=True):
    __tablename__ = "quiz_response_answers"

    id: Optional[int] = Field(default=None, primary_key=True)
    response_id: int = Field(foreign_key="quiz_responses.id", index=True)
    # plain id: questions may be removed later, answers keep their history
    question_id: int
    answer_value: str = Field(max_length=255)
    created_at: datetime = Field(default_factory=_utcnow)

    response: Optional[QuizResponse] = Relationship(back_populates="answers")


class ExerciseTutorial(SQLModel, table=True):
    __tablename__ = "exercise_tutorials"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    description: Optional[str] = None
    intensity_level: IntensityLevel = Field(index=True)
    safety_guidelines: Optional[str] = None
    video_link: Optional[str] = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
