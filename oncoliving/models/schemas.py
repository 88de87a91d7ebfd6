from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from oncoliving.core.quiz_snapshot import QuizSnapshot
from oncoliving.models.db_models import ExerciseTutorial, QuizResponse


class BaseModelConfig(BaseModel):
    model_config = ConfigDict(protected_namespaces=())


# ============================== Quiz views ==============================
class OptionView(BaseModelConfig):
    id: int
    text: str
    scoreValue: str
    order: int


class QuestionView(BaseModelConfig):
    id: int
    text: str
    questionType: str
    weight: float
    order: int
    options: List[OptionView] = []


class ScoringRuleView(BaseModelConfig):
    minScore: float
    maxScore: float
    isGoodDay: bool
    recommendedExerciseType: str
    exerciseDescription: Optional[str] = None


class QuizView(BaseModelConfig):
    id: int
    name: str
    description: Optional[str] = None
    isActive: bool
    questions: List[QuestionView]
    scoringRules: List[ScoringRuleView]

    @classmethod
    def from_snapshot(cls, quiz: QuizSnapshot) -> "QuizView":
        return cls(
            id=quiz.id,
            name=quiz.name,
            description=quiz.description,
            isActive=quiz.is_active,
            questions=[
                QuestionView(
                    id=q.id,
                    text=q.text,
                    questionType=q.question_type.value,
                    weight=float(q.weight),
                    order=q.order,
                    options=[
                        OptionView(id=o.id, text=o.text, scoreValue=o.score_token, order=o.order)
                        for o in q.options
                    ],
                )
                for q in quiz.questions
            ],
            scoringRules=[
                ScoringRuleView(
                    minScore=float(r.min_score),
                    maxScore=float(r.max_score),
                    isGoodDay=r.is_good_day,
                    recommendedExerciseType=r.recommended_exercise_type,
                    exerciseDescription=r.exercise_description,
                )
                for r in sorted(quiz.rules, key=lambda r: r.min_score)
            ],
        )


# ============================== Responses ==============================
class AnswerIn(BaseModelConfig):
    questionId: int
    answerValue: str = Field(max_length=255)


class SubmitDailyIn(BaseModelConfig):
    quizId: int
    answers: List[AnswerIn]
    generalObservations: Optional[str] = Field(default=None, max_length=2000)


class AnswerOut(BaseModelConfig):
    questionId: int
    answerValue: str


class QuizResponseOut(BaseModelConfig):
    id: int
    userId: int
    quizId: int
    responseDate: date
    totalScore: float
    isGoodDayForExercise: bool
    recommendedExerciseType: str
    exerciseDescription: Optional[str] = None
    generalObservations: Optional[str] = None
    createdAt: datetime
    answers: List[AnswerOut] = []

    @classmethod
    def from_row(cls, r: QuizResponse) -> "QuizResponseOut":
        return cls(
            id=r.id,
            userId=r.user_id,
            quizId=r.quiz_id,
            responseDate=r.response_date,
            totalScore=float(r.total_score),
            isGoodDayForExercise=r.is_good_day_for_exercise,
            recommendedExerciseType=r.recommended_exercise_type,
            exerciseDescription=r.exercise_description,
            generalObservations=r.general_observations,
            createdAt=r.created_at,
            answers=[AnswerOut(questionId=a.question_id, answerValue=a.answer_value) for a in r.answers],
        )


# ============================== Exercises ==============================
class ExerciseOut(BaseModelConfig):
    id: int
    name: str
    description: Optional[str] = None
    intensityLevel: str
    safetyGuidelines: Optional[str] = None
    videoLink: Optional[str] = None

    @classmethod
    def from_row(cls, e: ExerciseTutorial) -> "ExerciseOut":
        return cls(
            id=e.id,
            name=e.name,
            description=e.description,
            intensityLevel=e.intensity_level.value,
            safetyGuidelines=e.safety_guidelines,
            videoLink=e.video_link,
        )
