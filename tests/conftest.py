import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from oncoliving.core import db
from oncoliving.core.quiz_config import add_option, add_question, add_scoring_rule, create_quiz
from oncoliving.core.quiz_snapshot import clear_snapshot_cache
from oncoliving.core.security import CallerIdentity, Role
from oncoliving.core.settings import settings

API_KEY = "test-key"


# =============================================================================
# DATABASE
# =============================================================================

@pytest.fixture
def engine():
    """Fresh in-memory database, also installed as the app engine."""
    eng = db.make_engine("sqlite://")
    db.init_db(eng)
    previous = db.use_engine(eng)
    clear_snapshot_cache()
    yield eng
    clear_snapshot_cache()
    db.use_engine(previous)
    eng.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as s:
        yield s


# =============================================================================
# CALLERS
# =============================================================================

@pytest.fixture
def patient():
    return CallerIdentity(user_id=1, role=Role.PATIENT)


@pytest.fixture
def other_patient():
    return CallerIdentity(user_id=2, role=Role.PATIENT)


@pytest.fixture
def oncologist():
    return CallerIdentity(user_id=99, role=Role.ONCOLOGIST)


# =============================================================================
# QUIZZES
# =============================================================================

@pytest.fixture
def simple_quiz(session):
    """
    Active quiz with one SCALE_0_10 question (weight 2.0) and one YES_NO
    question (weight 1.0), scoring table [0-20 bad "Rest", 20-40 good "Active Rest"].
    """
    quiz = create_quiz(session, name="Simple check", is_active=True, created_by=99)
    scale = add_question(session, quiz.id, text="Energy?", question_type="SCALE_0_10", weight="2.0", order=1)
    yes_no = add_question(session, quiz.id, text="Nausea?", question_type="YES_NO", weight="1.0", order=2)
    add_scoring_rule(session, quiz.id, min_score=0, max_score=20, is_good_day=False,
                     recommended_exercise_type="Rest", exercise_description="Take it easy")
    add_scoring_rule(session, quiz.id, min_score=20, max_score=40, is_good_day=True,
                     recommended_exercise_type="Active Rest")
    return {"quiz_id": quiz.id, "scale_id": scale.id, "yes_no_id": yes_no.id}


@pytest.fixture
def choice_quiz(session):
    """Inactive quiz with a single MULTIPLE_CHOICE question and no scoring rules."""
    quiz = create_quiz(session, name="Sleep check")
    q = add_question(session, quiz.id, text="Sleep?", question_type="MULTIPLE_CHOICE", weight="1.2", order=1)
    add_option(session, q.id, text="Poor", score_value="2", order=1)
    add_option(session, q.id, text="Good", score_value="8", order=2)
    add_option(session, q.id, text="Half", score_value="2.5", order=3)
    return {"quiz_id": quiz.id, "question_id": q.id}


# =============================================================================
# HTTP
# =============================================================================

@pytest.fixture
def client(engine, monkeypatch):
    monkeypatch.setattr(settings, "API_KEY", API_KEY)
    from oncoliving.main import app

    with TestClient(app, headers={"x-api-key": API_KEY}) as c:
        yield c


def caller_headers(user_id, role):
    return {"x-user-id": str(user_id), "x-user-role": role}
