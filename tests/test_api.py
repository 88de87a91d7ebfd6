"""
HTTP surface: routing, api-key gate, identity headers and error mapping.

Run with:
    pytest tests/test_api.py -v
"""

from conftest import caller_headers

PREFIX = "/api/oncoliving"

PATIENT = caller_headers(1, "PATIENT")
ONCOLOGIST = caller_headers(99, "ONCOLOGIST")


def _baseline_answers(quiz):
    out = []
    for q in quiz["questions"]:
        if q["questionType"] == "YES_NO":
            out.append({"questionId": q["id"], "answerValue": "NO"})
        elif q["questionType"] == "SCALE_0_10":
            out.append({"questionId": q["id"], "answerValue": "5"})
        else:
            out.append({"questionId": q["id"], "answerValue": q["options"][0]["scoreValue"]})
    return out


def _active(client):
    r = client.get(f"{PREFIX}/quizzes/active")
    assert r.status_code == 200
    return r.json()


# =============================================================================
# GATE
# =============================================================================

def test_health_is_open(client):
    r = client.get(f"{PREFIX}/health", headers={"x-api-key": ""})
    assert r.status_code == 200
    assert r.json()["ok"] is True
    assert r.json()["db"] is True


def test_missing_api_key_rejected(client):
    r = client.get(f"{PREFIX}/quizzes/active", headers={"x-api-key": "wrong"})
    assert r.status_code == 401


# =============================================================================
# QUIZZES
# =============================================================================

def test_active_quiz_bootstraps_baseline(client):
    quiz = _active(client)
    assert quiz["isActive"] is True
    assert len(quiz["questions"]) == 10
    assert [r["minScore"] for r in quiz["scoringRules"]] == [0, 20, 40, 60]

    sleep = next(q for q in quiz["questions"] if q["questionType"] == "MULTIPLE_CHOICE")
    assert [o["scoreValue"] for o in sleep["options"]] == ["2", "5", "8", "10"]

    assert _active(client)["id"] == quiz["id"]


def test_quiz_by_id(client, simple_quiz):
    r = client.get(f"{PREFIX}/quizzes/{simple_quiz['quiz_id']}")
    assert r.status_code == 200
    assert [q["id"] for q in r.json()["questions"]] == [simple_quiz["scale_id"], simple_quiz["yes_no_id"]]


def test_unknown_quiz_is_404(client):
    r = client.get(f"{PREFIX}/quizzes/4242")
    assert r.status_code == 404
    assert r.json()["error"] == "quiz_not_found"


# =============================================================================
# SUBMISSIONS
# =============================================================================

def test_submit_then_duplicate(client):
    quiz = _active(client)
    payload = {"quizId": quiz["id"], "answers": _baseline_answers(quiz), "generalObservations": "ok"}

    r = client.post(f"{PREFIX}/responses/daily", json=payload, headers=PATIENT)
    assert r.status_code == 201, r.text
    body = r.json()
    # 5*1.5 + 5*2.0 + 2*1.2 + 2 + 2 = 23.9
    assert body["totalScore"] == 23.9
    assert body["recommendedExerciseType"] == "Active Rest"
    assert body["isGoodDayForExercise"] is True
    assert body["generalObservations"] == "ok"
    assert len(body["answers"]) == 10

    dup = client.post(f"{PREFIX}/responses/daily", json=payload, headers=PATIENT)
    assert dup.status_code == 409
    assert dup.json()["error"] == "duplicate_submission"
    assert dup.json()["existing"]["id"] == body["id"]

    today = client.get(f"{PREFIX}/responses/today", params={"quizId": quiz["id"]}, headers=PATIENT)
    assert today.status_code == 200
    assert today.json()["id"] == body["id"]


def test_invalid_answers_are_422_with_issues(client, simple_quiz):
    payload = {"quizId": simple_quiz["quiz_id"], "answers": [
        {"questionId": simple_quiz["scale_id"], "answerValue": "11"},
    ]}
    r = client.post(f"{PREFIX}/responses/daily", json=payload, headers=PATIENT)
    assert r.status_code == 422
    body = r.json()
    assert body["error"] == "validation_error"
    assert sorted(i["code"] for i in body["issues"]) == ["invalid_value", "missing"]

    assert client.get(f"{PREFIX}/responses/me", headers=PATIENT).json() == []


def test_oncologist_submit_is_403(client, simple_quiz):
    payload = {"quizId": simple_quiz["quiz_id"], "answers": []}
    r = client.post(f"{PREFIX}/responses/daily", json=payload, headers=ONCOLOGIST)
    assert r.status_code == 403
    assert r.json()["detail"] == "Only patients can submit quiz responses"


def test_submit_without_identity_is_401(client, simple_quiz):
    payload = {"quizId": simple_quiz["quiz_id"], "answers": []}
    r = client.post(f"{PREFIX}/responses/daily", json=payload)
    assert r.status_code == 401
    assert r.json()["error"] == "unauthenticated"


def test_malformed_identity_is_anonymous(client, simple_quiz):
    payload = {"quizId": simple_quiz["quiz_id"], "answers": []}
    r = client.post(f"{PREFIX}/responses/daily", json=payload, headers=caller_headers("abc", "PATIENT"))
    assert r.status_code == 401


# =============================================================================
# HISTORY
# =============================================================================

def test_histories(client, simple_quiz):
    payload = {"quizId": simple_quiz["quiz_id"], "answers": [
        {"questionId": simple_quiz["scale_id"], "answerValue": "7"},
        {"questionId": simple_quiz["yes_no_id"], "answerValue": "NO"},
    ]}
    assert client.post(f"{PREFIX}/responses/daily", json=payload, headers=PATIENT).status_code == 201

    mine = client.get(f"{PREFIX}/responses/me", headers=PATIENT).json()
    assert [r["totalScore"] for r in mine] == [14.0]

    seen = client.get(f"{PREFIX}/responses/patients/1", headers=ONCOLOGIST)
    assert seen.status_code == 200
    assert seen.json()[0]["recommendedExerciseType"] == "Rest"

    assert client.get(f"{PREFIX}/responses/patients/1", headers=PATIENT).status_code == 403


def test_history_limit_bounds(client):
    assert client.get(f"{PREFIX}/responses/me", params={"limit": 0}, headers=PATIENT).status_code == 422


# =============================================================================
# EXERCISES
# =============================================================================

def test_exercise_catalog(client):
    r = client.get(f"{PREFIX}/exercises")
    assert r.status_code == 200
    assert len(r.json()) == 5

    light = client.get(f"{PREFIX}/exercises", params={"intensity": "LIGHT"}).json()
    assert {e["intensityLevel"] for e in light} == {"LIGHT"}
    assert len(light) == 2


def test_no_route_listing_endpoint(client):
    assert client.get(f"{PREFIX}/_routes").status_code == 404
