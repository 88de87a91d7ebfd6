"""
Scoring table resolution and the fallback policy.
"""

from decimal import Decimal

import pytest

from oncoliving.core.quiz_snapshot import RuleSnapshot
from oncoliving.core.recommendation import (
    FALLBACK_GOOD_DAY_EXERCISE,
    FALLBACK_REST_EXERCISE,
    fallback_recommendation,
    resolve,
)


def _rule(lo, hi, good, kind, rid=None):
    return RuleSnapshot(min_score=Decimal(lo), max_score=Decimal(hi), is_good_day=good,
                        recommended_exercise_type=kind, id=rid)


@pytest.fixture
def table():
    # stored out of order on purpose
    return [
        _rule(20, 40, True, "Active Rest", rid=2),
        _rule(0, 20, False, "Rest", rid=1),
    ]


# =============================================================================
# RULE MATCHING
# =============================================================================

def test_shared_boundary_goes_to_lower_rule(table):
    rec = resolve(Decimal("20"), table)
    assert rec.exercise_type == "Rest"
    assert rec.is_good_day is False
    assert rec.rule_id == 1
    assert rec.fallback is False


@pytest.mark.parametrize("score,expected", [
    ("0", "Rest"),
    ("14", "Rest"),
    ("20.01", "Active Rest"),
    ("40", "Active Rest"),
])
def test_inclusive_ranges(table, score, expected):
    assert resolve(Decimal(score), table).exercise_type == expected


def test_rule_description_is_carried():
    rules = [RuleSnapshot(min_score=Decimal(0), max_score=Decimal(10), is_good_day=False,
                          recommended_exercise_type="Rest", exercise_description="Take it easy")]
    assert resolve(Decimal(5), rules).description == "Take it easy"


def test_equal_min_scores_keep_stored_order():
    rules = [_rule(0, 30, True, "First"), _rule(0, 50, False, "Second")]
    assert resolve(Decimal(10), rules).exercise_type == "First"


# =============================================================================
# FALLBACK
# =============================================================================

def test_no_rules_good_day(caplog):
    rec = resolve(Decimal("55"), [], quiz_id=7)
    assert rec.is_good_day is True
    assert rec.exercise_type == FALLBACK_GOOD_DAY_EXERCISE == "Light Walk"
    assert rec.fallback is True
    assert "no scoring rules" in caplog.text


def test_no_rules_bad_day():
    rec = resolve(Decimal("49.99"), [])
    assert rec.is_good_day is False
    assert rec.exercise_type == FALLBACK_REST_EXERCISE == "Rest Day"


def test_threshold_is_inclusive():
    assert fallback_recommendation(Decimal(50)).is_good_day is True


def test_score_in_gap_falls_back():
    rules = [_rule(0, 10, False, "Rest"), _rule(60, 100, True, "Moderate")]
    rec = resolve(Decimal(30), rules)
    assert rec.fallback is True
    assert rec.exercise_type == "Rest Day"


def test_score_above_top_rule_falls_back(table, caplog):
    rec = resolve(Decimal("140"), table, quiz_id=1)
    assert rec.fallback is True
    assert rec.is_good_day is True
    assert rec.exercise_type == "Light Walk"
    assert "not covered" in caplog.text
