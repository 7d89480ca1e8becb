from datetime import date, timedelta
from itertools import product

import pytest

from saju.compatibility import (
    category_scores, compatibility, compatibility_score, compatibility_type,
    conflict_score, pillar_compatibility, pillar_similarity, similarity_score,
)
from saju.elements import element_distribution
from saju.pillars import four_pillars, pillar_from_label


P = pillar_from_label


def _sample_profiles():
    start = date(1960, 3, 1)
    out = []
    for i in range(12):
        d = start + timedelta(days=i * 1231)
        out.append(four_pillars(d.year, d.month, d.day, (i * 5) % 24))
    return out


@pytest.mark.parametrize("a, b, expected", [
    ("甲子", "甲子", 50),
    ("甲子", "丙子", 65),   # Wood feeds Fire
    ("甲子", "甲丑", 70),   # six-pair
    ("甲子", "甲辰", 70),   # three-pair
    ("甲子", "庚午", 25),   # stem clash, branch clash
    ("戊辰", "戊辰", 35),   # Chen punishes itself
    ("甲寅", "庚申", 10),   # stem clash, branch clash and punishment
    ("甲子", "己丑", 90),   # stem pair and six-pair
])
def test_pillar_compatibility(a, b, expected):
    assert pillar_compatibility(P(a), P(b)) == expected
    assert pillar_compatibility(P(b), P(a)) == expected


def test_weighted_formula_ignores_hour_by_default(all_jia_zi):
    assert compatibility_score(all_jia_zi, all_jia_zi) == pytest.approx(45.0)
    assert compatibility_score(all_jia_zi, all_jia_zi, include_hour=True) == pytest.approx(50.0)


def test_weighted_formula_with_day_clash(all_jia_zi, make_pillars):
    other = make_pillars("甲子", "甲子", "庚午", "甲子")
    assert compatibility_score(all_jia_zi, other) == pytest.approx(35.0)


def test_perfect_day_match_short_circuits(make_pillars):
    me = make_pillars("庚午", "庚午", "甲子", "庚午")
    other = make_pillars("甲子", "甲子", "己丑", "甲子")
    assert compatibility_score(me, other) == 100.0
    assert compatibility(other, me).score == 100.0


def test_category_scores(all_jia_zi):
    assert category_scores(all_jia_zi, all_jia_zi) == {
        "communication": 60.0,
        "emotion": 40.0,
        "wealth": 80.0,
        "health": 50.0,
    }


def test_category_scores_reward_pairs(make_pillars):
    me = make_pillars("庚午", "甲子", "甲申", "庚午")
    other = make_pillars("庚午", "甲丑", "己辰", "庚午")
    scores = category_scores(me, other)
    assert scores["communication"] == 80.0   # day stems pair
    assert scores["emotion"] == 80.0         # month six-pair
    assert scores["health"] == 80.0          # day three-pair


def test_result_carries_first_distribution_and_text(all_jia_zi, all_geng_wu):
    result = compatibility(all_jia_zi, all_geng_wu)
    assert result.distribution == element_distribution(all_jia_zi)
    assert result.compatibility_type == "poor"
    assert set(result.notes) == {"communication", "emotion", "lifestyle", "caution"}
    assert result.to_dict()["element_distribution"]["wood"] == 4


@pytest.mark.parametrize("score, kind", [
    (100, "excellent"), (80, "excellent"), (79.9, "good"), (60, "good"),
    (59, "normal"), (40, "normal"), (39.9, "poor"), (0, "poor"),
])
def test_compatibility_type(score, kind):
    assert compatibility_type(score) == kind


def test_scores_are_symmetric_and_bounded():
    profiles = _sample_profiles()
    for a, b in product(profiles, repeat=2):
        assert compatibility(a, b).score == compatibility(b, a).score
        assert compatibility(a, b).categories == compatibility(b, a).categories
        assert similarity_score(a, b) == similarity_score(b, a)
        assert conflict_score(a, b) == conflict_score(b, a)
        for score in (compatibility_score(a, b), similarity_score(a, b), conflict_score(a, b)):
            assert 0 <= score <= 100
        for score in category_scores(a, b).values():
            assert 0 <= score <= 100


def test_pillar_similarity():
    assert pillar_similarity(P("甲子"), P("甲子")) == 100
    assert pillar_similarity(P("甲子"), P("乙亥")) == 50
    assert pillar_similarity(P("甲子"), P("甲亥")) == 75
    assert pillar_similarity(P("甲子"), P("庚午")) == 0


def test_similarity_weights(all_jia_zi, make_pillars):
    assert similarity_score(all_jia_zi, all_jia_zi) == pytest.approx(100.0)
    other = make_pillars("甲子", "甲子", "庚午", "甲子")
    assert similarity_score(all_jia_zi, other) == pytest.approx(50.0)


def test_conflict_score(all_jia_zi, all_geng_wu, make_pillars):
    assert conflict_score(all_jia_zi, all_jia_zi) == 35.0       # element bias
    assert conflict_score(all_jia_zi, all_geng_wu) == 20.0      # day clash
    resentful = make_pillars("甲子", "甲子", "辛未", "甲子")
    assert conflict_score(all_jia_zi, resentful) == 10.0        # resentment and bias
