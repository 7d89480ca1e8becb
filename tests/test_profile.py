import logging

import pytest

from saju.pillars import four_pillars
from saju.profile import BirthRecord, Profile, compute_profile, find_matches, similar_profiles


def test_unknown_time_maps_to_noon():
    record = BirthRecord(year=1990, month=3, day=15, hour=3, minute=45, unknown_time=True)
    assert record.normalized_time() == (12, 0)
    profile = compute_profile(1, record)
    assert profile.pillars == four_pillars(1990, 3, 15, 12)


def test_known_time_is_kept():
    record = BirthRecord(year=1990, month=3, day=15, hour=3, minute=45)
    assert compute_profile(1, record).pillars.hour == four_pillars(1990, 3, 15, 3).hour


@pytest.mark.parametrize("fields", [
    dict(year=1899, month=1, day=1),
    dict(year=2000, month=13, day=1),
    dict(year=2001, month=2, day=29),
    dict(year=2000, month=4, day=31),
    dict(year=2000, month=1, day=1, hour=24),
    dict(year=2000, month=1, day=1, minute=60),
])
def test_validation_rejects_out_of_range(fields):
    with pytest.raises(ValueError):
        compute_profile(1, BirthRecord(**fields))


def test_unknown_time_skips_time_validation():
    record = BirthRecord(year=2000, month=2, day=29, hour=99, unknown_time=True)
    record.validate()


def test_lunar_flag_is_logged_and_ignored(caplog):
    solar = compute_profile(1, BirthRecord(year=1990, month=3, day=15))
    with caplog.at_level(logging.WARNING, logger="saju.profile"):
        lunar = compute_profile(1, BirthRecord(year=1990, month=3, day=15, is_lunar=True))
    assert lunar.pillars == solar.pillars
    assert "solar" in caplog.text


@pytest.fixture
def pool(all_jia_zi, all_geng_wu, make_pillars):
    me = Profile("me", all_jia_zi)
    perfect = Profile("p", make_pillars("甲子", "甲子", "己丑", "甲子"))
    twin = Profile("s", all_jia_zi)
    opposite = Profile("c", all_geng_wu)
    return me, [me, perfect, twin, opposite]


def test_similar_profiles_excludes_self(pool):
    me, candidates = pool
    ranked = similar_profiles(me, candidates)
    assert [(r.id, r.score) for r in ranked] == [("s", 100.0), ("p", 50.0), ("c", 0.0)]
    assert [r.id for r in similar_profiles(me, candidates, limit=2)] == ["s", "p"]
    assert similar_profiles(me, candidates, limit=0) == []


def test_similar_profiles_rejects_negative_limit(pool):
    me, candidates = pool
    with pytest.raises(ValueError):
        similar_profiles(me, candidates, limit=-1)


def test_find_matches(pool):
    me, candidates = pool
    summary = find_matches(me, candidates)
    assert summary.similar.id == "s"
    assert summary.best_match.id == "p"
    assert summary.best_match.score == 100.0
    assert summary.worst_match.id == "c"
    assert summary.worst_match.score == 20.0


def test_find_matches_breaks_ties_by_id(all_jia_zi):
    me = Profile("me", all_jia_zi)
    summary = find_matches(me, [Profile("z", all_jia_zi), Profile("b", all_jia_zi)])
    assert summary.similar.id == summary.best_match.id == summary.worst_match.id == "b"


def test_find_matches_without_candidates(all_jia_zi):
    me = Profile("me", all_jia_zi)
    summary = find_matches(me, [me])
    assert summary.to_dict() == {"similar": None, "best_match": None, "worst_match": None}
