import json
from datetime import datetime, timezone

import pytest

from saju.astro_calendar import local_today
from saju.run import main, parse_birth


def _run(capsys, *argv):
    main(list(argv))
    return json.loads(capsys.readouterr().out)


def test_pillars_command(capsys):
    out = _run(capsys, "pillars", "--birth-date", "2000-01-01", "--birth-time", "12:00")
    assert out["pillars"]["day"]["label"] == "丁巳"
    assert sum(out["element_distribution"].values()) == 8


def test_pillars_without_time_uses_noon(capsys):
    out = _run(capsys, "pillars", "--birth-date", "2000-01-01")
    assert out["pillars"]["hour"]["label"] == "丙午"


def test_compat_command(capsys):
    out = _run(capsys, "compat",
               "--birth-date", "1990-03-15", "--birth-time", "10:30",
               "--other-date", "1992-08-01", "--other-time", "22:10")
    assert 0 <= out["score"] <= 100
    assert set(out["categories"]) == {"communication", "emotion", "wealth", "health"}
    assert "similarity" in out and "conflict" in out


def test_today_command(capsys):
    out = _run(capsys, "today", "--birth-date", "1990-03-15", "--date", "2000-01-01")
    assert out["date"] == "2000-01-01"
    assert out["today_pillar"]["label"] == "丁巳"


def test_bad_input_is_an_argument_error(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["pillars", "--birth-date", "2000-02-30"])
    assert exc.value.code == 2
    with pytest.raises(SystemExit):
        main(["pillars", "--birth-date", "2000-01-01", "--birth-time", "noon"])


def test_today_needs_both_coordinates(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["today", "--birth-date", "1990-03-15", "--latitude", "37.57"])
    assert exc.value.code == 2
    assert "together" in capsys.readouterr().err


def test_parse_birth():
    record = parse_birth("1990-03-15", "07:05", birth_place="Seoul")
    assert (record.year, record.month, record.day, record.hour, record.minute) == (1990, 3, 15, 7, 5)
    assert not record.unknown_time
    assert parse_birth("1990-03-15").unknown_time


def test_local_today_uses_location_timezone():
    evening_utc = datetime(2026, 1, 1, 20, 0, tzinfo=timezone.utc)
    assert local_today(37.5665, 126.9780, now=evening_utc).isoformat() == "2026-01-02"
    assert local_today(40.7128, -74.0060, now=evening_utc).isoformat() == "2026-01-01"
