import pytest

from saju.pillars import FourPillars, pillar_from_label


def _make_pillars(year, month, day, hour):
    return FourPillars(*(pillar_from_label(label) for label in (year, month, day, hour)))


@pytest.fixture
def all_jia_zi():
    """Wood x4, Water x4."""
    return _make_pillars("甲子", "甲子", "甲子", "甲子")


@pytest.fixture
def all_geng_wu():
    """Metal x4, Fire x4."""
    return _make_pillars("庚午", "庚午", "庚午", "庚午")


@pytest.fixture
def make_pillars():
    """Build FourPillars from four labels, year first."""
    return _make_pillars
