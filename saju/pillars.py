"""
Pillar Calculator.

Converts a birth date and hour into the four (stem, branch) pillars.
Inputs are trusted: out-of-range values give a well-defined pillar with
no meaning rather than an error. Validation belongs to the caller.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from saju.astro_calendar import days_since_epoch, today
from saju.tables import (
    HEAVENLY_STEMS, EARTHLY_BRANCHES, STEM_BY_CHINESE, BRANCH_BY_CHINESE,
    HeavenlyStem, EarthlyBranch,
)

logger = logging.getLogger("saju.pillars")

POSITIONS = ("year", "month", "day", "hour")


@dataclass(frozen=True)
class Pillar:
    stem: HeavenlyStem
    branch: EarthlyBranch

    @property
    def label(self) -> str:
        return f"{self.stem.chinese}{self.branch.chinese}"

    def __str__(self):
        return f"{self.stem.pinyin} {self.branch.pinyin} ({self.stem.polarity.value} {self.stem.element.value} {self.branch.animal})"

    def to_dict(self):
        return {
            "label": self.label,
            "stem": {
                "chinese": self.stem.chinese,
                "pinyin": self.stem.pinyin,
                "index": self.stem.index,
                "element": self.stem.element.value,
                "polarity": self.stem.polarity.value,
            },
            "branch": {
                "chinese": self.branch.chinese,
                "pinyin": self.branch.pinyin,
                "index": self.branch.index,
                "animal": self.branch.animal,
                "element": self.branch.element.value,
                "polarity": self.branch.polarity.value,
            },
            "description": str(self),
        }


@dataclass(frozen=True)
class FourPillars:
    year: Pillar
    month: Pillar
    day: Pillar
    hour: Pillar

    def as_tuple(self) -> tuple:
        return (self.year, self.month, self.day, self.hour)

    def symbols(self) -> list:
        """The eight stem/branch symbols, year stem first."""
        out = []
        for p in self.as_tuple():
            out.extend((p.stem, p.branch))
        return out

    def to_dict(self):
        return {pos: p.to_dict() for pos, p in zip(POSITIONS, self.as_tuple())}


def pillar_of(stem_index: int, branch_index: int) -> Pillar:
    return Pillar(stem=HEAVENLY_STEMS[stem_index % 10],
                  branch=EARTHLY_BRANCHES[branch_index % 12])


def pillar_from_label(label: str) -> Pillar:
    """Parse a two-character label such as "甲子"."""
    if len(label) != 2 or label[0] not in STEM_BY_CHINESE or label[1] not in BRANCH_BY_CHINESE:
        raise ValueError(f"Not a stem-branch label: {label!r}")
    return Pillar(stem=STEM_BY_CHINESE[label[0]], branch=BRANCH_BY_CHINESE[label[1]])


# ============================================================
# PILLAR COMPUTATION
# ============================================================

def year_pillar(year: int) -> Pillar:
    """
    Compute the Year Pillar.

    Year 4 CE was Jia Zi, the start of the 60-year cycle, so the
    pillar repeats every 60 years.
    """
    idx = (year - 4) % 60
    return pillar_of(idx % 10, idx % 12)


def month_pillar(year: int, month: int) -> Pillar:
    """
    Compute the Month Pillar from the calendar month.

    Month 1 maps to Yin (Tiger, branch 2). The stem follows the year stem:
    (year_stem * 2 + branch) mod 10, which reproduces the Five Tigers
    table (Jia/Ji years start at Bing Yin).
    """
    year_stem_index = year_pillar(year).stem.index
    branch_index = (month + 1) % 12
    stem_index = (year_stem_index * 2 + branch_index) % 10
    return pillar_of(stem_index, branch_index)


def day_pillar(year: int, month: int, day: int) -> Pillar:
    """
    Compute the Day Pillar.

    Counts whole days from 1900-01-01; (days + 9) mod 60 is the
    sexagenary index, so the pillar repeats every 60 days.
    """
    idx = (days_since_epoch(year, month, day) + 9) % 60
    return pillar_of(idx % 10, idx % 12)


def hour_pillar(day_stem: HeavenlyStem, hour: int) -> Pillar:
    """
    Compute the Hour Pillar.

    Chinese hours are 2-hour blocks starting on odd hours:
    23:00-00:59 = Zi (0), 01:00-02:59 = Chou (1), ... 21:00-22:59 = Hai (11).
    The stem follows the Five Rats rule: (day_stem * 2 + branch) mod 10.
    """
    branch_index = ((hour + 1) // 2) % 12
    stem_index = (day_stem.index * 2 + branch_index) % 10
    return pillar_of(stem_index, branch_index)


def four_pillars(year: int, month: int, day: int, hour: int) -> FourPillars:
    """
    Compose the four pillars of a birth moment.

    ``hour`` must already be normalized by the caller (an unknown birth
    time is mapped to 12 before this call).
    """
    dp = day_pillar(year, month, day)
    result = FourPillars(
        year=year_pillar(year),
        month=month_pillar(year, month),
        day=dp,
        hour=hour_pillar(dp.stem, hour),
    )
    logger.debug("pillars for %04d-%02d-%02d %02dh: %s", year, month, day, hour,
                 " ".join(p.label for p in result.as_tuple()))
    return result


def today_pillar(on: Optional[date] = None) -> Pillar:
    """Day pillar of ``on`` (defaults to the current date)."""
    on = on or today()
    return day_pillar(on.year, on.month, on.day)
