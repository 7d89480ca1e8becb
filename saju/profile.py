"""
Profile construction and candidate matching.

This is the caller side of the engine: it validates a birth record,
applies the unknown-birth-time policy, computes the four pillars once,
and compares a profile against a pool of candidates.

Usage from Python:
    from saju.profile import BirthRecord, compute_profile
    me = compute_profile("alex", BirthRecord(year=1990, month=3, day=15, hour=10))
"""

import calendar
import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from saju.compatibility import compatibility_score, conflict_score, similarity_score
from saju.elements import element_distribution
from saju.pillars import FourPillars, four_pillars
from saju.ranking import RankedItem, rank_items

logger = logging.getLogger("saju.profile")

# Birth time used when the user does not know it
UNKNOWN_TIME_HOUR = 12
UNKNOWN_TIME_MINUTE = 0

MIN_BIRTH_YEAR = 1900
MAX_BIRTH_YEAR = 2100


@dataclass(frozen=True)
class BirthRecord:
    year: int
    month: int
    day: int
    hour: int = UNKNOWN_TIME_HOUR
    minute: int = UNKNOWN_TIME_MINUTE
    unknown_time: bool = False
    is_lunar: bool = False
    birth_place: str = ""

    def normalized_time(self) -> tuple:
        """(hour, minute) with the unknown-time policy applied."""
        if self.unknown_time:
            return UNKNOWN_TIME_HOUR, UNKNOWN_TIME_MINUTE
        return self.hour, self.minute

    def validate(self) -> None:
        """Raise ValueError for any out-of-range field."""
        if not MIN_BIRTH_YEAR <= self.year <= MAX_BIRTH_YEAR:
            raise ValueError(f"birth year must be {MIN_BIRTH_YEAR}-{MAX_BIRTH_YEAR}, got {self.year}")
        if not 1 <= self.month <= 12:
            raise ValueError(f"birth month must be 1-12, got {self.month}")
        last_day = calendar.monthrange(self.year, self.month)[1]
        if not 1 <= self.day <= last_day:
            raise ValueError(f"birth day must be 1-{last_day} for {self.year}-{self.month:02d}, got {self.day}")
        if self.unknown_time:
            return
        if not 0 <= self.hour <= 23:
            raise ValueError(f"birth hour must be 0-23, got {self.hour}")
        if not 0 <= self.minute <= 59:
            raise ValueError(f"birth minute must be 0-59, got {self.minute}")


@dataclass(frozen=True)
class Profile:
    id: Any
    pillars: FourPillars

    @property
    def distribution(self) -> dict:
        return element_distribution(self.pillars)


@dataclass(frozen=True)
class MatchSummary:
    similar: Optional[RankedItem]
    best_match: Optional[RankedItem]
    worst_match: Optional[RankedItem]

    def to_dict(self):
        return {
            "similar": self.similar.to_dict() if self.similar else None,
            "best_match": self.best_match.to_dict() if self.best_match else None,
            "worst_match": self.worst_match.to_dict() if self.worst_match else None,
        }


def compute_profile(profile_id: Any, record: BirthRecord) -> Profile:
    """
    Validate a birth record and compute its four pillars.

    Lunar dates are not converted: the date is used as if it were solar.
    """
    record.validate()
    if record.is_lunar:
        logger.warning("Lunar birth date for %s is treated as a solar date", profile_id)
    hour, _minute = record.normalized_time()
    pillars = four_pillars(record.year, record.month, record.day, hour)
    return Profile(id=profile_id, pillars=pillars)


def _others(profile: Profile, candidates: Iterable[Profile]) -> list[Profile]:
    return [c for c in candidates if c.id != profile.id]


def similar_profiles(profile: Profile, candidates: Iterable[Profile],
                     limit: Optional[int] = None) -> list[RankedItem]:
    """Candidates ranked by similarity to ``profile``, most similar first."""
    if limit is not None and limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")
    ranked = rank_items(
        (c.id, similarity_score(profile.pillars, c.pillars))
        for c in _others(profile, candidates)
    )
    return ranked if limit is None else ranked[:limit]


def find_matches(profile: Profile, candidates: Iterable[Profile]) -> MatchSummary:
    """
    Most similar, best match and worst match among the candidates.

    Best match has the highest compatibility score; worst match has the
    lowest conflict score. Ties go to the smallest candidate id.
    """
    others = _others(profile, candidates)
    if not others:
        return MatchSummary(similar=None, best_match=None, worst_match=None)

    similar = rank_items((c.id, similarity_score(profile.pillars, c.pillars)) for c in others)
    best = rank_items((c.id, compatibility_score(profile.pillars, c.pillars)) for c in others)
    worst = rank_items(
        ((c.id, conflict_score(profile.pillars, c.pillars)) for c in others),
        descending=False,
    )
    logger.debug("matches for %s over %d candidates", profile.id, len(others))
    return MatchSummary(similar=similar[0], best_match=best[0], worst_match=worst[0])
