"""
Compatibility, similarity and conflict scoring between two profiles.

All three scorers are symmetric in their arguments and clamp to [0, 100].
Design principle: scores come only from the relation tables; the text
returned alongside them is picked from fixed sentences.
"""

import logging
from dataclasses import dataclass, field

from saju.elements import (
    count_complementary_elements, distribution_to_dict,
    element_distribution, has_element_bias,
)
from saju.pillars import FourPillars, Pillar
from saju.tables import (
    Element, is_branch_clash, is_branch_punishment, is_branch_resentment,
    is_branch_six_pair, is_branch_three_pair, is_generating, is_stem_clash,
    is_stem_pair,
)

logger = logging.getLogger("saju.compatibility")

# Weighted sum of per-pillar compatibility. The hour weight only applies
# when the caller asks for the extended variant.
COMPATIBILITY_WEIGHTS = {"day": 0.4, "month": 0.3, "year": 0.2}
HOUR_WEIGHT = 0.1

SIMILARITY_WEIGHTS = {"day": 0.5, "month": 0.3, "year": 0.2}

CATEGORIES = ("communication", "emotion", "wealth", "health")

COMPATIBILITY_ANALYSIS = {
    "excellent": "The two of you are an excellent match. You understand and complete each other.",
    "good": "The two of you are a good match. You can grow together by working as a team.",
    "normal": "An ordinary match. Respect your differences and the relationship will grow.",
    "poor": "Your temperaments differ a lot. Patience and open conversation matter most.",
}


def clamp(score: float, low: float = 0.0, high: float = 100.0) -> float:
    return min(high, max(low, score))


@dataclass(frozen=True)
class CompatibilityResult:
    score: float
    distribution: dict  # element distribution of the first profile
    categories: dict
    compatibility_type: str
    analysis: str
    notes: dict = field(default_factory=dict)

    def to_dict(self):
        return {
            "score": round(self.score, 1),
            "compatibility_type": self.compatibility_type,
            "analysis": self.analysis,
            "element_distribution": distribution_to_dict(self.distribution),
            "categories": {k: round(v, 1) for k, v in self.categories.items()},
            "notes": dict(self.notes),
        }


# ============================================================
# COMPATIBILITY
# ============================================================

def pillar_compatibility(first: Pillar, second: Pillar) -> float:
    """
    Score two pillars against each other.

    Base 50; +20 stem pair; +20 branch six-pair or else +20 three-pair;
    +15 if the stem elements generate one another; -10 stem clash;
    -15 branch clash; -15 branch punishment; -10 branch resentment.
    """
    score = 50.0
    s1, b1, s2, b2 = first.stem, first.branch, second.stem, second.branch

    if is_stem_pair(s1, s2):
        score += 20
    if is_branch_six_pair(b1, b2):
        score += 20
    elif is_branch_three_pair(b1, b2):
        score += 20
    if is_generating(s1.element, s2.element):
        score += 15

    if is_stem_clash(s1, s2):
        score -= 10
    if is_branch_clash(b1, b2):
        score -= 15
    if is_branch_punishment(b1, b2):
        score -= 15
    if is_branch_resentment(b1, b2):
        score -= 10

    return clamp(score)


def is_perfect_day_match(first: FourPillars, second: FourPillars) -> bool:
    """Day stems combine and day branches form a six-pair."""
    return (is_stem_pair(first.day.stem, second.day.stem)
            and is_branch_six_pair(first.day.branch, second.day.branch))


def compatibility_score(first: FourPillars, second: FourPillars,
                        include_hour: bool = False) -> float:
    """
    Overall compatibility.

    A perfect day-pillar match scores 100 outright. Otherwise the day,
    month and year pillar scores are weighted 0.4/0.3/0.2; with
    ``include_hour`` the hour pillar adds a further 0.1.
    """
    if is_perfect_day_match(first, second):
        return 100.0

    total = sum(
        weight * pillar_compatibility(getattr(first, pos), getattr(second, pos))
        for pos, weight in COMPATIBILITY_WEIGHTS.items()
    )
    if include_hour:
        total += HOUR_WEIGHT * pillar_compatibility(first.hour, second.hour)
    return clamp(total)


def category_scores(first: FourPillars, second: FourPillars) -> dict:
    d1, d2 = element_distribution(first), element_distribution(second)

    communication = 50.0
    if is_stem_pair(first.day.stem, second.day.stem):
        communication += 30
    elif is_stem_clash(first.day.stem, second.day.stem):
        communication -= 10
    elif first.day.stem.element == second.day.stem.element:
        communication += 10

    emotion = 50.0
    if is_branch_six_pair(first.month.branch, second.month.branch):
        emotion += 30
    if count_complementary_elements(d1, d2) + count_complementary_elements(d2, d1) >= 2:
        emotion += 20
    if has_element_bias(d1, d2):
        emotion -= 10

    wealth = 50.0
    wealth += sum(15 for d in (d1, d2) if d[Element.WOOD] > 0)

    health = 50.0
    if is_branch_three_pair(first.day.branch, second.day.branch):
        health += 30
    if is_branch_clash(first.day.branch, second.day.branch):
        health -= 15
    if is_branch_punishment(first.day.branch, second.day.branch):
        health -= 10

    return {
        "communication": clamp(communication),
        "emotion": clamp(emotion),
        "wealth": clamp(wealth),
        "health": clamp(health),
    }


def compatibility_type(score: float) -> str:
    if score >= 80:
        return "excellent"
    if score >= 60:
        return "good"
    if score < 40:
        return "poor"
    return "normal"


def category_notes(first: FourPillars, second: FourPillars) -> dict:
    """One sentence each for communication, emotion, lifestyle and caution."""
    s1, s2 = first.day.stem, second.day.stem
    b1, b2 = first.day.branch, second.day.branch
    d1, d2 = element_distribution(first), element_distribution(second)

    if is_stem_pair(s1, s2):
        communication = "You understand each other without needing words."
    elif is_stem_clash(s1, s2):
        communication = "Your values differ and may spark debate, but you bring each other fresh views."
    elif s1.element == s2.element:
        communication = "Conversation flows as easily as between old friends."
    else:
        communication = "You keep the conversation going by trading different perspectives."

    if count_complementary_elements(d1, d2) + count_complementary_elements(d2, d1) >= 2:
        emotion = "You cover for each other's gaps and feel secure together."
    elif has_element_bias(d1, d2):
        emotion = "Your characters are so alike that you sometimes collide."
    else:
        emotion = "You read and empathize with each other's feelings well."

    if is_branch_six_pair(b1, b2):
        lifestyle = "When you plan something together, you work in perfect step."
    elif is_branch_three_pair(b1, b2):
        lifestyle = "Your goals and values line up, so cooperation comes easily."
    elif is_branch_clash(b1, b2):
        lifestyle = "Your routines and daily rhythms differ and need some tuning."
    else:
        lifestyle = "You respect each other's way of living and get along smoothly."

    if is_branch_resentment(b1, b2):
        caution = "Keep small misunderstandings from growing into emotional fights."
    elif is_branch_clash(b1, b2):
        caution = "Disagreements that are not settled quickly tend to linger."
    else:
        caution = "Nothing in particular to watch for, but courtesy still matters."

    return {
        "communication": communication,
        "emotion": emotion,
        "lifestyle": lifestyle,
        "caution": caution,
    }


def compatibility(first: FourPillars, second: FourPillars,
                  include_hour: bool = False) -> CompatibilityResult:
    """Full compatibility result. The distribution reported is the first profile's."""
    score = compatibility_score(first, second, include_hour=include_hour)
    kind = compatibility_type(score)
    logger.debug("compatibility %s/%s = %.1f (%s)",
                 first.day.label, second.day.label, score, kind)
    return CompatibilityResult(
        score=score,
        distribution=element_distribution(first),
        categories=category_scores(first, second),
        compatibility_type=kind,
        analysis=COMPATIBILITY_ANALYSIS[kind],
        notes=category_notes(first, second),
    )


# ============================================================
# SIMILARITY
# ============================================================

def pillar_similarity(first: Pillar, second: Pillar) -> float:
    """+50 same stem (else +25 same element), likewise for the branch."""
    score = 0.0
    if first.stem == second.stem:
        score += 50
    elif first.stem.element == second.stem.element:
        score += 25
    if first.branch == second.branch:
        score += 50
    elif first.branch.element == second.branch.element:
        score += 25
    return score


def similarity_score(first: FourPillars, second: FourPillars) -> float:
    return clamp(sum(
        weight * pillar_similarity(getattr(first, pos), getattr(second, pos))
        for pos, weight in SIMILARITY_WEIGHTS.items()
    ))


# ============================================================
# CONFLICT
# ============================================================

def conflict_score(first: FourPillars, second: FourPillars) -> float:
    """
    How poorly two profiles fit. Lower means more conflict.

    Base 50; -30 day-branch clash; -25 day-branch resentment;
    -15 when both profiles lean on the same element (count >= 3).
    """
    score = 50.0
    if is_branch_clash(first.day.branch, second.day.branch):
        score -= 30
    if is_branch_resentment(first.day.branch, second.day.branch):
        score -= 25
    if has_element_bias(element_distribution(first), element_distribution(second)):
        score -= 15
    return clamp(score)
