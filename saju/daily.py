"""
Daily fortune prediction.

Combines a natal FourPillars with the day pillar of a calendar date into:
- a 0-100 prediction score
- four keyword sentences (wealth, love, health, total)
- a lucky item (element, color, two numbers)
- auspicious/inauspicious day markers

Keyword text can be enriched by an optional callable (for instance a text
generation client). The engine never depends on it: a missing, empty or
failing enrichment falls back to the fixed sentences below.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Optional

from saju.astro_calendar import today as current_date
from saju.elements import element_distribution, weakest_element
from saju.pillars import FourPillars, Pillar, today_pillar
from saju.tables import (
    BRANCH_BY_CHINESE, Element, FAVORABLE_ELEMENT,
    PRODUCTION_CYCLE, is_branch_clash, is_branch_punishment,
    is_branch_six_pair, is_empty_trunk, is_flying_horse, is_noble_influence,
)

logger = logging.getLogger("saju.daily")

KEYWORD_CATEGORIES = ("wealth", "love", "health", "total")

Enricher = Callable[[FourPillars, Pillar, str], Optional[str]]


# ============================================================
# KEYWORD TABLES
# ============================================================

# Wealth: keyed on the element of today's stem
WEALTH_KEYWORDS = {
    Element.WOOD: "Money grows slowly today. Small, steady savings pay off.",
    Element.FIRE: "Spending urges run hot today. Sleep on any big purchase.",
    Element.EARTH: "A stable day for finances. Planned spending works in your favor.",
    Element.METAL: "A good day to settle accounts and collect what is owed.",
    Element.WATER: "Money moves quickly today. Keep an eye on small outflows.",
}
WEALTH_FALLBACK = "Your finances are steady today. Sensible spending will help."

# Love: keyed on today's branch (peach-blossom and harmony branches only)
LOVE_KEYWORDS = {
    "子": "Feelings run deep today. A quiet conversation brings you closer.",
    "卯": "Romance is in bloom. A new meeting may leave an impression.",
    "午": "Your charm shines today. Share how you feel openly.",
    "酉": "A refined day for love. Small gestures say more than big words.",
    "寅": "Take the lead today. A bold invitation is well received.",
    "亥": "Warmth and kindness draw people toward you today.",
}
LOVE_FALLBACK = "An ordinary day for relationships. Let encounters happen naturally."

# Health: keyed on the natal day stem
HEALTH_KEYWORDS = {
    "甲": "Stretch and keep moving. Your liver and eyes need rest.",
    "乙": "Gentle exercise suits you today. Mind your neck and shoulders.",
    "丙": "Energy runs high. Keep hydrated and avoid overheating.",
    "丁": "Your heart needs calm. Give yourself a quiet evening.",
    "戊": "Eat regular meals today. Your stomach prefers simple food.",
    "己": "Digestion is sensitive. Slow down at the table.",
    "庚": "Breathe deeply and get fresh air. Your lungs will thank you.",
    "辛": "Take care of your skin and avoid dry air.",
    "壬": "Rest well. Your body recovers best with enough sleep.",
    "癸": "Stay warm and drink warm water. Avoid getting chilled.",
}
HEALTH_FALLBACK = "Your health is in good shape today. Do not overdo it and rest enough."

# Total: keyed on the natal day pillar label
TOTAL_KEYWORDS = {
    "甲子": "A good day for new beginnings. Take on challenges with confidence.",
    "乙丑": "Patience is needed today. Move step by step without rushing.",
    "丙寅": "An active day ahead. Put your energy to good use.",
    "丁卯": "Creative ideas may come to you today.",
    "戊辰": "A stable day. Good for wrapping up existing work.",
    "己巳": "A day to prepare for change. Watch for new opportunities.",
    "庚午": "Communication matters today. Working with others helps.",
    "辛未": "Attention to detail is needed. Watch out for small mistakes.",
    "壬申": "Flexibility is needed today. Adapt to the situation.",
    "癸酉": "A day for deep thinking. Make important decisions carefully.",
}
TOTAL_FALLBACK = "An ordinary day. Spend it with a positive attitude."


# ============================================================
# LUCKY ITEM TABLES
# ============================================================

LUCKY_COLORS = {
    Element.WOOD: ("Green", "#4CAF50"),
    Element.FIRE: ("Red", "#F44336"),
    Element.EARTH: ("Yellow", "#FFC107"),
    Element.METAL: ("White", "#FFFFFF"),
    Element.WATER: ("Blue", "#2196F3"),
}

LUCKY_NUMBERS = {
    Element.WOOD: (3, 8),
    Element.FIRE: (2, 7),
    Element.EARTH: (0, 5),
    Element.METAL: (4, 9),
    Element.WATER: (1, 6),
}

# Seasonal balance: cold months are nourished by Wu (Fire), hot months by Zi (Water)
MONTH_NOURISHING_BRANCH = {
    11: BRANCH_BY_CHINESE["午"], 12: BRANCH_BY_CHINESE["午"], 1: BRANCH_BY_CHINESE["午"],
    5: BRANCH_BY_CHINESE["子"], 6: BRANCH_BY_CHINESE["子"], 7: BRANCH_BY_CHINESE["子"],
}


@dataclass(frozen=True)
class LuckyItem:
    element: Element
    color_name: str
    color_hex: str
    numbers: tuple
    rule: str  # which selection rule decided the element

    def to_dict(self):
        return {
            "element": self.element.value,
            "color": self.color_name,
            "color_hex": self.color_hex,
            "numbers": list(self.numbers),
            "rule": self.rule,
        }


@dataclass(frozen=True)
class DailyPrediction:
    date: date
    today: Pillar
    score: float
    keywords: dict
    lucky_item: LuckyItem
    markers: tuple = field(default_factory=tuple)

    def to_dict(self):
        return {
            "date": self.date.isoformat(),
            "today_pillar": self.today.to_dict(),
            "score": round(self.score, 1),
            "keywords": dict(self.keywords),
            "lucky_item": self.lucky_item.to_dict(),
            "markers": list(self.markers),
        }


# ============================================================
# SCORING
# ============================================================

def daily_score(pillars: FourPillars, today: Pillar) -> float:
    """
    Prediction score for one day.

    Base 70; +20 six-pair between natal day branch and today's branch;
    +15 if today's branch carries the favorable element of the day stem;
    +10 noble influence from the day stem; -20 clash; -15 punishment.
    """
    day_stem, day_branch = pillars.day.stem, pillars.day.branch
    score = 70.0

    if is_branch_six_pair(day_branch, today.branch):
        score += 20
    if today.branch.element == FAVORABLE_ELEMENT[day_stem.element]:
        score += 15
    if is_noble_influence(day_stem, today.branch):
        score += 10
    if is_branch_clash(day_branch, today.branch):
        score -= 20
    if is_branch_punishment(day_branch, today.branch):
        score -= 15

    return min(100.0, max(0.0, score))


def day_markers(pillars: FourPillars, today: Pillar) -> tuple:
    markers = []
    if is_noble_influence(pillars.day.stem, today.branch):
        markers.append("noble_influence")
    if is_flying_horse(pillars.day.branch, today.branch):
        markers.append("flying_horse")
    if is_empty_trunk(today.branch):
        markers.append("empty_trunk")
    return tuple(markers)


def fallback_keywords(pillars: FourPillars, today: Pillar) -> dict:
    return {
        "wealth": WEALTH_KEYWORDS.get(today.stem.element, WEALTH_FALLBACK),
        "love": LOVE_KEYWORDS.get(today.branch.chinese, LOVE_FALLBACK),
        "health": HEALTH_KEYWORDS.get(pillars.day.stem.chinese, HEALTH_FALLBACK),
        "total": TOTAL_KEYWORDS.get(pillars.day.label, TOTAL_FALLBACK),
    }


def _enriched(enrich: Optional[Enricher], pillars: FourPillars, today: Pillar,
              category: str) -> Optional[str]:
    if enrich is None:
        return None
    try:
        text = enrich(pillars, today, category)
    except Exception as exc:
        logger.warning("Keyword enrichment failed for %s: %s", category, exc)
        return None
    if not isinstance(text, str):
        logger.warning("Keyword enrichment for %s returned %s, not text",
                       category, type(text).__name__)
        return None
    if not text.strip():
        return None
    return text.strip()


def keywords(pillars: FourPillars, today: Pillar,
             enrich: Optional[Enricher] = None) -> dict:
    base = fallback_keywords(pillars, today)
    return {
        category: _enriched(enrich, pillars, today, category) or base[category]
        for category in KEYWORD_CATEGORIES
    }


# ============================================================
# LUCKY ITEM
# ============================================================

def lucky_element(pillars: FourPillars, month: int) -> tuple:
    """
    Pick the lucky element and name the rule that decided it.

    Starts from the weakest element (first minimum in canonical order),
    then applies, in order: the month's nourishing branch if its element
    is weaker still; the element the day stem produces, always; and that
    same produced element again when some element is missing entirely.

    The produced-element rule always applies, so ``month`` only decides
    the intermediate rule and never the returned element.
    """
    distribution = element_distribution(pillars)
    element = weakest_element(distribution)
    minimum = distribution[element]
    rule = "weakest_element"

    nourishing = MONTH_NOURISHING_BRANCH.get(month)
    if nourishing is not None and distribution[nourishing.element] < minimum:
        element = nourishing.element
        rule = "month_nourishing"

    element = PRODUCTION_CYCLE[pillars.day.stem.element]
    rule = "day_stem_output"

    if minimum == 0:
        element = PRODUCTION_CYCLE[pillars.day.stem.element]
        rule = "missing_element"

    return element, rule


def lucky_item(pillars: FourPillars, on: date) -> LuckyItem:
    element, rule = lucky_element(pillars, on.month)
    color_name, color_hex = LUCKY_COLORS[element]
    return LuckyItem(
        element=element,
        color_name=color_name,
        color_hex=color_hex,
        numbers=LUCKY_NUMBERS[element],
        rule=rule,
    )


def predict_daily(pillars: FourPillars, on: Optional[date] = None,
                  enrich: Optional[Enricher] = None) -> DailyPrediction:
    """
    Full daily prediction for ``on`` (defaults to the current date).

    Args:
        pillars: natal four pillars
        on: calendar date whose day pillar is "today"
        enrich: optional callable (pillars, today_pillar, category) -> text
    """
    on = on or current_date()
    today = today_pillar(on)
    prediction = DailyPrediction(
        date=on,
        today=today,
        score=daily_score(pillars, today),
        keywords=keywords(pillars, today, enrich),
        lucky_item=lucky_item(pillars, on),
        markers=day_markers(pillars, today),
    )
    logger.debug("daily %s for %s: %.1f", on.isoformat(), pillars.day.label, prediction.score)
    return prediction
