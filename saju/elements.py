"""
Element Classifier.

Reduces the eight stem/branch symbols of a FourPillars to a
count-per-element distribution.
"""

from typing import Union

from saju.pillars import FourPillars
from saju.tables import ELEMENT_ORDER, Element, EarthlyBranch, HeavenlyStem


def element_of(symbol: Union[HeavenlyStem, EarthlyBranch]) -> Element:
    return symbol.element


def element_distribution(pillars: FourPillars) -> dict:
    """
    Count elements across the four pillars, one per stem and one per branch.

    Keys are all five elements in canonical order; values sum to 8.
    """
    distribution = {e: 0 for e in ELEMENT_ORDER}
    for symbol in pillars.symbols():
        distribution[element_of(symbol)] += 1
    return distribution


def distribution_to_dict(distribution: dict) -> dict:
    """JSON-friendly copy keyed by element value."""
    return {e.value: distribution[e] for e in ELEMENT_ORDER}


def weakest_element(distribution: dict) -> Element:
    """First element, in canonical order, holding the minimum count."""
    return min(ELEMENT_ORDER, key=lambda e: distribution[e])


def count_complementary_elements(mine: dict, theirs: dict) -> int:
    """Elements I lack entirely that the other side holds at least twice."""
    return sum(1 for e in ELEMENT_ORDER if mine[e] == 0 and theirs[e] >= 2)


def has_element_bias(first: dict, second: dict) -> bool:
    """True if some element reaches 3 in both distributions."""
    return any(first[e] >= 3 and second[e] >= 3 for e in ELEMENT_ORDER)
