"""
Stem/branch alphabets and the relation tables of the sexagenary engine.

Handles:
- Heavenly Stem and Earthly Branch definitions (element, polarity, animal)
- Production cycle and favorable element map
- Stem pair / clash
- Branch six-pair, three-pair, clash, resentment, punishment
- Noble influence, flying horse and empty trunk markers

Every table here is static data. A pair that is missing from a table is
simply "no relation"; no predicate raises for a well-formed symbol.
"""

from dataclasses import dataclass
from enum import Enum


# ============================================================
# FUNDAMENTAL DATA STRUCTURES
# ============================================================

class Polarity(Enum):
    YANG = "yang"
    YIN = "yin"


class Element(Enum):
    WOOD = "wood"
    FIRE = "fire"
    EARTH = "earth"
    METAL = "metal"
    WATER = "water"


# Canonical iteration order. Anything that picks "the first" element
# (minimum counts, ties) walks this tuple, never a dict.
ELEMENT_ORDER = (Element.WOOD, Element.FIRE, Element.EARTH, Element.METAL, Element.WATER)


@dataclass(frozen=True)
class HeavenlyStem:
    chinese: str
    pinyin: str
    element: Element
    polarity: Polarity
    index: int  # 0-9 in the cycle

    def __str__(self):
        return f"{self.pinyin} ({self.polarity.value} {self.element.value})"


@dataclass(frozen=True)
class EarthlyBranch:
    chinese: str
    pinyin: str
    animal: str
    element: Element
    polarity: Polarity
    index: int  # 0-11 in the cycle

    def __str__(self):
        return f"{self.pinyin} ({self.animal})"


# ============================================================
# STEM AND BRANCH DEFINITIONS
# ============================================================

HEAVENLY_STEMS = (
    HeavenlyStem("甲", "Jia", Element.WOOD, Polarity.YANG, 0),
    HeavenlyStem("乙", "Yi", Element.WOOD, Polarity.YIN, 1),
    HeavenlyStem("丙", "Bing", Element.FIRE, Polarity.YANG, 2),
    HeavenlyStem("丁", "Ding", Element.FIRE, Polarity.YIN, 3),
    HeavenlyStem("戊", "Wu", Element.EARTH, Polarity.YANG, 4),
    HeavenlyStem("己", "Ji", Element.EARTH, Polarity.YIN, 5),
    HeavenlyStem("庚", "Geng", Element.METAL, Polarity.YANG, 6),
    HeavenlyStem("辛", "Xin", Element.METAL, Polarity.YIN, 7),
    HeavenlyStem("壬", "Ren", Element.WATER, Polarity.YANG, 8),
    HeavenlyStem("癸", "Gui", Element.WATER, Polarity.YIN, 9),
)

EARTHLY_BRANCHES = (
    EarthlyBranch("子", "Zi", "Rat", Element.WATER, Polarity.YANG, 0),
    EarthlyBranch("丑", "Chou", "Ox", Element.EARTH, Polarity.YIN, 1),
    EarthlyBranch("寅", "Yin", "Tiger", Element.WOOD, Polarity.YANG, 2),
    EarthlyBranch("卯", "Mao", "Rabbit", Element.WOOD, Polarity.YIN, 3),
    EarthlyBranch("辰", "Chen", "Dragon", Element.EARTH, Polarity.YANG, 4),
    EarthlyBranch("巳", "Si", "Snake", Element.FIRE, Polarity.YIN, 5),
    EarthlyBranch("午", "Wu", "Horse", Element.FIRE, Polarity.YANG, 6),
    EarthlyBranch("未", "Wei", "Goat", Element.EARTH, Polarity.YIN, 7),
    EarthlyBranch("申", "Shen", "Monkey", Element.METAL, Polarity.YANG, 8),
    EarthlyBranch("酉", "You", "Rooster", Element.METAL, Polarity.YIN, 9),
    EarthlyBranch("戌", "Xu", "Dog", Element.EARTH, Polarity.YANG, 10),
    EarthlyBranch("亥", "Hai", "Pig", Element.WATER, Polarity.YIN, 11),
)

# Lookup helpers
STEM_BY_CHINESE = {s.chinese: s for s in HEAVENLY_STEMS}
STEM_BY_PINYIN = {s.pinyin: s for s in HEAVENLY_STEMS}
BRANCH_BY_CHINESE = {b.chinese: b for b in EARTHLY_BRANCHES}
BRANCH_BY_PINYIN = {b.pinyin: b for b in EARTHLY_BRANCHES}
BRANCH_BY_ANIMAL = {b.animal: b for b in EARTHLY_BRANCHES}


# ============================================================
# ELEMENT CYCLES
# ============================================================

# Production cycle: Wood → Fire → Earth → Metal → Water → Wood
PRODUCTION_CYCLE = {
    Element.WOOD: Element.FIRE,
    Element.FIRE: Element.EARTH,
    Element.EARTH: Element.METAL,
    Element.METAL: Element.WATER,
    Element.WATER: Element.WOOD,
}

# Favorable element ("God of Use") for a day-stem element. Same arrows as the
# production cycle: the day master is helped by the element it feeds.
FAVORABLE_ELEMENT = dict(PRODUCTION_CYCLE)


def is_generating(a: Element, b: Element) -> bool:
    """True if either element produces the other."""
    return PRODUCTION_CYCLE[a] == b or PRODUCTION_CYCLE[b] == a


# ============================================================
# STEM RELATIONS
# ============================================================

# Five Combinations (天干合): each stem has exactly one partner
STEM_PAIRS = (
    (0, 5),   # Jia-Ji
    (1, 6),   # Yi-Geng
    (2, 7),   # Bing-Xin
    (3, 8),   # Ding-Ren
    (4, 9),   # Wu-Gui
)

# Stem clashes (天干冲): each stem has exactly one partner
STEM_CLASHES = (
    (0, 6),   # Jia-Geng
    (1, 7),   # Yi-Xin
    (2, 8),   # Bing-Ren
    (3, 9),   # Ding-Gui
    (4, 5),   # Wu-Ji
)


# ============================================================
# BRANCH RELATIONS
# ============================================================

# Six Combinations (六合)
SIX_COMBINATIONS = (
    (0, 1),   # Zi-Chou
    (2, 11),  # Yin-Hai
    (3, 10),  # Mao-Xu
    (4, 9),   # Chen-You
    (5, 8),   # Si-Shen
    (6, 7),   # Wu-Wei
)

# Three Harmony frames (三合); any two members of a frame are partners
THREE_HARMONY = (
    (2, 6, 10),   # Yin-Wu-Xu → Fire frame
    (11, 3, 7),   # Hai-Mao-Wei → Wood frame
    (5, 9, 1),    # Si-You-Chou → Metal frame
    (8, 0, 4),    # Shen-Zi-Chen → Water frame
)

# Six Clashes (六冲)
SIX_CLASHES = (
    (0, 6),   # Zi-Wu (Rat-Horse)
    (1, 7),   # Chou-Wei (Ox-Goat)
    (2, 8),   # Yin-Shen (Tiger-Monkey)
    (3, 9),   # Mao-You (Rabbit-Rooster)
    (4, 10),  # Chen-Xu (Dragon-Dog)
    (5, 11),  # Si-Hai (Snake-Pig)
)

# Resentments (怨嗔)
RESENTMENTS = (
    (0, 7),   # Zi-Wei
    (1, 6),   # Chou-Wu
    (2, 9),   # Yin-You
    (3, 8),   # Mao-Shen
    (4, 11),  # Chen-Hai
    (5, 10),  # Si-Xu
)

# Punishments (刑)
# Ungrateful punishment: Yin-Si-Shen
# Uncivilized punishment: Chou-Xu-Wei
# Rude punishment: Zi-Mao
# Self-punishment: Chen-Chen, Wu-Wu
PUNISHMENTS = (
    (2, 5), (5, 8), (8, 2),
    (1, 10), (10, 7), (7, 1),
    (0, 3),
    (4, 4),
    (6, 6),
)

# Flying Horse (驛馬): two disjoint branch pairs
FLYING_HORSE_PAIRS = (
    (2, 8),   # Yin-Shen
    (5, 11),  # Si-Hai
)

# Empty Trunk (空亡): void branches, independent of any stem
EMPTY_TRUNK_BRANCHES = frozenset({10, 11})  # Xu, Hai

# Noble Influence (天乙貴人): day stem → qualifying branches (direction-specific)
NOBLE_INFLUENCE = {
    0: frozenset({1, 7}),    # Jia → Chou, Wei
    1: frozenset({0, 8}),    # Yi → Zi, Shen
    2: frozenset({11, 9}),   # Bing → Hai, You
    3: frozenset({11, 9}),   # Ding → Hai, You
    4: frozenset({1, 7}),    # Wu → Chou, Wei
    5: frozenset({0, 8}),    # Ji → Zi, Shen
    6: frozenset({1, 7}),    # Geng → Chou, Wei
    7: frozenset({2, 6}),    # Xin → Yin, Wu
    8: frozenset({3, 5}),    # Ren → Mao, Si
    9: frozenset({3, 5}),    # Gui → Mao, Si
}


def _symmetric(pairs) -> frozenset:
    """Expand a list of pairs into an order-free set of (a, b) tuples."""
    return frozenset(pairs) | frozenset((b, a) for a, b in pairs)


def _frame_pairs(frames) -> frozenset:
    return frozenset(
        (a, b) for frame in frames for a in frame for b in frame if a != b
    )


_STEM_PAIR_SET = _symmetric(STEM_PAIRS)
_STEM_CLASH_SET = _symmetric(STEM_CLASHES)
_SIX_PAIR_SET = _symmetric(SIX_COMBINATIONS)
_THREE_PAIR_SET = _frame_pairs(THREE_HARMONY)
_CLASH_SET = _symmetric(SIX_CLASHES)
_RESENTMENT_SET = _symmetric(RESENTMENTS)
_PUNISHMENT_SET = _symmetric(PUNISHMENTS)
_FLYING_HORSE_SET = _symmetric(FLYING_HORSE_PAIRS)


# ============================================================
# PREDICATES
# ============================================================

def is_stem_pair(a: HeavenlyStem, b: HeavenlyStem) -> bool:
    return (a.index, b.index) in _STEM_PAIR_SET


def is_stem_clash(a: HeavenlyStem, b: HeavenlyStem) -> bool:
    return (a.index, b.index) in _STEM_CLASH_SET


def is_branch_six_pair(a: EarthlyBranch, b: EarthlyBranch) -> bool:
    return (a.index, b.index) in _SIX_PAIR_SET


def is_branch_three_pair(a: EarthlyBranch, b: EarthlyBranch) -> bool:
    return (a.index, b.index) in _THREE_PAIR_SET


def is_branch_clash(a: EarthlyBranch, b: EarthlyBranch) -> bool:
    return (a.index, b.index) in _CLASH_SET


def is_branch_resentment(a: EarthlyBranch, b: EarthlyBranch) -> bool:
    return (a.index, b.index) in _RESENTMENT_SET


def is_branch_punishment(a: EarthlyBranch, b: EarthlyBranch) -> bool:
    """Punishment relation. Chen and Wu also punish themselves."""
    return (a.index, b.index) in _PUNISHMENT_SET


def is_noble_influence(stem: HeavenlyStem, branch: EarthlyBranch) -> bool:
    """Stem → branch only; the reverse question has no meaning."""
    return branch.index in NOBLE_INFLUENCE.get(stem.index, frozenset())


def is_flying_horse(a: EarthlyBranch, b: EarthlyBranch) -> bool:
    return (a.index, b.index) in _FLYING_HORSE_SET


def is_empty_trunk(branch: EarthlyBranch) -> bool:
    return branch.index in EMPTY_TRUNK_BRANCHES


def stem_partners(stem: HeavenlyStem, relation: str = "pair") -> list[HeavenlyStem]:
    """All stems related to ``stem`` under "pair" or "clash"."""
    table = {"pair": _STEM_PAIR_SET, "clash": _STEM_CLASH_SET}[relation]
    return [HEAVENLY_STEMS[b] for a, b in sorted(table) if a == stem.index]


def branch_partners(branch: EarthlyBranch, relation: str) -> list[EarthlyBranch]:
    """
    All branches related to ``branch`` under a named relation.

    relation is one of "six_pair", "three_pair", "clash", "resentment",
    "punishment", "flying_horse".
    """
    table = {
        "six_pair": _SIX_PAIR_SET,
        "three_pair": _THREE_PAIR_SET,
        "clash": _CLASH_SET,
        "resentment": _RESENTMENT_SET,
        "punishment": _PUNISHMENT_SET,
        "flying_horse": _FLYING_HORSE_SET,
    }[relation]
    return [EARTHLY_BRANCHES[b] for a, b in sorted(table) if a == branch.index]
