"""Deterministic ranking of scored candidates."""

from dataclasses import dataclass
from typing import Any, Iterable


@dataclass(frozen=True)
class RankedItem:
    id: Any
    score: float
    rank: int

    def to_dict(self):
        return {"id": self.id, "score": round(self.score, 1), "rank": self.rank}


def rank_items(candidates: Iterable[tuple], descending: bool = True) -> list[RankedItem]:
    """
    Order (id, score) pairs and assign competition ranks.

    Scores sort descending by default (ascending with ``descending=False``);
    ids break ties ascending either way. Tied scores share the 1-based
    position of the first member of their group, so [90, 90, 70] ranks
    as [1, 1, 3].
    """
    sign = -1 if descending else 1
    ordered = sorted(candidates, key=lambda c: (sign * c[1], c[0]))

    ranked = []
    for position, (item_id, score) in enumerate(ordered, start=1):
        if ranked and ranked[-1].score == score:
            rank = ranked[-1].rank
        else:
            rank = position
        ranked.append(RankedItem(id=item_id, score=score, rank=rank))
    return ranked
