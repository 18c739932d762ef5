import heapq
from typing import Iterable, List

from rag.types import ScoredResult


def _rank_key(item: ScoredResult):
    # higher score first; equal scores fall back to earlier insertion
    return (-item.score, item.document.id)


def top_k(scored_items: Iterable[ScoredResult], k: int) -> List[ScoredResult]:
    """
    Return the k best results, score descending, ties broken by ascending id.
    A non-positive k yields an empty list.
    """
    if k <= 0:
        return []
    return heapq.nsmallest(k, scored_items, key=_rank_key)
