"""
H-Index calculation over scored repositories.

Pure functions only; nothing here performs I/O.
"""

from collections.abc import Iterable, Sequence

from ghindex.types.items import ScoredItem, ScoreField


def rank_items(items: Iterable[ScoredItem], field: ScoreField) -> list[ScoredItem]:
    """Return a copy of ``items`` sorted descending by ``field``.

    The sort is stable, so equal scores keep their input order.
    """
    return sorted(items, key=field.score, reverse=True)


def compute_h_index(items: Sequence[ScoredItem], field: ScoreField) -> int:
    """
    Compute the H-Index of ``items`` over ``field``.

    The H-Index is the largest ``h`` such that ``h`` items each score at
    least ``h``. Input order does not matter.

    Args:
        items: Repositories to rank
        field: Score to rank by

    Returns:
        The H-Index, 0 for an empty input
    """
    h_index = 0
    for rank, item in enumerate(rank_items(items, field), start=1):
        if field.score(item) < rank:
            break
        h_index = rank
    return h_index


def merge_items(*collections: Iterable[ScoredItem]) -> list[ScoredItem]:
    """
    Merge item collections, keeping each ``id`` once.

    Later occurrences replace earlier ones (items with the same id are the
    same repository); the position of the first occurrence is kept.
    """
    merged: dict[str, ScoredItem] = {}
    for collection in collections:
        for item in collection:
            merged[item.id] = item
    return list(merged.values())


def top_items(
    items: Iterable[ScoredItem], field: ScoreField, limit: int = 10
) -> list[ScoredItem]:
    """Return the ``limit`` highest-scoring items by ``field``."""
    return rank_items(items, field)[:limit]
