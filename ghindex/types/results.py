"""H-Index and comparison result models."""

from dataclasses import dataclass

from ghindex.types.items import ScoreField, ScoredItem


@dataclass(frozen=True)
class HIndexResult:
    """Outcome of one ranked fetch."""

    value: int
    contributing_items: tuple[ScoredItem, ...]  # descending by score_field
    total_matched_upstream: int
    total_fetched: int
    score_field: ScoreField
    pages_fetched: int = 0


@dataclass(frozen=True)
class AggregateCounts:
    """Supplementary totals for a predicate. None means unavailable."""

    total_repos: int | None = None
    total_prs: int | None = None
    total_discussions: int | None = None


@dataclass(frozen=True)
class ComparativeResult:
    """Star and fork H-Index of a term with its auxiliary totals."""

    term: str
    created_after: str
    star_h_index: int
    fork_h_index: int
    total_repos: int | None
    total_prs: int | None
    total_discussions: int | None
    analyzed_repos: int
    top_starred: tuple[ScoredItem, ...]
    top_forked: tuple[ScoredItem, ...]
    credentialed: bool = False


@dataclass(frozen=True)
class TermError:
    """Marks a search term whose processing failed."""

    term: str
    message: str
    code: str = "UNKNOWN_ERROR"
