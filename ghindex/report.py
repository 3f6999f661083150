"""
Comparative H-Index reports.

For a search term, the star-sorted and fork-sorted fetches run concurrently
with the three aggregate counts. The ranked fetches are required; a count
that fails is reported as unavailable instead of failing the term.
"""

import asyncio
from collections.abc import Awaitable, Mapping, Sequence
from typing import Any

from ghindex.exceptions import GHIndexError, ValidationError
from ghindex.hindex import merge_items, top_items
from ghindex.logging import get_logger
from ghindex.strategies.base import FetchStrategy
from ghindex.types.items import ScoreField
from ghindex.types.results import AggregateCounts, ComparativeResult, TermError

logger = get_logger("report")

TOP_N = 10

SORTABLE_COLUMNS = (
    "term",
    "star_h_index",
    "fork_h_index",
    "total_repos",
    "total_prs",
    "total_discussions",
    "analyzed_repos",
)


async def _gather_or_cancel(*aws: Awaitable[Any]) -> list[Any]:
    """
    Await all of ``aws`` concurrently; on the first failure cancel the rest.

    The siblings are awaited before the error is re-raised, so nothing keeps
    requesting for a term that has already failed.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class ComparisonBuilder:
    """Builds ComparativeResult records on top of a fetch strategy."""

    def __init__(self, strategy: FetchStrategy) -> None:
        """
        Initialize the builder.

        Args:
            strategy: Fetch strategy chosen for the client's credential
        """
        self.strategy = strategy

    @property
    def credentialed(self) -> bool:
        return self.strategy.transport.has_credential

    async def _count(self, term: str, created_after: str, item_type: str) -> int | None:
        if item_type == "discussions" and not self.credentialed:
            return None
        try:
            return await self.strategy.fetch_count(term, created_after, item_type)
        except GHIndexError as e:
            logger.warning("Could not count %s for %r: %s", item_type, term, e)
            return None

    async def aggregate_counts(self, term: str, created_after: str) -> AggregateCounts:
        """Repository, pull request and discussion totals; never raises upstream errors."""
        total_repos, total_prs, total_discussions = await asyncio.gather(
            self._count(term, created_after, "repositories"),
            self._count(term, created_after, "pull_requests"),
            self._count(term, created_after, "discussions"),
        )
        return AggregateCounts(
            total_repos=total_repos,
            total_prs=total_prs,
            total_discussions=total_discussions,
        )

    async def build_comparison(self, term: str, created_after: str) -> ComparativeResult:
        """
        Compute star and fork H-Index plus totals for one term.

        Args:
            term: Search term
            created_after: ISO date; only items created after it are counted

        Returns:
            ComparativeResult for the term

        Raises:
            UpstreamError: If either ranked fetch fails
        """
        star_result, fork_result, counts = await _gather_or_cancel(
            self.strategy.fetch_ranked(term, created_after, ScoreField.STARS),
            self.strategy.fetch_ranked(term, created_after, ScoreField.FORKS),
            self.aggregate_counts(term, created_after),
        )

        merged = merge_items(star_result.contributing_items, fork_result.contributing_items)

        return ComparativeResult(
            term=term,
            created_after=created_after,
            star_h_index=star_result.value,
            fork_h_index=fork_result.value,
            total_repos=counts.total_repos,
            total_prs=counts.total_prs,
            total_discussions=counts.total_discussions,
            analyzed_repos=len(merged),
            top_starred=tuple(top_items(merged, ScoreField.STARS, TOP_N)),
            top_forked=tuple(top_items(merged, ScoreField.FORKS, TOP_N)),
            credentialed=self.credentialed,
        )

    async def build_comparisons(
        self, terms: Sequence[str], created_after: str
    ) -> dict[str, ComparativeResult | TermError]:
        """
        Build a comparison for each term, one term at a time.

        A failed term is recorded as a TermError; the others still complete.
        """
        results: dict[str, ComparativeResult | TermError] = {}
        for term in terms:
            try:
                results[term] = await self.build_comparison(term, created_after)
            except GHIndexError as e:
                logger.warning("Comparison failed for %r: %s", term, e)
                results[term] = TermError(term=term, message=e.message, code=e.code)
        return results


def sort_comparisons(
    results: Mapping[str, ComparativeResult | TermError] | Sequence[ComparativeResult],
    key: str = "term",
    descending: bool = False,
) -> list[ComparativeResult]:
    """
    Order successful comparisons by one column.

    Failed terms are dropped. Unavailable counts sort as -1, below any
    real count.

    Raises:
        ValidationError: If ``key`` is not a sortable column
    """
    if key not in SORTABLE_COLUMNS:
        raise ValidationError(
            f"Invalid sort column: {key}. Must be one of {', '.join(SORTABLE_COLUMNS)}"
        )

    rows = results.values() if isinstance(results, Mapping) else results
    successful = [row for row in rows if isinstance(row, ComparativeResult)]

    def sort_value(row: ComparativeResult) -> int | str:
        value = getattr(row, key)
        return -1 if value is None else value

    return sorted(successful, key=sort_value, reverse=descending)
