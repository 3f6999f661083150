"""
Trend aggregation across search terms and time windows.

Every window of a term is counted in a single batched GraphQL request.
Terms are processed one after another to keep rate-limit usage predictable,
and a failing term never prevents the others from being reported.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING

from ghindex.exceptions import GHIndexError, PreconditionError, ValidationError
from ghindex.logging import get_logger, track_api_performance
from ghindex.strategies.graphql import GraphQLFetchStrategy
from ghindex.strategies.queries import CountQuery
from ghindex.types.items import ScoreField
from ghindex.types.results import HIndexResult, TermError
from ghindex.types.trends import TimeWindow, TrendPoint, TrendSeries
from ghindex.windows import format_period_label, infer_granularity

if TYPE_CHECKING:
    from ghindex.transport import GitHubTransport

logger = get_logger("trends")

METRICS = ("repositories", "prs", "issues", "all")


class TrendAggregator:
    """Builds comparable time series for search terms. Requires a credential."""

    def __init__(self, transport: "GitHubTransport") -> None:
        """
        Initialize the aggregator.

        Args:
            transport: Async transport for making requests
        """
        self.transport = transport
        self._strategy = GraphQLFetchStrategy(transport)

    def _require_credential(self) -> None:
        if not self.transport.has_credential:
            raise PreconditionError("GitHub token is required for time trend analysis")

    async def fetch_time_series(
        self,
        term: str,
        windows: Sequence[TimeWindow],
        metric: str = "repositories",
    ) -> tuple[TrendPoint, ...]:
        """
        Count repositories (and optionally PRs/issues) per window for one term.

        Args:
            term: Search term
            windows: Chronological windows
            metric: "repositories", "prs", "issues" or "all"

        Returns:
            One TrendPoint per window, in the order of ``windows``

        Raises:
            PreconditionError: If no credential is available
            ValidationError: On an unknown metric
            UpstreamError: If the batched request fails
        """
        self._require_credential()
        _check_metric(metric)
        if not windows:
            return ()

        queries: dict[str, CountQuery] = {}
        for index, window in enumerate(windows):
            alias = f"period{index}"
            predicate = f"{term} created:{window.predicate}"
            queries[alias] = CountQuery(predicate, "repositories")
            if metric in ("prs", "all"):
                queries[f"{alias}_prs"] = CountQuery(predicate, "pull_requests")
            if metric in ("issues", "all"):
                queries[f"{alias}_issues"] = CountQuery(predicate, "issues")

        with track_api_performance("TrendGraphQL"):
            counts = await self._strategy.fetch_counts(queries)

        return tuple(
            TrendPoint(
                window=window,
                period_label=format_period_label(window),
                repository_count=counts[f"period{index}"],
                pull_request_count=counts.get(f"period{index}_prs"),
                issue_count=counts.get(f"period{index}_issues"),
            )
            for index, window in enumerate(windows)
        )

    async def compare_terms(
        self,
        terms: Sequence[str],
        windows: Sequence[TimeWindow],
        metric: str = "repositories",
    ) -> TrendSeries:
        """
        Build a time series for every term.

        A term whose fetch fails is recorded as a TermError and the remaining
        terms are still processed.

        Raises:
            PreconditionError: If no credential is available (before any request)
            ValidationError: On an unknown metric
        """
        self._require_credential()
        _check_metric(metric)

        logger.info(
            "Trend request: %d terms, metric=%s, granularity=%s",
            len(terms), metric, infer_granularity(windows),
        )

        results: dict[str, tuple[TrendPoint, ...] | TermError] = {}
        for term in terms:
            try:
                results[term] = await self.fetch_time_series(term, windows, metric)
            except GHIndexError as e:
                logger.warning("Trend fetch failed for %r: %s", term, e)
                results[term] = TermError(term=term, message=e.message, code=e.code)

        return TrendSeries(results)

    async def windowed_h_index(
        self, term: str, window: TimeWindow, score_field: ScoreField = ScoreField.STARS
    ) -> HIndexResult:
        """H-Index of the repositories matching ``term`` created inside ``window``."""
        self._require_credential()
        return await self._strategy.fetch_windowed_h_index(term, window, score_field)


def _check_metric(metric: str) -> None:
    if metric not in METRICS:
        raise ValidationError(f"Invalid metric: {metric}. Must be one of {', '.join(METRICS)}")
