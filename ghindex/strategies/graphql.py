"""GraphQL fetch strategy (cursor-paginated search, credential required)."""

from collections.abc import Callable, Mapping, Sequence

from ghindex.exceptions import UpstreamError
from ghindex.hindex import compute_h_index, rank_items
from ghindex.logging import get_logger, track_api_performance
from ghindex.strategies.base import PAGE_SIZE, FetchStrategy, build_predicate
from ghindex.strategies.queries import SEARCH_PAGE_QUERY, CountQuery, build_count_batch
from ghindex.types.items import ScoredItem, ScoreField
from ghindex.types.results import HIndexResult
from ghindex.types.trends import TimeWindow

logger = get_logger("graphql")

# Hard cap on repositories held by one ranked fetch
MAX_ITEMS = 500

# Windowed fetches skip the early stop and use the REST-sized cap instead
WINDOWED_MAX_ITEMS = 1000


def enough_for_h_index(items: Sequence[ScoredItem], h_index: int) -> bool:
    """
    Whether a ranked GraphQL fetch can stop after the current page.

    True once at least a full page and three times the current index are
    held. This is a heuristic; its thresholds define the behavior of the
    GraphQL strategy.
    """
    return len(items) >= h_index * 3 and len(items) >= PAGE_SIZE


class GraphQLFetchStrategy(FetchStrategy):
    """Fetch strategy for the cursor-paginated GraphQL search API."""

    api_type = "GraphQL"

    async def fetch_ranked(
        self,
        term: str,
        created_after: str,
        score_field: ScoreField,
        sort_key: str | None = None,
    ) -> HIndexResult:
        """
        Follow search cursors and estimate the H-Index.

        Stops when the cursor is exhausted, when :func:`enough_for_h_index`
        holds, or once ``MAX_ITEMS`` repositories are held.
        """
        search_query = (
            f"{build_predicate(term, created_after)} "
            f"sort:{sort_key or score_field.sort_key}-desc"
        )

        def should_stop(items: list[ScoredItem]) -> bool:
            return enough_for_h_index(items, compute_h_index(items, score_field))

        with track_api_performance(self.api_type):
            items, total_count, pages = await self._collect(
                search_query, MAX_ITEMS, should_stop
            )

        result = self._result(items, total_count, pages, score_field)
        logger.info(
            "%r by %s: h=%d from %d/%d repositories (%d pages)",
            term, score_field.value, result.value, len(items), total_count, pages,
        )
        return result

    async def fetch_windowed_h_index(
        self,
        term: str,
        window: TimeWindow,
        score_field: ScoreField,
    ) -> HIndexResult:
        """
        H-Index of repositories created inside ``window``.

        Pages until the cursor is exhausted or ``WINDOWED_MAX_ITEMS`` are
        held, without the early-stop heuristic.
        """
        search_query = (
            f"{term} created:{window.predicate} sort:{score_field.sort_key}-desc"
        )
        with track_api_performance("WindowedHIndex"):
            items, total_count, pages = await self._collect(
                search_query, WINDOWED_MAX_ITEMS, lambda _: False
            )
        return self._result(items, total_count, pages, score_field)

    async def fetch_count(self, term: str, created_after: str, item_type: str) -> int:
        counts = await self.fetch_counts(
            {"total": CountQuery(build_predicate(term, created_after), item_type)}
        )
        return counts["total"]

    async def fetch_counts(self, queries: Mapping[str, CountQuery]) -> dict[str, int]:
        """
        Run several count-only searches in one request.

        Args:
            queries: Sub-queries keyed by alias

        Returns:
            Counts keyed by the same aliases, in input order

        Raises:
            UpstreamError: If the request fails or any alias is missing from
                the response; no partial result is returned
        """
        if not queries:
            return {}

        document, variables = build_count_batch(queries)
        data = await self.transport.graphql(document, variables)

        counts: dict[str, int] = {}
        for alias, query in queries.items():
            node = data.get(alias)
            if not isinstance(node, dict) or query.count_field not in node:
                raise UpstreamError(
                    200, f"GraphQL response is missing '{alias}'", code="GRAPHQL_ERROR"
                )
            counts[alias] = node[query.count_field]
        return counts

    async def _collect(
        self,
        search_query: str,
        max_items: int,
        should_stop: Callable[[list[ScoredItem]], bool],
    ) -> tuple[list[ScoredItem], int, int]:
        items: list[ScoredItem] = []
        total_count = 0
        pages = 0
        cursor: str | None = None

        while len(items) < max_items:
            data = await self.transport.graphql(
                SEARCH_PAGE_QUERY,
                {
                    "searchQuery": search_query,
                    "first": min(PAGE_SIZE, max_items - len(items)),
                    "after": cursor,
                },
            )
            search = data.get("search")
            if not isinstance(search, dict):
                raise UpstreamError(
                    200, "GraphQL response is missing 'search'", code="GRAPHQL_ERROR"
                )
            pages += 1
            total_count = search.get("repositoryCount", 0)

            # Non-repository nodes come back as empty objects
            nodes = [node for node in search.get("nodes") or [] if node and "id" in node]
            if not search.get("nodes"):
                break
            items.extend(ScoredItem.from_graphql(node) for node in nodes)
            del items[max_items:]

            page_info = search.get("pageInfo") or {}
            cursor = page_info.get("endCursor")
            if not page_info.get("hasNextPage") or should_stop(items):
                break

        return items, total_count, pages

    @staticmethod
    def _result(
        items: list[ScoredItem], total_count: int, pages: int, score_field: ScoreField
    ) -> HIndexResult:
        return HIndexResult(
            value=compute_h_index(items, score_field),
            contributing_items=tuple(rank_items(items, score_field)),
            total_matched_upstream=max(total_count, len(items)),
            total_fetched=len(items),
            score_field=score_field,
            pages_fetched=pages,
        )
