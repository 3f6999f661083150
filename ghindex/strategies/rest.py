"""REST fetch strategy (offset-paginated search, no credential required)."""

from collections.abc import Sequence

from ghindex.exceptions import PreconditionError
from ghindex.hindex import compute_h_index, rank_items
from ghindex.logging import get_logger, track_api_performance
from ghindex.strategies.base import (
    PAGE_SIZE,
    FetchStrategy,
    build_predicate,
    check_item_type,
)
from ghindex.types.items import ScoredItem, ScoreField
from ghindex.types.results import HIndexResult

logger = get_logger("rest")

# Pages past this point are never requested (1000 items)
MAX_PAGES = 10

# An index that does not grow after this many items is taken as final
STABLE_AFTER_ITEMS = PAGE_SIZE * 2


def boundary_settled(
    items: Sequence[ScoredItem],
    h_index: int,
    total_count: int,
    score_field: ScoreField,
) -> bool:
    """
    Whether a freshly increased H-Index can be trusted without more pages.

    True when the item at rank ``h_index`` scores exactly ``h_index``, at
    least twice as many items as the index are held, and either the whole
    result set is held or at least three times the index.

    ``items`` are in upstream (descending) order. This is a heuristic; its
    thresholds define the behavior of the REST strategy.
    """
    if h_index <= 0:
        return False
    fetched = len(items)
    return (
        fetched >= h_index * 2
        and score_field.score(items[h_index - 1]) == h_index
        and (fetched == total_count or fetched >= h_index * 3)
    )


class RestFetchStrategy(FetchStrategy):
    """Fetch strategy for the offset-paginated REST search API."""

    api_type = "REST"

    async def fetch_ranked(
        self,
        term: str,
        created_after: str,
        score_field: ScoreField,
        sort_key: str | None = None,
    ) -> HIndexResult:
        """
        Page through ``/search/repositories`` and estimate the H-Index.

        Stops at the first short or empty page, after ``MAX_PAGES`` pages,
        when the index stops growing after ``STABLE_AFTER_ITEMS`` items, or
        when :func:`boundary_settled` holds.
        """
        params = {
            "q": build_predicate(term, created_after),
            "sort": sort_key or score_field.sort_key,
            "order": "desc",
            "per_page": PAGE_SIZE,
        }

        items: list[ScoredItem] = []
        h_index = 0
        total_count = 0
        page = 1

        with track_api_performance(self.api_type):
            while page <= MAX_PAGES:
                data = await self.transport.rest_get(
                    "/search/repositories", params={**params, "page": page}
                )
                total_count = data.get("total_count", 0)
                page_items = [ScoredItem.from_rest(raw) for raw in data.get("items") or []]
                if not page_items:
                    break

                items.extend(page_items)
                current = compute_h_index(items, score_field)

                if current > h_index:
                    h_index = current
                    if boundary_settled(items, h_index, total_count, score_field):
                        logger.debug("%r: boundary settled at h=%d", term, h_index)
                        break
                elif len(items) >= STABLE_AFTER_ITEMS:
                    logger.debug("%r: h=%d stable after %d items", term, h_index, len(items))
                    break

                if len(page_items) < PAGE_SIZE:
                    break
                page += 1

        pages_fetched = min(page, MAX_PAGES)
        logger.info(
            "%r by %s: h=%d from %d/%d repositories (%d pages)",
            term, score_field.value, h_index, len(items), total_count, pages_fetched,
        )

        return HIndexResult(
            value=h_index,
            contributing_items=tuple(rank_items(items, score_field)),
            total_matched_upstream=max(total_count, len(items)),
            total_fetched=len(items),
            score_field=score_field,
            pages_fetched=pages_fetched,
        )

    async def fetch_count(self, term: str, created_after: str, item_type: str) -> int:
        check_item_type(item_type)
        predicate = build_predicate(term, created_after)

        if item_type == "repositories":
            path = "/search/repositories"
        elif item_type == "pull_requests":
            path, predicate = "/search/issues", f"{predicate} is:pr"
        elif item_type == "issues":
            path, predicate = "/search/issues", f"{predicate} is:issue"
        else:
            raise PreconditionError(f"GitHub token is required to count {item_type}")

        data = await self.transport.rest_get(path, params={"q": predicate, "per_page": 1})
        return data.get("total_count", 0)
