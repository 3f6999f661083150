"""
Tests for the REST fetch strategy.

Feature: rest-fetch
"""

import pytest

from ghindex.exceptions import PreconditionError, RateLimitedError, UpstreamError
from ghindex.strategies import RestFetchStrategy
from ghindex.strategies.rest import MAX_PAGES, boundary_settled
from ghindex.testing import make_items
from ghindex.types.items import ScoreField

SEARCH = "/search/repositories"


async def test_rest_client_uses_rest_strategy(rest_client) -> None:
    assert isinstance(rest_client.strategy, RestFetchStrategy)


async def test_small_result_set(fake_api, rest_client, sample_items) -> None:
    fake_api.repositories = sample_items

    result = await rest_client.h_index("rust", "2020-01-01", ScoreField.STARS)

    assert result.value == 4
    assert result.total_fetched == 5
    assert result.total_matched_upstream == 5
    assert result.pages_fetched == 1
    assert [i.star_count for i in result.contributing_items] == [10, 8, 5, 4, 3]
    assert len(fake_api.requests_to(SEARCH)) == 1


async def test_request_parameters(fake_api, rest_client, sample_items) -> None:
    fake_api.repositories = sample_items

    await rest_client.h_index("rust", "2020-01-01", ScoreField.FORKS)

    params = fake_api.requests_to(SEARCH)[0].params
    assert params["q"] == "rust created:>2020-01-01"
    assert params["sort"] == "forks"
    assert params["order"] == "desc"
    assert params["per_page"] == "100"
    assert params["page"] == "1"


async def test_empty_result_is_zero(fake_api, rest_client) -> None:
    result = await rest_client.h_index("nothing-matches", "2020-01-01")

    assert result.value == 0
    assert result.total_fetched == 0
    assert result.contributing_items == ()


async def test_never_more_than_ten_pages(fake_api, rest_client) -> None:
    # every repository is popular, so the index grows with every page
    fake_api.repositories = make_items([10_000] * 2000)

    result = await rest_client.h_index("rust", "2020-01-01")

    assert len(fake_api.requests_to(SEARCH)) == MAX_PAGES
    assert result.value == 1000
    assert result.total_fetched == 1000
    assert result.total_matched_upstream == 2000


async def test_stops_when_index_stable(fake_api, rest_client) -> None:
    fake_api.repositories = make_items([50] * 500)

    result = await rest_client.h_index("rust", "2020-01-01")

    # page 1 reaches h=50, page 2 adds nothing
    assert len(fake_api.requests_to(SEARCH)) == 2
    assert result.value == 50
    assert result.total_fetched == 200


async def test_stops_when_boundary_settled(fake_api, rest_client) -> None:
    fake_api.repositories = make_items([30] * 30 + [1] * 170)

    result = await rest_client.h_index("rust", "2020-01-01")

    assert len(fake_api.requests_to(SEARCH)) == 1
    assert result.value == 30
    assert result.total_fetched == 100
    assert result.total_matched_upstream == 200


async def test_short_page_ends_paging(fake_api, rest_client) -> None:
    fake_api.repositories = make_items([500] * 150)

    result = await rest_client.h_index("rust", "2020-01-01")

    assert len(fake_api.requests_to(SEARCH)) == 2
    assert result.value == 150


def test_boundary_settled_rules() -> None:
    items = make_items([3, 3, 3, 1, 1, 1, 1, 1, 1])

    assert boundary_settled(items, 3, 100, ScoreField.STARS)
    # fewer than 3*h items and upstream not exhausted
    assert not boundary_settled(items[:6], 3, 100, ScoreField.STARS)
    # ... unless every upstream match is held
    assert boundary_settled(items[:6], 3, 6, ScoreField.STARS)
    # boundary item above the index
    assert not boundary_settled(make_items([9, 9, 9] + [1] * 6), 3, 100, ScoreField.STARS)
    assert not boundary_settled(items, 0, 100, ScoreField.STARS)


async def test_upstream_error(fake_api, rest_client) -> None:
    fake_api.fail_term("rust", status=500, message="boom")

    with pytest.raises(UpstreamError) as exc_info:
        await rest_client.h_index("rust", "2020-01-01")

    assert exc_info.value.status == 500
    assert "boom" in exc_info.value.message
    assert not isinstance(exc_info.value, RateLimitedError)


async def test_rate_limited(fake_api, rest_client) -> None:
    fake_api.fail_term("rust", status=403, message="API rate limit exceeded")

    with pytest.raises(RateLimitedError) as exc_info:
        await rest_client.h_index("rust", "2020-01-01")

    assert exc_info.value.status == 403
    assert exc_info.value.reset_at == 1700000000
    # no retry
    assert len(fake_api.requests_to(SEARCH)) == 1


async def test_counts(fake_api, rest_client, sample_items) -> None:
    fake_api.repositories = sample_items
    fake_api.total_count = 4321
    fake_api.counts = {"rust created:>2020-01-01 is:pr": 77}

    assert await rest_client.strategy.fetch_count("rust", "2020-01-01", "repositories") == 4321
    assert await rest_client.strategy.fetch_count("rust", "2020-01-01", "pull_requests") == 77

    pr_request = fake_api.requests_to("/search/issues")[0]
    assert pr_request.params["q"] == "rust created:>2020-01-01 is:pr"
    assert pr_request.params["per_page"] == "1"


async def test_discussions_need_credential(rest_client) -> None:
    with pytest.raises(PreconditionError):
        await rest_client.strategy.fetch_count("rust", "2020-01-01", "discussions")
