"""
Tests for trend aggregation across terms and windows.

Feature: trend-aggregator
"""

from datetime import date

import pytest

from ghindex.exceptions import PreconditionError, ValidationError
from ghindex.testing import make_items
from ghindex.types.items import ScoreField
from ghindex.types.results import TermError
from ghindex.types.trends import TimeWindow, TrendSeries
from ghindex.windows import generate_windows

WINDOWS = generate_windows(2020, 2021, "year", today=date(2024, 1, 1))


async def test_requires_credential_before_any_request(fake_api, rest_client) -> None:
    with pytest.raises(PreconditionError):
        await rest_client.trends(["rust"], WINDOWS)

    assert fake_api.calls == []


async def test_one_batched_request_per_term(fake_api, graphql_client) -> None:
    fake_api.counts = {
        "rust created:2020-01-01..2020-12-31": 100,
        "rust created:2021-01-01..2021-12-31": 150,
        "go created:2020-01-01..2020-12-31": 80,
        "go created:2021-01-01..2021-12-31": 90,
    }

    series = await graphql_client.trends(["rust", "go"], WINDOWS)

    assert isinstance(series, TrendSeries)
    assert list(series) == ["rust", "go"]
    assert [p.repository_count for p in series["rust"]] == [100, 150]
    assert [p.repository_count for p in series["go"]] == [80, 90]
    assert [p.period_label for p in series["rust"]] == ["2020", "2021"]
    assert series["rust"][0].window == WINDOWS[0]
    assert series["rust"][0].pull_request_count is None
    assert series["rust"][0].issue_count is None
    assert len(fake_api.requests_to("/graphql")) == 2


async def test_failed_term_does_not_abort_others(fake_api, graphql_client) -> None:
    fake_api.fail_term("A", status=502, message="Bad Gateway")

    series = await graphql_client.trends(["A", "B"], WINDOWS)

    assert isinstance(series["A"], TermError)
    assert series["A"].term == "A"
    assert "Bad Gateway" in series["A"].message
    assert not isinstance(series["B"], TermError)
    assert len(series["B"]) == len(WINDOWS)
    assert list(series.errors) == ["A"]
    assert list(series.succeeded) == ["B"]


async def test_graphql_errors_are_isolated(fake_api, graphql_client) -> None:
    fake_api.graphql_error_for("A", "rate limit")

    series = await graphql_client.trends(["A", "B"], WINDOWS)

    assert series["A"].code == "GRAPHQL_ERROR"
    assert not isinstance(series["B"], TermError)


async def test_all_metric_adds_prs_and_issues(fake_api, graphql_client) -> None:
    fake_api.counts = {
        "rust created:2020-01-01..2020-12-31 is:pr": 7,
        "rust created:2020-01-01..2020-12-31 is:issue": 3,
    }

    points = await graphql_client.trend_aggregator.fetch_time_series("rust", WINDOWS, "all")

    assert points[0].pull_request_count == 7
    assert points[0].issue_count == 3
    assert points[1].pull_request_count == 0

    document = fake_api.requests_to("/graphql")[0].body["query"]
    assert "period0_prs:" in document
    assert "period1_issues:" in document


async def test_prs_metric_only(fake_api, graphql_client) -> None:
    points = await graphql_client.trend_aggregator.fetch_time_series("rust", WINDOWS, "prs")

    assert points[0].pull_request_count == 0
    assert points[0].issue_count is None


async def test_invalid_metric(graphql_client) -> None:
    with pytest.raises(ValidationError):
        await graphql_client.trends(["rust"], WINDOWS, metric="stars")


async def test_no_windows_no_requests(fake_api, graphql_client) -> None:
    series = await graphql_client.trends(["rust"], [])

    assert series["rust"] == ()
    assert fake_api.calls == []


async def test_series_is_read_only(graphql_client) -> None:
    series = await graphql_client.trends(["rust"], WINDOWS)

    with pytest.raises(TypeError):
        series["go"] = ()  # type: ignore[index]


async def test_windowed_h_index(fake_api, graphql_client, rest_client) -> None:
    fake_api.repositories = make_items([5, 5, 5, 1])
    window = TimeWindow(date(2020, 1, 1), date(2020, 12, 31))

    result = await graphql_client.trend_aggregator.windowed_h_index("rust", window, ScoreField.STARS)
    assert result.value == 3

    with pytest.raises(PreconditionError):
        await rest_client.trend_aggregator.windowed_h_index("rust", window)


async def test_garbled_reply_fails_only_that_term(fake_api, graphql_client) -> None:
    fake_api.garble_term("A")

    series = await graphql_client.trends(["A", "B"], WINDOWS)

    assert isinstance(series["A"], TermError)
    assert series["A"].code == "UPSTREAM_ERROR"
    assert "Invalid JSON" in series["A"].message
    assert list(series.succeeded) == ["B"]
    assert len(series["B"]) == len(WINDOWS)
