"""
ghindex main client.

Provides the async interface for H-Index reports and trend analysis over
GitHub search.
"""

import os
from collections.abc import Sequence
from typing import Any

import httpx

from ghindex.exceptions import ConfigurationError
from ghindex.logging import truncate_token
from ghindex.report import ComparisonBuilder
from ghindex.strategies import FetchStrategy, select_strategy
from ghindex.transport import GitHubTransport
from ghindex.trends import TrendAggregator
from ghindex.types.items import ScoreField
from ghindex.types.results import ComparativeResult, HIndexResult, TermError
from ghindex.types.trends import TimeWindow, TrendSeries


class HIndexClient:
    """
    Async client for H-Index and trend analysis.

    The fetch strategy is chosen once, from whether a token was supplied:
    GraphQL with a token, REST without one.

    Example:
        ```python
        import asyncio
        from ghindex import HIndexClient, generate_windows

        async def main():
            async with HIndexClient.from_env() as client:
                result = await client.compare("fastapi", "2020-01-01")
                print(result.star_h_index, result.fork_h_index)

                windows = generate_windows(2019, 2023, "quarter")
                series = await client.trends(["fastapi", "flask"], windows)

        asyncio.run(main())
        ```
    """

    DEFAULT_BASE_URL = GitHubTransport.DEFAULT_BASE_URL
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        token: str | None = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            token: Optional GitHub bearer token; unlocks GraphQL, discussion
                counts and trend analysis
            base_url: Base URL for API requests (default: https://api.github.com)
            timeout: Request timeout in seconds (default: 30.0)
            transport: httpx transport override (optional, for testing)
        """
        self.base_url = base_url
        self.timeout = timeout

        self._transport = GitHubTransport(
            base_url=base_url,
            token=token,
            timeout=timeout,
            transport=transport,
        )

        self.strategy: FetchStrategy = select_strategy(self._transport)
        self.reports = ComparisonBuilder(self.strategy)
        self.trend_aggregator = TrendAggregator(self._transport)

    @classmethod
    def from_env(
        cls,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "HIndexClient":
        """
        Create a client from environment variables.

        Environment variables:
            GITHUB_TOKEN: GitHub bearer token (optional)
            GHINDEX_BASE_URL: Base URL for API (optional, default: https://api.github.com)
            GHINDEX_TIMEOUT: Request timeout in seconds (optional, default: 30)

        Raises:
            ConfigurationError: If GHINDEX_TIMEOUT is not a positive number
        """
        token = os.environ.get("GITHUB_TOKEN") or None
        base_url = os.environ.get("GHINDEX_BASE_URL", cls.DEFAULT_BASE_URL)
        timeout_str = os.environ.get("GHINDEX_TIMEOUT")

        timeout = cls.DEFAULT_TIMEOUT
        if timeout_str:
            try:
                timeout = float(timeout_str)
            except ValueError:
                raise ConfigurationError(
                    f"Invalid GHINDEX_TIMEOUT: {timeout_str}. Must be a number of seconds"
                ) from None
            if timeout <= 0:
                raise ConfigurationError(
                    f"Invalid GHINDEX_TIMEOUT: {timeout_str}. Must be positive"
                )

        return cls(token=token, base_url=base_url, timeout=timeout, transport=transport)

    @property
    def transport(self) -> GitHubTransport:
        """Get the underlying transport (for advanced use cases)."""
        return self._transport

    @property
    def has_credential(self) -> bool:
        return self._transport.has_credential

    async def h_index(
        self,
        term: str,
        created_after: str,
        score_field: ScoreField = ScoreField.STARS,
    ) -> HIndexResult:
        """Estimate the H-Index of one term over one score."""
        return await self.strategy.fetch_ranked(term, created_after, score_field)

    async def compare(self, term: str, created_after: str) -> ComparativeResult:
        """Star and fork H-Index with totals for one term."""
        return await self.reports.build_comparison(term, created_after)

    async def compare_many(
        self, terms: Sequence[str], created_after: str
    ) -> dict[str, ComparativeResult | TermError]:
        """Comparisons for several terms; failed terms become TermError."""
        return await self.reports.build_comparisons(terms, created_after)

    async def trends(
        self,
        terms: Sequence[str],
        windows: Sequence[TimeWindow],
        metric: str = "repositories",
    ) -> TrendSeries:
        """Time series per term. Requires a token."""
        return await self.trend_aggregator.compare_terms(terms, windows, metric)

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._transport.close()

    async def __aenter__(self) -> "HIndexClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def __repr__(self) -> str:
        token = truncate_token(self._transport._token) if self._transport._token else None
        return f"HIndexClient(base_url={self.base_url!r}, token={token!r}, strategy={self.strategy.api_type})"
