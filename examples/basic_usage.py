#!/usr/bin/env python3
"""
Basic ghindex usage example.

Compares the popularity of a few search terms and, when GITHUB_TOKEN is set,
their yearly repository counts.
Run with: python examples/basic_usage.py
"""

import asyncio
import logging

from ghindex import GHIndexError, HIndexClient, TermError, configure_logging, generate_windows
from ghindex.report import sort_comparisons

TERMS = ["fastapi", "flask", "django"]
CREATED_AFTER = "2020-01-01"


async def main() -> None:
    configure_logging(level=logging.INFO)

    async with HIndexClient.from_env() as client:
        print(f"Using {client!r}\n")

        # 1. Comparative H-Index table
        print("1. H-Index comparison...")
        results = await client.compare_many(TERMS, CREATED_AFTER)
        for row in sort_comparisons(results, "star_h_index", descending=True):
            print(
                f"   {row.term:<10} stars h={row.star_h_index:<4} forks h={row.fork_h_index:<4}"
                f" repos={row.total_repos} prs={row.total_prs} discussions={row.total_discussions}"
            )
        for term, outcome in results.items():
            if isinstance(outcome, TermError):
                print(f"   {term:<10} failed: {outcome.message}")

        # 2. Yearly trend (token required)
        if not client.has_credential:
            print("\n2. Skipping trends: set GITHUB_TOKEN to enable them")
            return

        print("\n2. Yearly repository counts...")
        windows = generate_windows(2019, 2024, "year")
        try:
            series = await client.trends(TERMS, windows)
        except GHIndexError as e:
            print(f"   Trend request failed: {e}")
            return

        for term, points in series.succeeded.items():
            counts = ", ".join(f"{p.period_label}: {p.repository_count}" for p in points)
            print(f"   {term:<10} {counts}")
        for term, error in series.errors.items():
            print(f"   {term:<10} failed: {error.message}")


if __name__ == "__main__":
    asyncio.run(main())
