"""ghindex type definitions.

This module exports all data model types used by the package.
"""

from ghindex.types.items import ScoredItem, ScoreField
from ghindex.types.results import (
    AggregateCounts,
    ComparativeResult,
    HIndexResult,
    TermError,
)
from ghindex.types.trends import TimeWindow, TrendPoint, TrendSeries

__all__ = [
    # Items
    "ScoredItem",
    "ScoreField",
    # Results
    "HIndexResult",
    "AggregateCounts",
    "ComparativeResult",
    "TermError",
    # Trends
    "TimeWindow",
    "TrendPoint",
    "TrendSeries",
]
