"""ghindex - H-Index and trend analysis for GitHub search queries."""

from ghindex.client import HIndexClient
from ghindex.exceptions import (
    ConfigurationError,
    GHIndexError,
    PreconditionError,
    RateLimitedError,
    UpstreamError,
    ValidationError,
)
from ghindex.hindex import compute_h_index, merge_items, rank_items, top_items
from ghindex.logging import configure_logging, get_logger
from ghindex.report import ComparisonBuilder, sort_comparisons
from ghindex.strategies import (
    FetchStrategy,
    GraphQLFetchStrategy,
    RestFetchStrategy,
    select_strategy,
)
from ghindex.transport import GitHubTransport
from ghindex.trends import TrendAggregator
from ghindex.types import (
    AggregateCounts,
    ComparativeResult,
    HIndexResult,
    ScoredItem,
    ScoreField,
    TermError,
    TimeWindow,
    TrendPoint,
    TrendSeries,
)
from ghindex.windows import format_period_label, generate_windows, is_leap_year

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Main Client
    "HIndexClient",
    # Core algorithms
    "compute_h_index",
    "rank_items",
    "merge_items",
    "top_items",
    "generate_windows",
    "format_period_label",
    "is_leap_year",
    # Orchestration
    "ComparisonBuilder",
    "sort_comparisons",
    "TrendAggregator",
    # Strategies
    "FetchStrategy",
    "RestFetchStrategy",
    "GraphQLFetchStrategy",
    "select_strategy",
    # Transport
    "GitHubTransport",
    # Types
    "ScoredItem",
    "ScoreField",
    "HIndexResult",
    "AggregateCounts",
    "ComparativeResult",
    "TermError",
    "TimeWindow",
    "TrendPoint",
    "TrendSeries",
    # Exceptions
    "GHIndexError",
    "UpstreamError",
    "RateLimitedError",
    "PreconditionError",
    "ValidationError",
    "ConfigurationError",
    # Logging
    "configure_logging",
    "get_logger",
]
