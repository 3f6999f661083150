"""Fetch strategy interface shared by the REST and GraphQL implementations."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ghindex.exceptions import ValidationError
from ghindex.types.items import ScoreField
from ghindex.types.results import HIndexResult

if TYPE_CHECKING:
    from ghindex.transport import GitHubTransport

# Largest page the search APIs serve
PAGE_SIZE = 100

ITEM_TYPES = ("repositories", "pull_requests", "issues", "discussions")


def build_predicate(term: str, created_after: str) -> str:
    """Search query for ``term`` restricted to items created after a date."""
    return f"{term} created:>{created_after}"


def check_item_type(item_type: str) -> None:
    if item_type not in ITEM_TYPES:
        raise ValidationError(
            f"Unknown item type: {item_type}. Must be one of {', '.join(ITEM_TYPES)}"
        )


class FetchStrategy(ABC):
    """
    Source of ranked repositories and aggregate counts.

    One implementation is chosen per client from credential availability;
    the algorithms above this layer never branch on the transport.
    """

    api_type = "unknown"

    def __init__(self, transport: "GitHubTransport") -> None:
        """
        Initialize the strategy.

        Args:
            transport: Async transport for making requests
        """
        self.transport = transport

    @abstractmethod
    async def fetch_ranked(
        self,
        term: str,
        created_after: str,
        score_field: ScoreField,
        sort_key: str | None = None,
    ) -> HIndexResult:
        """
        Fetch repositories matching ``term`` in descending score order and
        estimate their H-Index, stopping once the index looks settled.

        Args:
            term: Free-text search term
            created_after: ISO date; only repositories created after it match
            score_field: Score the H-Index is computed over
            sort_key: Upstream sort key (default: the score field's own)

        Returns:
            HIndexResult for the fetched prefix of the result set

        Raises:
            UpstreamError: On any failed request
        """

    @abstractmethod
    async def fetch_count(self, term: str, created_after: str, item_type: str) -> int:
        """
        Count items of ``item_type`` matching ``term`` created after a date.

        Raises:
            PreconditionError: If the item type needs a credential this strategy lacks
            UpstreamError: On a failed request
            ValidationError: On an unknown item type
        """
