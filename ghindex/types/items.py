"""Repository and score-field models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class ScoreField(Enum):
    """Integer repository attribute an H-Index is computed over."""

    STARS = "stars"
    FORKS = "forks"

    @property
    def rest_key(self) -> str:
        """Key of the score in a REST search item."""
        return "stargazers_count" if self is ScoreField.STARS else "forks_count"

    @property
    def sort_key(self) -> str:
        """Value of the REST ``sort`` parameter that orders by this score."""
        return self.value

    @property
    def graphql_field(self) -> str:
        """Name of the score on a GraphQL ``Repository`` node."""
        return "stargazerCount" if self is ScoreField.STARS else "forkCount"

    def score(self, item: "ScoredItem") -> int:
        return item.star_count if self is ScoreField.STARS else item.fork_count


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


@dataclass(frozen=True)
class ScoredItem:
    """
    A repository returned by a search, immutable once fetched.

    Equality and hashing use ``id`` only, so two snapshots of the same
    repository with different counts compare equal.
    """

    id: str
    name: str = field(compare=False)
    owner_login: str = field(compare=False)
    url: str = field(compare=False)
    star_count: int = field(compare=False)
    fork_count: int = field(compare=False)
    created_at: datetime | None = field(default=None, compare=False)

    @property
    def full_name(self) -> str:
        return f"{self.owner_login}/{self.name}"

    @classmethod
    def from_rest(cls, data: dict[str, Any]) -> "ScoredItem":
        """Build from an item of ``GET /search/repositories``."""
        return cls(
            id=str(data["id"]),
            name=data["name"],
            owner_login=(data.get("owner") or {}).get("login", ""),
            url=data.get("html_url", ""),
            star_count=data.get("stargazers_count", 0),
            fork_count=data.get("forks_count", 0),
            created_at=_parse_timestamp(data.get("created_at")),
        )

    @classmethod
    def from_graphql(cls, node: dict[str, Any]) -> "ScoredItem":
        """Build from a GraphQL ``Repository`` search node."""
        return cls(
            id=node["id"],
            name=node.get("name", ""),
            owner_login=(node.get("owner") or {}).get("login", ""),
            url=node.get("url", ""),
            star_count=node.get("stargazerCount", 0),
            fork_count=node.get("forkCount", 0),
            created_at=_parse_timestamp(node.get("createdAt")),
        )
