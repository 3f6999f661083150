"""GraphQL documents for repository search and aliased count batches."""

from collections.abc import Mapping
from dataclasses import dataclass

from ghindex.strategies.base import check_item_type

SEARCH_PAGE_QUERY = """
query($searchQuery: String!, $first: Int!, $after: String) {
  search(query: $searchQuery, type: REPOSITORY, first: $first, after: $after) {
    repositoryCount
    pageInfo {
      hasNextPage
      endCursor
    }
    nodes {
      ... on Repository {
        id
        name
        owner {
          login
        }
        url
        stargazerCount
        forkCount
        createdAt
      }
    }
  }
}
"""

# item type -> (search type, extra qualifier, count field)
_COUNT_SHAPES = {
    "repositories": ("REPOSITORY", "", "repositoryCount"),
    "pull_requests": ("ISSUE", " is:pr", "issueCount"),
    "issues": ("ISSUE", " is:issue", "issueCount"),
    "discussions": ("DISCUSSION", "", "discussionCount"),
}


@dataclass(frozen=True)
class CountQuery:
    """One count-only sub-query of a batch."""

    predicate: str
    item_type: str = "repositories"

    def __post_init__(self) -> None:
        check_item_type(self.item_type)

    @property
    def search_type(self) -> str:
        return _COUNT_SHAPES[self.item_type][0]

    @property
    def search_query(self) -> str:
        return self.predicate + _COUNT_SHAPES[self.item_type][1]

    @property
    def count_field(self) -> str:
        return _COUNT_SHAPES[self.item_type][2]


def build_count_batch(queries: Mapping[str, CountQuery]) -> tuple[str, dict[str, str]]:
    """
    Build one document holding every query of ``queries`` under its alias.

    Each sub-query gets its own ``$q_<alias>`` variable, so search terms are
    never spliced into the document text.

    Returns:
        The document and its variables
    """
    declarations = []
    selections = []
    variables: dict[str, str] = {}

    for alias, query in queries.items():
        var = f"q_{alias}"
        declarations.append(f"${var}: String!")
        selections.append(
            f"  {alias}: search(query: ${var}, type: {query.search_type}, first: 0) "
            f"{{ {query.count_field} }}"
        )
        variables[var] = query.search_query

    document = "query(" + ", ".join(declarations) + ") {\n" + "\n".join(selections) + "\n}"
    return document, variables
