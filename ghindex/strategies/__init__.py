"""ghindex fetch strategies.

Two interchangeable sources of ranked repositories: the REST search API
(no credential needed) and the GraphQL search API (credential required,
supports batched counts).
"""

from typing import TYPE_CHECKING

from ghindex.strategies.base import FetchStrategy, build_predicate
from ghindex.strategies.graphql import GraphQLFetchStrategy
from ghindex.strategies.queries import CountQuery
from ghindex.strategies.rest import RestFetchStrategy

if TYPE_CHECKING:
    from ghindex.transport import GitHubTransport


def select_strategy(transport: "GitHubTransport") -> FetchStrategy:
    """GraphQL when the transport carries a credential, REST otherwise."""
    if transport.has_credential:
        return GraphQLFetchStrategy(transport)
    return RestFetchStrategy(transport)


__all__ = [
    "FetchStrategy",
    "RestFetchStrategy",
    "GraphQLFetchStrategy",
    "CountQuery",
    "build_predicate",
    "select_strategy",
]
