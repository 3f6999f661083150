"""
Pytest plugin for ghindex testing fixtures.

This module re-exports all fixtures from fixtures.py so they can be
automatically discovered by pytest. To use them in your tests, add this to
your conftest.py:

    pytest_plugins = ["ghindex.testing.conftest"]
"""

# Re-export all fixtures for pytest auto-discovery
from ghindex.testing.fixtures import (
    fake_api,
    graphql_client,
    rest_client,
    sample_items,
)

__all__ = [
    "fake_api",
    "rest_client",
    "graphql_client",
    "sample_items",
]
