"""ghindex testing utilities.

Provides a fake GitHub API and fixtures for testing code that uses ghindex.
"""

from ghindex.testing.fixtures import TEST_TOKEN, create_mock_item, make_items
from ghindex.testing.mock import FakeGitHubAPI, RecordedRequest

__all__ = [
    # Fake API
    "FakeGitHubAPI",
    "RecordedRequest",
    # Helper functions
    "create_mock_item",
    "make_items",
    "TEST_TOKEN",
]
