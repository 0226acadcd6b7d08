"""
Pytest plugin for prflow testing fixtures.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["prflow.testing.conftest"]

Or import the fixtures directly:

    from prflow.testing.fixtures import mock_github, client
"""

# Re-export all fixtures for pytest auto-discovery
from prflow.testing.fixtures import (
    client,
    credentials,
    mock_github,
    prompter,
    token,
)

__all__ = [
    "mock_github",
    "client",
    "token",
    "credentials",
    "prompter",
]
