"""prflow testing utilities.

Provides a scripted GitHub API, a scripted prompter and payload helpers for
testing code built on prflow.
"""

from prflow.testing.fixtures import (
    TEST_TOKEN,
    create_content_payload,
    create_pull_request_payload,
    create_ref_payload,
    create_repository_payload,
)
from prflow.testing.mock import MockCall, MockGitHub, MockResponse, ScriptedPrompter

__all__ = [
    # Mock API
    "MockGitHub",
    "MockCall",
    "MockResponse",
    "ScriptedPrompter",
    # Helper functions
    "TEST_TOKEN",
    "create_repository_payload",
    "create_ref_payload",
    "create_content_payload",
    "create_pull_request_payload",
]
