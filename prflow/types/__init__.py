"""prflow type definitions.

This module exports all data model types used by prflow.
"""

from prflow.types.contents import FileHandle, PublishResult, PublishStatus
from prflow.types.pulls import (
    PullRequest,
    PullRequestDescriptor,
    PullRequestResult,
    PullRequestStatus,
)
from prflow.types.refs import (
    BranchCreation,
    BranchRef,
    BranchStatus,
    ExistingBranchAction,
    ExistingBranchDecision,
)
from prflow.types.repos import Owner, Repository

__all__ = [
    # Repository types
    "Owner",
    "Repository",
    # Branch types
    "BranchRef",
    "BranchCreation",
    "BranchStatus",
    "ExistingBranchAction",
    "ExistingBranchDecision",
    # Content types
    "FileHandle",
    "PublishResult",
    "PublishStatus",
    # Pull request types
    "PullRequest",
    "PullRequestDescriptor",
    "PullRequestResult",
    "PullRequestStatus",
]
