"""prflow resource clients."""

from prflow.clients.contents import ContentsClient
from prflow.clients.pulls import PullsClient
from prflow.clients.refs import RefsClient
from prflow.clients.repos import ReposClient

__all__ = [
    "ReposClient",
    "RefsClient",
    "ContentsClient",
    "PullsClient",
]
