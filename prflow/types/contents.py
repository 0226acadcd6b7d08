"""Repository content data models."""

from dataclasses import dataclass
from enum import Enum


@dataclass
class FileHandle:
    """A file path and, when the file exists on the branch, its blob SHA."""

    path: str
    sha: str | None = None

    @property
    def exists(self) -> bool:
        return self.sha is not None


class PublishStatus(str, Enum):
    CREATED = "created"
    REPLACED = "replaced"


@dataclass
class PublishResult:
    """Result of writing a file to a branch."""

    path: str
    branch: str
    status: PublishStatus
    sha: str | None = None  # Blob SHA of the new content, when returned
