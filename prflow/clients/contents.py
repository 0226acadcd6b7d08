"""Repository contents resource client."""

import base64
import binascii
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from prflow.clients._paths import repo_path
from prflow.exceptions import (
    ParseError,
    TransportError,
    UserDeclinedError,
    error_for_outcome,
)
from prflow.logging import get_logger
from prflow.outcome import classify
from prflow.types.contents import FileHandle, PublishResult, PublishStatus

if TYPE_CHECKING:
    from prflow.transport import HTTPTransport, RawResponse

logger = get_logger("contents")

OverwriteDecision = Callable[[str, str], bool]


def encode_content(content: bytes | str) -> str:
    """Standard base64 of the raw bytes; text is UTF-8 encoded first."""
    if isinstance(content, str):
        content = content.encode("utf-8")
    return base64.b64encode(content).decode("ascii")


def decode_content(encoded: str) -> bytes:
    """
    Decode base64 content as returned by the contents API.

    GitHub wraps returned content at 60 characters, so whitespace is ignored.

    Raises:
        ParseError: If the content is not valid base64
    """
    try:
        return base64.b64decode("".join(encoded.split()), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ParseError("INVALID_CONTENT", f"Content is not valid base64: {e}") from e


def _blob_sha(data: Any) -> str | None:
    if isinstance(data, dict) and isinstance(data.get("sha"), str) and data["sha"]:
        return data["sha"]
    return None


class ContentsClient:
    """Client for reading and writing single files on a branch."""

    def __init__(self, transport: "HTTPTransport") -> None:
        """
        Initialize the contents client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    def check_exists(
        self, owner: str, repo: str, branch: str, path: str, token: str
    ) -> str | None:
        """
        Return the blob SHA of a file on a branch, or None if it is absent.

        A missing file is the common case, so no response here is treated
        as a failure: any non-success status, an unreadable payload or a
        network error yields None.
        """
        try:
            response = self._get(owner, repo, branch, path, token)
        except TransportError as e:
            logger.warning("Could not check whether %s exists: %s", path, e.message)
            return None

        if not classify(response.status_code).is_success:
            return None

        try:
            return _blob_sha(response.json())
        except ParseError:
            return None

    def get_file(
        self, owner: str, repo: str, branch: str, path: str, token: str
    ) -> FileHandle:
        """
        Fetch the current handle of a file on a branch.

        Raises:
            NotFoundError: If the file does not exist
            ParseError: If the payload carries no blob SHA
        """
        response = self._get(owner, repo, branch, path, token)
        outcome = classify(response.status_code)
        if not outcome.is_success:
            raise error_for_outcome(
                f"fetching details of {path}", outcome, response.status_code, response.text
            )

        sha = _blob_sha(response.json())
        if sha is None:
            raise ParseError(
                "INVALID_CONTENT",
                f"No blob SHA in contents payload for {path}",
                response.status_code,
                response.text,
            )
        return FileHandle(path=path, sha=sha)

    def create_file(
        self,
        owner: str,
        repo: str,
        branch: str,
        path: str,
        content: bytes | str,
        token: str,
        message: str | None = None,
    ) -> PublishResult:
        """
        Add a new file to a branch.

        Raises:
            PrflowError: On any non-success response
        """
        body = {
            "message": message or f"Add {path}",
            "content": encode_content(content),
            "branch": branch,
        }
        response = self._put(owner, repo, path, body, token)
        outcome = classify(response.status_code)
        if not outcome.is_success:
            raise error_for_outcome(
                f"adding file {path}", outcome, response.status_code, response.text
            )

        logger.info("File %s added to branch %s", path, branch)
        return PublishResult(
            path=path,
            branch=branch,
            status=PublishStatus.CREATED,
            sha=self._new_sha(response),
        )

    def replace_file(
        self,
        owner: str,
        repo: str,
        branch: str,
        path: str,
        content: bytes | str,
        token: str,
        message: str | None = None,
    ) -> PublishResult:
        """
        Replace an existing file on a branch.

        The blob SHA is fetched again right before writing; a stale SHA
        makes GitHub reject the update.

        Raises:
            PrflowError: If the file cannot be fetched or the update fails
        """
        current = self.get_file(owner, repo, branch, path, token)

        body = {
            "message": message or f"Update {path}",
            "content": encode_content(content),
            "branch": branch,
            "sha": current.sha,
        }
        response = self._put(owner, repo, path, body, token)
        outcome = classify(response.status_code)
        if not outcome.is_success:
            raise error_for_outcome(
                f"updating file {path}", outcome, response.status_code, response.text
            )

        logger.info("File %s updated in branch %s", path, branch)
        return PublishResult(
            path=path,
            branch=branch,
            status=PublishStatus.REPLACED,
            sha=self._new_sha(response),
        )

    def publish_file(
        self,
        owner: str,
        repo: str,
        branch: str,
        path: str,
        content: bytes | str,
        token: str,
        overwrite: OverwriteDecision | None = None,
        message: str | None = None,
    ) -> PublishResult:
        """
        Create a file on a branch, or replace it if it already exists.

        Args:
            owner: Repository owner login
            repo: Repository name
            branch: Target branch
            path: File path inside the repository
            content: File content (text is UTF-8 encoded)
            token: GitHub bearer token
            overwrite: Asked with (path, branch) when the file exists;
                declining is the default
            message: Optional commit message

        Returns:
            PublishResult telling whether the file was created or replaced

        Raises:
            UserDeclinedError: If the file exists and overwriting was declined
            PrflowError: On any failed request
        """
        existing_sha = self.check_exists(owner, repo, branch, path, token)
        if existing_sha is None:
            return self.create_file(owner, repo, branch, path, content, token, message)

        logger.info("File %s already exists in branch %s", path, branch)
        if overwrite is None or not overwrite(path, branch):
            raise UserDeclinedError(
                f"{path} was not published: it already exists in branch {branch} "
                "and replacing it was declined"
            )

        return self.replace_file(owner, repo, branch, path, content, token, message)

    def _get(
        self, owner: str, repo: str, branch: str, path: str, token: str
    ) -> "RawResponse":
        return self.transport.request(
            "GET",
            repo_path(owner, repo, "contents", path),
            token,
            params={"ref": branch},
        )

    def _put(
        self, owner: str, repo: str, path: str, body: dict[str, Any], token: str
    ) -> "RawResponse":
        return self.transport.request(
            "PUT", repo_path(owner, repo, "contents", path), token, body=body
        )

    @staticmethod
    def _new_sha(response: "RawResponse") -> str | None:
        try:
            data = response.json()
        except ParseError:
            return None
        return _blob_sha(data.get("content")) if isinstance(data, dict) else None
