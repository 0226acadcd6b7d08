"""URL path helpers for GitHub API endpoints."""

from urllib.parse import quote


def repo_path(owner: str, repo: str, *parts: str) -> str:
    """
    Build a /repos/{owner}/{repo}/... path with each segment escaped.

    Slashes inside parts are kept so branch names like "feature/x" and
    nested file paths resolve to the right resource.
    """
    segments = [quote(owner, safe=""), quote(repo, safe="")]
    segments.extend(quote(part.strip("/"), safe="/") for part in parts)
    return "/repos/" + "/".join(segments)
