"""
Configuration and credential loading.

The token is read from a JSON file (`{"githubToken": "..."}`) or from the
environment. Operations never read configuration themselves; they receive the
token from a CredentialProvider owned by the caller.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from prflow.exceptions import ConfigurationError
from prflow.logging import get_logger, mask_token
from prflow.transport import DEFAULT_BASE_URL

logger = get_logger("config")

DEFAULT_CONFIG_PATH = "config.json"
DEFAULT_TIMEOUT = 30.0


def _get(data: dict[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    """Get value from dict, trying camelCase first then snake_case."""
    return data.get(camel) if camel in data else data.get(snake, default)


@dataclass
class Config:
    """prflow settings."""

    github_token: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_file(cls, path: str | Path) -> "Config":
        """
        Load configuration from a JSON file.

        Keys:
            githubToken: GitHub personal access token (required)
            baseUrl: API base URL (optional, default: https://api.github.com)
            timeout: Request timeout in seconds (optional, default: 30)

        Raises:
            ConfigurationError: If the file is missing, unreadable or has no token
        """
        path = Path(path)
        if not path.exists():
            raise ConfigurationError(f"Config file was not found: {path.absolute()}")

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise ConfigurationError(f"Could not read config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a JSON object")

        token = _get(data, "githubToken", "github_token")
        if not isinstance(token, str) or not token.strip():
            raise ConfigurationError(f"githubToken is missing in {path}")

        return cls(
            github_token=token.strip(),
            base_url=_get(data, "baseUrl", "base_url", DEFAULT_BASE_URL),
            timeout=_parse_timeout(data.get("timeout", DEFAULT_TIMEOUT)),
        )

    @classmethod
    def from_env(cls) -> "Config":
        """
        Load configuration from environment variables.

        Environment variables:
            GITHUB_TOKEN: GitHub personal access token (required)
            PRFLOW_BASE_URL: API base URL (optional, default: https://api.github.com)
            PRFLOW_TIMEOUT: Request timeout in seconds (optional, default: 30)

        Raises:
            ConfigurationError: If GITHUB_TOKEN is not set
        """
        token = os.environ.get("GITHUB_TOKEN", "").strip()
        if not token:
            raise ConfigurationError("GITHUB_TOKEN environment variable not set")

        return cls(
            github_token=token,
            base_url=os.environ.get("PRFLOW_BASE_URL", DEFAULT_BASE_URL),
            timeout=_parse_timeout(os.environ.get("PRFLOW_TIMEOUT", DEFAULT_TIMEOUT)),
        )


def _parse_timeout(value: Any) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid timeout: {value!r}") from e
    if timeout <= 0:
        raise ConfigurationError(f"Timeout must be positive, got {timeout}")
    return timeout


def load_config(path: str | Path | None = None) -> Config:
    """
    Load configuration, preferring a config file over the environment.

    The file is `path`, else $PRFLOW_CONFIG, else ./config.json. An explicitly
    requested file must exist; the default file falls back to the environment.
    """
    explicit = path or os.environ.get("PRFLOW_CONFIG")
    config_path = Path(explicit or DEFAULT_CONFIG_PATH)

    if explicit or config_path.exists():
        return Config.from_file(config_path)
    return Config.from_env()


class CredentialProvider(Protocol):
    """Supplies the bearer token and reloads it on demand."""

    def get_token(self) -> str: ...

    def reload(self) -> str: ...


class StaticCredentialProvider:
    """A fixed token, e.g. passed on the command line or in tests."""

    def __init__(self, token: str) -> None:
        if not token:
            raise ConfigurationError("GitHub token must not be empty")
        self._token = token

    def get_token(self) -> str:
        return self._token

    def reload(self) -> str:
        return self._token


class FileCredentialProvider:
    """Token loaded with load_config(); reload() reads the source again."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = path
        self.config: Config | None = None
        self._token: str | None = None

    def get_token(self) -> str:
        if self._token is None:
            return self.reload()
        return self._token

    def reload(self) -> str:
        self.config = load_config(self.path)
        self._token = self.config.github_token
        logger.debug("Loaded GitHub token %s", mask_token(self._token))
        return self._token
