"""
Tests for configuration loading and credential providers.

Feature: prflow
"""

import json
from pathlib import Path

import pytest

from prflow.config import (
    Config,
    FileCredentialProvider,
    StaticCredentialProvider,
    load_config,
)
from prflow.exceptions import ConfigurationError
from prflow.transport import DEFAULT_BASE_URL


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in ("GITHUB_TOKEN", "PRFLOW_BASE_URL", "PRFLOW_TIMEOUT", "PRFLOW_CONFIG"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def write_config(path: Path, data: object) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestConfigFile:
    """Tests for Config.from_file."""

    def test_reads_token(self, tmp_path: Path) -> None:
        path = write_config(tmp_path / "config.json", {"githubToken": " ghp_abc "})

        config = Config.from_file(path)

        assert config.github_token == "ghp_abc"
        assert config.base_url == DEFAULT_BASE_URL
        assert config.timeout == 30.0

    def test_reads_optional_keys(self, tmp_path: Path) -> None:
        path = write_config(
            tmp_path / "config.json",
            {"github_token": "t", "baseUrl": "https://ghe.example.com/api/v3", "timeout": 5},
        )

        config = Config.from_file(path)

        assert config.github_token == "t"
        assert config.base_url == "https://ghe.example.com/api/v3"
        assert config.timeout == 5.0

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="not found"):
            Config.from_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text("{githubToken:", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            Config.from_file(path)

    @pytest.mark.parametrize("data", [[], {"githubToken": ""}, {"other": "x"}, {"githubToken": 5}])
    def test_missing_token(self, tmp_path: Path, data: object) -> None:
        path = write_config(tmp_path / "config.json", data)

        with pytest.raises(ConfigurationError):
            Config.from_file(path)

    @pytest.mark.parametrize("timeout", [0, -1, "soon"])
    def test_invalid_timeout(self, tmp_path: Path, timeout: object) -> None:
        path = write_config(tmp_path / "config.json", {"githubToken": "t", "timeout": timeout})

        with pytest.raises(ConfigurationError):
            Config.from_file(path)


class TestLoadConfig:
    """Tests for load_config source selection."""

    def test_default_file_wins_over_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        write_config(tmp_path / "config.json", {"githubToken": "from-file"})
        monkeypatch.setenv("GITHUB_TOKEN", "from-env")

        assert load_config().github_token == "from-file"

    def test_environment_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GITHUB_TOKEN", "from-env")
        monkeypatch.setenv("PRFLOW_TIMEOUT", "12.5")

        config = load_config()

        assert config.github_token == "from-env"
        assert config.timeout == 12.5

    def test_nothing_configured(self) -> None:
        with pytest.raises(ConfigurationError, match="GITHUB_TOKEN"):
            load_config()

    def test_explicit_file_must_exist(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GITHUB_TOKEN", "from-env")

        with pytest.raises(ConfigurationError):
            load_config(tmp_path / "elsewhere.json")

    def test_config_path_from_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = write_config(tmp_path / "custom.json", {"githubToken": "custom"})
        monkeypatch.setenv("PRFLOW_CONFIG", str(path))

        assert load_config().github_token == "custom"


class TestCredentialProviders:
    """Tests for credential providers."""

    def test_static_provider(self) -> None:
        provider = StaticCredentialProvider("t")

        assert provider.get_token() == "t"
        assert provider.reload() == "t"

    def test_static_provider_rejects_empty_token(self) -> None:
        with pytest.raises(ConfigurationError):
            StaticCredentialProvider("")

    def test_file_provider_reload_reads_again(self, tmp_path: Path) -> None:
        path = write_config(tmp_path / "config.json", {"githubToken": "first"})
        provider = FileCredentialProvider(path)

        assert provider.get_token() == "first"

        write_config(path, {"githubToken": "second"})
        assert provider.get_token() == "first"
        assert provider.reload() == "second"
        assert provider.get_token() == "second"
        assert provider.config is not None and provider.config.github_token == "second"
