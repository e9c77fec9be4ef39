"""Tests for supercommit.settings: source precedence and aliases."""

from pathlib import Path

import pytest
import tomlkit

import supercommit.settings as settings_module
from supercommit.settings import get_settings


def _write_config(config: dict) -> Path:
    config_path = settings_module.CONFIG_PATH
    config_path.write_text(tomlkit.dumps(config))
    settings_module._load_toml.cache_clear()
    return config_path


class TestDefaults:
    def test_no_config_file(self) -> None:
        s = get_settings()
        assert s.commit_message is None
        assert s.github_output is None
        assert s.fill_today is False
        assert s.skip_merge_commits is True
        assert s.log_level is None


class TestTomlSource:
    def test_values_read(self) -> None:
        _write_config({"fill_today": True, "skip_merge_commits": False, "log_level": "debug"})
        s = get_settings()
        assert s.fill_today is True
        assert s.skip_merge_commits is False
        assert s.log_level == "debug"

    def test_unknown_keys_ignored(self) -> None:
        _write_config({"jira_url": "https://example.atlassian.net", "fill_today": True})
        assert get_settings().fill_today is True

    def test_env_overrides_toml(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _write_config({"fill_today": True})
        monkeypatch.setenv("SUPERCOMMIT_FILL_TODAY", "false")
        assert get_settings().fill_today is False


class TestEnv:
    def test_ci_names(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("COMMIT_MESSAGE", "ABC-1 STATUS:Done")
        monkeypatch.setenv("GITHUB_OUTPUT", str(tmp_path / "out.txt"))
        s = get_settings()
        assert s.commit_message == "ABC-1 STATUS:Done"
        assert s.github_output == tmp_path / "out.txt"

    def test_prefixed_names(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SUPERCOMMIT_COMMIT_MESSAGE", "ABC-2")
        monkeypatch.setenv("SUPERCOMMIT_SKIP_MERGE_COMMITS", "0")
        s = get_settings()
        assert s.commit_message == "ABC-2"
        assert s.skip_merge_commits is False

    def test_dotenv_in_cwd(self) -> None:
        Path(".env").write_text("SUPERCOMMIT_LOG_LEVEL=INFO\n")
        assert get_settings().log_level == "INFO"


class TestOverrides:
    def test_override_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COMMIT_MESSAGE", "ABC-1")
        assert get_settings(commit_message="XYZ-9").commit_message == "XYZ-9"

    def test_none_override_falls_through(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COMMIT_MESSAGE", "ABC-1")
        assert get_settings(commit_message=None).commit_message == "ABC-1"
