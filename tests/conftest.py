"""Shared test fixtures."""

from pathlib import Path

import pytest

import supercommit.settings as settings_module
from supercommit.models import ParsedDirectives

FULL_MESSAGE = "PAY-101 COMMENT:Refactor LOG:2.5h@2025-10-01 STATUS:In Progress PHASE:Development"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Point settings at an empty config and clear env that CI runners set."""
    monkeypatch.setattr(settings_module, "CONFIG_PATH", tmp_path / "config.toml")
    for var in (
        "COMMIT_MESSAGE",
        "GITHUB_OUTPUT",
        "SUPERCOMMIT_COMMIT_MESSAGE",
        "SUPERCOMMIT_GITHUB_OUTPUT",
        "SUPERCOMMIT_FILL_TODAY",
        "SUPERCOMMIT_SKIP_MERGE_COMMITS",
        "SUPERCOMMIT_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)  # keep a developer's .env out of the way
    settings_module._load_toml.cache_clear()
    yield
    settings_module._load_toml.cache_clear()


@pytest.fixture
def full_message() -> str:
    return FULL_MESSAGE


@pytest.fixture
def parsed_full() -> ParsedDirectives:
    return ParsedDirectives(
        issue="PAY-101",
        status="In Progress",
        log_hours=2.5,
        log_date="2025-10-01",
        comment="Refactor",
        phase="Development",
        ready=None,
        first_line=FULL_MESSAGE,
    )
