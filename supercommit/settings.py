"""Settings resolution: init kwargs, env vars, .env, then ~/.config/supercommit/config.toml."""

from functools import lru_cache
from pathlib import Path
from typing import Any

import tomlkit
from pydantic import AliasChoices, Field
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

CONFIG_PATH = Path.home() / ".config" / "supercommit" / "config.toml"


@lru_cache(maxsize=1)
def _load_toml() -> dict[str, Any]:
    """Load ~/.config/supercommit/config.toml as plain python values, empty if missing."""
    if not CONFIG_PATH.exists():
        return {}
    with CONFIG_PATH.open() as fh:
        return tomlkit.load(fh).unwrap()


class TomlConfigSource(PydanticBaseSettingsSource):
    """Lowest-priority source backed by the user config file."""

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return _load_toml().get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        config = _load_toml()
        return {name: config[name] for name in self.settings_cls.model_fields if name in config}


class SupercommitSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SUPERCOMMIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Commit message fed by CI when no argument is given
    commit_message: str | None = Field(
        default=None,
        validation_alias=AliasChoices("commit_message", "SUPERCOMMIT_COMMIT_MESSAGE", "COMMIT_MESSAGE"),
    )
    # GitHub Actions step-output file
    github_output: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("github_output", "SUPERCOMMIT_GITHUB_OUTPUT", "GITHUB_OUTPUT"),
    )

    fill_today: bool = False  # LOG without a date gets today's date
    skip_merge_commits: bool = True
    log_level: str | None = None  # overrides -v when set

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return init_settings, env_settings, dotenv_settings, TomlConfigSource(settings_cls)


def get_settings(**overrides: Any) -> SupercommitSettings:
    """Return settings, with explicit overrides taking precedence over every source.

    None-valued overrides are dropped so CLI options left unset fall through.
    """
    return SupercommitSettings(**{k: v for k, v in overrides.items() if v is not None})
