"""Settings resolution with profile precedence from ~/.config/pzt/config.toml."""

import os
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path

import tomlkit
import typer
from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_PATH = Path.home() / ".config" / "pzt" / "config.toml"


class PztSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PZT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_profile: str | None = None

    # GitLab
    gitlab_token: SecretStr | None = None
    gitlab_url: str = "https://gitlab.com"
    repo: str | None = None  # "owner/project"

    # Project options (format, alerts)
    sources_file: Path = Path(".pdd.yml")


@lru_cache(maxsize=1)
def _load_toml() -> tomlkit.TOMLDocument:
    """Load ~/.config/pzt/config.toml, returning empty document if missing."""
    if not CONFIG_PATH.exists():
        return tomlkit.document()
    return tomlkit.load(CONFIG_PATH.open())


def _list_profiles(config: Mapping) -> list[str]:
    # tomlkit Table implements MutableMapping but not dict, so check Mapping
    return [k for k, v in config.items() if isinstance(v, Mapping)]


def get_settings(profile: str | None = None, require_token: bool = True) -> PztSettings:
    """Resolve the active profile and return a fully populated PztSettings.

    Precedence (highest to lowest):
    1. profile argument (--profile CLI flag)
    2. PZT_DEFAULT_PROFILE env var
    3. default_profile key in ~/.config/pzt/config.toml
    4. First profile defined in ~/.config/pzt/config.toml
    """
    toml_config = _load_toml()

    active = (
        profile
        or os.environ.get("PZT_DEFAULT_PROFILE")
        or toml_config.get("default_profile")
        or ((_profiles := _list_profiles(toml_config)) and _profiles[0] or None)
    )

    profile_defaults: dict = {}
    if active:
        if active in toml_config and isinstance(toml_config[active], Mapping):
            profile_defaults = dict(toml_config[active])
        elif active not in toml_config:
            profiles = _list_profiles(toml_config)
            typer.echo(f"Profile '{active}' not found in {CONFIG_PATH}. Available: {profiles or '(none)'}")
            raise typer.Exit(1)

    settings = PztSettings(**profile_defaults)

    if require_token and not settings.gitlab_token:
        typer.echo(
            "Missing GitLab credentials. Set PZT_GITLAB_TOKEN or "
            f"gitlab_token in the [{active or 'profile'}] section of {CONFIG_PATH}"
        )
        raise typer.Exit(1)

    return settings
