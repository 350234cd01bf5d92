# src/oauthflow/config/settings.py
"""
Library settings (Pydantic).

Settings are loaded from `src/oauthflow/config/defaults.yaml`, then optionally overridden by:
- environment variables (e.g., `OAUTH2_CLIENT_ID`, `OAUTH2_CLIENT_SECRET`)
- an external YAML file via `OAUTHFLOW_CONFIG_PATH`

Nothing here is required to use the library: every operation also accepts an
`OAuth2Config` built directly by the embedding application.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from oauthflow.core.env import load_dotenv_if_present
from oauthflow.domain.models import OAuth2Config


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `oauthflow.config`."""
    text = resources.files("oauthflow.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "oauthflow"
    user_agent: str = "oauthflow"
    http_timeout_seconds: float | None = Field(default=15, gt=0)
    log_level: str = "INFO"


class ProviderSettings(BaseModel):
    client_id: str | None = None
    client_secret: str | None = None
    authorize_endpoint: str | None = None
    token_endpoint: str | None = None
    redirect_uri: str | None = None


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    provider: ProviderSettings = Field(default_factory=ProviderSettings)


# env var -> (section, key)
_ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "OAUTHFLOW_LOG_LEVEL": ("app", "log_level"),
    "OAUTHFLOW_HTTP_TIMEOUT_SECONDS": ("app", "http_timeout_seconds"),
    "OAUTHFLOW_USER_AGENT": ("app", "user_agent"),
    "OAUTH2_CLIENT_ID": ("provider", "client_id"),
    "OAUTH2_CLIENT_SECRET": ("provider", "client_secret"),
    "OAUTH2_AUTHORIZE_ENDPOINT": ("provider", "authorize_endpoint"),
    "OAUTH2_TOKEN_ENDPOINT": ("provider", "token_endpoint"),
    "OAUTH2_REDIRECT_URI": ("provider", "redirect_uri"),
}


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Note: the whitelist is explicit so unrelated env vars never leak into settings.
    """
    load_dotenv_if_present()
    data = dict(data)
    for env_name, (section, key) in _ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value:
            data[section] = dict(data.get(section) or {})
            data[section][key] = value
    return data


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    load_dotenv_if_present()
    config_path = os.getenv("OAUTHFLOW_CONFIG_PATH")
    raw = _read_yaml_file(config_path) if config_path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")


def load_oauth2_config(settings: Settings) -> OAuth2Config:
    """Build an `OAuth2Config` from the provider section or raise if anything is missing."""
    provider = settings.provider
    missing = [
        env_name
        for env_name, (section, key) in _ENV_OVERRIDES.items()
        if section == "provider" and not getattr(provider, key)
    ]
    if missing:
        raise RuntimeError(
            "OAuth2 provider settings are incomplete. Set " + ", ".join(missing) + "."
        )
    return OAuth2Config.model_validate(provider.model_dump())
