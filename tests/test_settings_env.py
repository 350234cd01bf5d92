import os

import pytest

from oauthflow.config.settings import get_settings, load_oauth2_config
from oauthflow.core.env import load_dotenv_if_present


_PROVIDER_ENV = {
    "OAUTH2_CLIENT_ID": "cid",
    "OAUTH2_CLIENT_SECRET": "csecret",
    "OAUTH2_AUTHORIZE_ENDPOINT": "https://example.com/authorize",
    "OAUTH2_TOKEN_ENDPOINT": "https://example.com/token",
    "OAUTH2_REDIRECT_URI": "https://app.example.com/cb",
}


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch, tmp_path):
    # Work on a copy of the environment: load_dotenv writes straight into os.environ.
    monkeypatch.setattr(os, "environ", dict(os.environ))
    monkeypatch.setenv("OAUTHFLOW_ENV_FILE", str(tmp_path / "missing.env"))
    for name in [*_PROVIDER_ENV, "OAUTHFLOW_CONFIG_PATH", "OAUTHFLOW_LOG_LEVEL"]:
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    load_dotenv_if_present.cache_clear()
    yield
    get_settings.cache_clear()
    load_dotenv_if_present.cache_clear()


def test_defaults_are_loaded_from_packaged_yaml():
    settings = get_settings()

    assert settings.app.user_agent == "oauthflow"
    assert settings.app.http_timeout_seconds == 15
    assert settings.provider.client_id is None


def test_env_overrides_build_oauth2_config(monkeypatch):
    for name, value in _PROVIDER_ENV.items():
        monkeypatch.setenv(name, value)
    monkeypatch.setenv("OAUTHFLOW_LOG_LEVEL", "DEBUG")

    settings = get_settings()
    config = load_oauth2_config(settings)

    assert settings.app.log_level == "DEBUG"
    assert config.client_id == "cid"
    assert config.token_endpoint == "https://example.com/token"


def test_missing_provider_settings_name_env_vars(monkeypatch):
    monkeypatch.setenv("OAUTH2_CLIENT_ID", "cid")

    with pytest.raises(RuntimeError, match="OAUTH2_CLIENT_SECRET"):
        load_oauth2_config(get_settings())


def test_external_yaml_file_replaces_defaults(monkeypatch, tmp_path):
    path = tmp_path / "oauthflow.yaml"
    path.write_text("app:\n  user_agent: partner-sync/1.0\n  http_timeout_seconds: 4\n", encoding="utf-8")
    monkeypatch.setenv("OAUTHFLOW_CONFIG_PATH", str(path))

    settings = get_settings()

    assert settings.app.user_agent == "partner-sync/1.0"
    assert settings.app.http_timeout_seconds == 4


def test_dotenv_file_does_not_override_process_env(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("OAUTH2_CLIENT_ID=from-file\nOAUTH2_CLIENT_SECRET=file-secret\n", encoding="utf-8")
    monkeypatch.setenv("OAUTHFLOW_ENV_FILE", str(env_file))
    monkeypatch.setenv("OAUTH2_CLIENT_ID", "from-process")

    settings = get_settings()

    assert settings.provider.client_id == "from-process"
    assert settings.provider.client_secret == "file-secret"
