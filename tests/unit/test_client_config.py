from __future__ import annotations

import pytest

from ops_backend_sdk.config import ConfigError, load_config

_KEYS = [
    "OPS_ENV",
    "OPS_API_BASE_URL",
    "OPS_API_BASE_URL_DEV",
    "OPS_API_BASE_URL_STAGING",
    "OPS_API_KEY",
    "OPS_TIMEOUT_SECONDS",
    "OPS_CONNECT_TIMEOUT_SECONDS",
    "OPS_READ_TIMEOUT_SECONDS",
    "OPS_RETRIES",
    "OPS_RETRY_BACKOFF_SECONDS",
    "OPS_MAX_CONNECTIONS",
    "OPS_VERIFY_SSL",
    "OPS_STORAGE_BUCKET",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _KEYS:
        # setenv first so teardown also removes values a .env file loaded
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


def _missing_env(tmp_path) -> str:
    return str(tmp_path / "missing.env")


def test_load_config_requires_base_url_and_key(tmp_path) -> None:
    with pytest.raises(ConfigError) as excinfo:
        load_config(_missing_env(tmp_path))

    assert "OPS_API_BASE_URL" in str(excinfo.value)
    assert "OPS_API_KEY" in str(excinfo.value)


def test_load_config_defaults(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("OPS_API_BASE_URL", "https://project.example.com/")
    monkeypatch.setenv("OPS_API_KEY", "anon-key")

    cfg = load_config(_missing_env(tmp_path))

    assert cfg.api_base_url == "https://project.example.com"
    assert cfg.env_name == "dev"
    assert cfg.retries == 3
    assert cfg.storage_bucket == "uploads"
    assert cfg.verify_ssl is True


def test_load_config_profile_override(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.setenv("OPS_ENV", "staging")
    monkeypatch.setenv("OPS_API_BASE_URL", "https://prod.example.com")
    monkeypatch.setenv("OPS_API_BASE_URL_STAGING", "https://staging.example.com")
    monkeypatch.setenv("OPS_API_KEY", "anon-key")

    cfg = load_config(_missing_env(tmp_path))

    assert cfg.api_base_url == "https://staging.example.com"
    assert cfg.normalized_env == "staging"


def test_load_config_reads_dotenv_file(tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("OPS_API_BASE_URL=https://file.example.com\nOPS_API_KEY=file-key\nOPS_VERIFY_SSL=false\n")

    cfg = load_config(str(env_file))

    assert cfg.api_base_url == "https://file.example.com"
    assert cfg.verify_ssl is False


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("OPS_TIMEOUT_SECONDS", "0"),
        ("OPS_CONNECT_TIMEOUT_SECONDS", "0"),
        ("OPS_READ_TIMEOUT_SECONDS", "0"),
        ("OPS_RETRIES", "-1"),
        ("OPS_RETRY_BACKOFF_SECONDS", "-0.1"),
        ("OPS_MAX_CONNECTIONS", "0"),
        ("OPS_RETRIES", "many"),
    ],
)
def test_load_config_rejects_invalid_values(monkeypatch: pytest.MonkeyPatch, tmp_path, key: str, value: str) -> None:
    monkeypatch.setenv("OPS_API_BASE_URL", "https://project.example.com")
    monkeypatch.setenv("OPS_API_KEY", "anon-key")
    monkeypatch.setenv(key, value)

    with pytest.raises(ConfigError) as excinfo:
        load_config(_missing_env(tmp_path))

    assert key in str(excinfo.value)
