import pytest

from ops_backend_sdk.config import ConfigError
from ops_dashboard.app.config import AppConfig


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for key in ["OPS_PAGE_SIZE", "OPS_EXPORT_DIR", "OPS_LOG_LEVEL", "OPS_ALLOWED_ROLES"]:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


def test_app_config_defaults(tmp_path) -> None:
    config = AppConfig.from_env(str(tmp_path / ".missing-env"))

    assert config.page_size == 10
    assert config.export_dir == "out/exports"
    assert config.log_level == "INFO"
    assert config.allowed_roles == ("admin", "user")


def test_app_config_reads_roles_and_level(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("OPS_ALLOWED_ROLES", " Admin , ,manager")
    monkeypatch.setenv("OPS_LOG_LEVEL", "debug")

    config = AppConfig.from_env(str(tmp_path / ".missing-env"))

    assert config.allowed_roles == ("admin", "manager")
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("OPS_PAGE_SIZE", "0"),
        ("OPS_PAGE_SIZE", "ten"),
        ("OPS_LOG_LEVEL", "LOUD"),
        ("OPS_ALLOWED_ROLES", " , "),
    ],
)
def test_app_config_validation(monkeypatch, tmp_path, key: str, value: str) -> None:
    monkeypatch.setenv(key, value)

    with pytest.raises(ConfigError):
        AppConfig.from_env(str(tmp_path / ".missing-env"))
