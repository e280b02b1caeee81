from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from ops_backend_sdk.config import ConfigError

DEFAULT_EXPORT_DIR = "out/exports"
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class AppConfig:
    page_size: int = 10
    export_dir: str = DEFAULT_EXPORT_DIR
    log_level: str = "INFO"
    allowed_roles: tuple[str, ...] = ("admin", "user")

    @classmethod
    def from_env(cls, env_file: str | None = None) -> "AppConfig":
        load_dotenv(env_file)
        raw_page_size = os.getenv("OPS_PAGE_SIZE", "10")
        try:
            page_size = int(raw_page_size)
        except ValueError as exc:
            raise ConfigError(f"Invalid OPS_PAGE_SIZE: expected an integer, got {raw_page_size!r}") from exc
        roles = tuple(
            role.strip().lower() for role in os.getenv("OPS_ALLOWED_ROLES", "admin,user").split(",") if role.strip()
        )
        config = cls(
            page_size=page_size,
            export_dir=os.getenv("OPS_EXPORT_DIR", DEFAULT_EXPORT_DIR).strip(),
            log_level=os.getenv("OPS_LOG_LEVEL", "INFO").strip().upper(),
            allowed_roles=roles,
        )
        config.validate()
        return config

    def validate(self) -> None:
        if self.page_size <= 0:
            raise ConfigError(f"Invalid OPS_PAGE_SIZE: expected > 0, got {self.page_size}")
        if not self.export_dir:
            raise ConfigError("OPS_EXPORT_DIR cannot be empty")
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"Invalid OPS_LOG_LEVEL: expected one of {sorted(LOG_LEVELS)}, got {self.log_level!r}")
        if not self.allowed_roles:
            raise ConfigError("OPS_ALLOWED_ROLES must name at least one role")
