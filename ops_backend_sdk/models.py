from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class AuthUser(BaseModel):
    id: str
    email: str | None = None
    role: str | None = None
    user_metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def app_role(self) -> str | None:
        # "role" at the top level is the database role ("authenticated"); the app role lives in metadata
        value = self.user_metadata.get("role")
        return str(value) if value else None


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str | None = None
    token_type: str = "bearer"
    expires_in: int | None = None
    user: AuthUser | None = None


class SessionData(BaseModel):
    access_token: str
    refresh_token: str | None = None
    user: AuthUser | None = None
    env_name: str | None = None


class StorageObjectMetadata(BaseModel):
    size: int | None = None
    mimetype: str | None = None


class StorageObject(BaseModel):
    name: str
    id: str | None = None
    updated_at: str | None = None
    created_at: str | None = None
    metadata: StorageObjectMetadata | None = None

    @property
    def size(self) -> int | None:
        return self.metadata.size if self.metadata else None
