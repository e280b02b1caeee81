from .auth_store import AuthStore
from .clients import AuthClient, RecordsClient, StorageClient
from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ServerError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)
from .http_client import HttpClient
from .models import AuthUser, SessionData, StorageObject, TokenResponse
from .tracing import TraceContext

__all__ = [
    "ApiError",
    "AuthClient",
    "AuthError",
    "AuthStore",
    "AuthUser",
    "ClientConfig",
    "ConfigError",
    "ConflictError",
    "ForbiddenError",
    "HttpClient",
    "NotFoundError",
    "RecordsClient",
    "ServerError",
    "SessionData",
    "StorageClient",
    "StorageObject",
    "TokenResponse",
    "TraceContext",
    "TransportError",
    "UnauthorizedError",
    "ValidationError",
    "load_config",
]
