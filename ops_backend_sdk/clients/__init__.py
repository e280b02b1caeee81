from .auth import AuthClient
from .records_client import RecordsClient
from .storage_client import StorageClient

__all__ = [
    "AuthClient",
    "RecordsClient",
    "StorageClient",
]
