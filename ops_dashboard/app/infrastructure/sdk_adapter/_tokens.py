from ops_backend_sdk.auth_store import AuthStore


def stored_access_token(auth_store: AuthStore | None) -> str | None:
    if auth_store is None:
        return None
    session = auth_store.load()
    return session.access_token if session else None
