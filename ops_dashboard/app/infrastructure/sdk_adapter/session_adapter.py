from ops_backend_sdk.auth_store import AuthStore
from ops_backend_sdk.clients.auth import AuthClient
from ops_backend_sdk.exceptions import ApiError, AuthError
from ops_backend_sdk.http_client import HttpClient
from ops_backend_sdk.models import SessionData

from ops_dashboard.app.domain.contracts import Session
from ops_dashboard.app.infrastructure.errors.error_mapper import ErrorMapper


class SessionAdapter:
    """SessionProvider backed by the stored sign-in and a live user lookup."""

    def __init__(self, http: HttpClient, auth_store: AuthStore) -> None:
        self.http = http
        self.auth_store = auth_store

    def sign_in(self, email: str, password: str) -> Session:
        try:
            token = AuthClient(http=self.http).sign_in(email=email, password=password)
            user = token.user or AuthClient(http=self.http, access_token=token.access_token).get_user()
        except ApiError as error:
            raise ErrorMapper.to_persistence_error(error) from error
        self.auth_store.save(
            SessionData(
                access_token=token.access_token,
                refresh_token=token.refresh_token,
                user=user,
                env_name=self.http.config.env_name,
            )
        )
        return Session(user_id=user.id, email=user.email, role=user.app_role, access_token=token.access_token)

    def current_session(self) -> Session | None:
        stored = self.auth_store.load()
        if stored is None:
            return None
        try:
            user = AuthClient(http=self.http, access_token=stored.access_token).get_user()
        except AuthError:
            self.auth_store.clear()
            return None
        except ApiError as error:
            raise ErrorMapper.to_persistence_error(error) from error
        return Session(user_id=user.id, email=user.email, role=user.app_role, access_token=stored.access_token)

    def sign_out(self) -> None:
        stored = self.auth_store.load()
        try:
            if stored is not None:
                AuthClient(http=self.http, access_token=stored.access_token).sign_out()
        except ApiError as error:
            raise ErrorMapper.to_persistence_error(error) from error
        finally:
            self.auth_store.clear()
