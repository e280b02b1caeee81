from __future__ import annotations

from ..exceptions import AuthError
from ..models import AuthUser, TokenResponse
from .base import BaseClient


class AuthClient(BaseClient):
    def sign_in(self, email: str, password: str) -> TokenResponse:
        payload = {"email": email, "password": password}
        data = self.http.request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "password"},
            json_body=payload,
            module="auth",
            operation="sign_in",
        )
        return TokenResponse.model_validate(data)

    def get_user(self) -> AuthUser:
        if not self.access_token:
            raise AuthError(
                code="SESSION_MISSING",
                message="No access token available",
                details=None,
                trace_id=None,
                status_code=401,
            )
        data = self._request("GET", "/auth/v1/user", module="auth", operation="get_user")
        return AuthUser.model_validate(data)

    def sign_out(self) -> None:
        if not self.access_token:
            return
        self._request("POST", "/auth/v1/logout", module="auth", operation="sign_out")
