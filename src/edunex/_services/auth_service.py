from typing import Any, Optional

from .._utils import RequestSpec
from .._utils.constants import (
    ENDPOINT_CHANGE_PASSWORD,
    ENDPOINT_LOGIN,
    ENDPOINT_LOGIN_URLS,
    ENDPOINT_LOGOUT,
    ENDPOINT_OAUTH_CALLBACK,
    ENDPOINT_REGISTER,
    ENDPOINT_SEND_PASSWORD_RESET,
    ENDPOINT_VERIFY_EMAIL,
)
from ..models.auth import Credential, LoginUrls, TokenResponse
from ..models.errors import EduNexError, OtherHttpError
from ._base_service import BaseService


class AuthService(BaseService):
    """Service for signing in and out of the EduNex platform.

    Successful sign-ins write the returned credential into the client's token
    store; the refresh token itself stays in the session cookie set by the
    server.
    """

    async def login(self, username: str, password: str) -> TokenResponse:
        """Sign in with email and password.

        Args:
            username (str): The account email.
            password (str): The account password.

        Returns:
            TokenResponse: The issued tokens and the signed-in user.

        Examples:
            ```python
            from edunex import EduNex

            async with EduNex() as client:
                await client.auth.login("student@example.com", "s3cret")
            ```
        """
        spec = self._login_spec(username, password)
        token = TokenResponse.model_validate(await self.request_json(spec))
        self._store(token)
        return token

    async def register(self, **fields: Any) -> TokenResponse:
        """Create an account and sign in with it.

        Args:
            **fields: Registration payload, sent as-is (``email``, ``password``,
                ``firstName``, ``lastName``, ``userRole`` ...).
        """
        spec = RequestSpec(method="POST", endpoint=ENDPOINT_REGISTER, json=fields)
        token = TokenResponse.model_validate(await self.request_json(spec))
        self._store(token)
        return token

    async def get_login_urls(self, user_role: str) -> LoginUrls:
        spec = RequestSpec(
            method="GET",
            endpoint=ENDPOINT_LOGIN_URLS,
            params={"userRole": user_role},
        )
        response = await self.request(spec)

        body = response.json()
        # the backend reports some failures in a 200 body
        if isinstance(body, dict) and body.get("error"):
            raise OtherHttpError(response, message=str(body["error"]))

        return LoginUrls.model_validate(body)

    async def handle_oauth_callback(
        self, code: str, user_role: str, state: Optional[str] = None
    ) -> TokenResponse:
        """Exchange an OAuth authorization code for tokens."""
        payload: dict[str, Any] = {"code": code, "userRole": user_role}
        if state:
            payload["state"] = state

        spec = RequestSpec(
            method="POST", endpoint=ENDPOINT_OAUTH_CALLBACK, json=payload
        )
        token = TokenResponse.model_validate(await self.request_json(spec))
        self._store(token)
        return token

    async def send_password_reset(self, email: str, user_role: str) -> None:
        spec = RequestSpec(
            method="POST",
            endpoint=ENDPOINT_SEND_PASSWORD_RESET,
            json={"email": email, "userRole": user_role},
        )
        await self.request(spec)

    async def verify_email(self, token: str) -> None:
        spec = RequestSpec(
            method="POST", endpoint=ENDPOINT_VERIFY_EMAIL, json={"token": token}
        )
        await self.request(spec)

    async def change_password(
        self,
        old_password: str,
        new_password: str,
        confirm_password: Optional[str] = None,
    ) -> None:
        spec = RequestSpec(
            method="POST",
            endpoint=ENDPOINT_CHANGE_PASSWORD,
            json={
                "oldPassword": old_password,
                "newPassword": new_password,
                "confirmPassword": confirm_password or new_password,
            },
        )
        await self.request(spec)

    async def refresh(self) -> Credential:
        """Refresh the access token using the session cookie."""
        return await self._client.refresh()

    async def logout(self) -> None:
        """Sign out on the server, then forget the local credential.

        A failing server call is logged and does not prevent the local sign-out.
        """
        spec = RequestSpec(method="POST", endpoint=ENDPOINT_LOGOUT)
        try:
            await self.request(spec)
        except EduNexError as e:
            self._logger.warning(f"Logout request failed: {e}")
        finally:
            self._client.token_store.clear_credential()

    def _login_spec(self, username: str, password: str) -> RequestSpec:
        return RequestSpec(
            method="POST",
            endpoint=ENDPOINT_LOGIN,
            # the backend treats the email as the username
            json={"username": username, "password": password},
        )

    def _store(self, token: TokenResponse) -> None:
        self._client.token_store.set_credential(Credential.from_token_response(token))
