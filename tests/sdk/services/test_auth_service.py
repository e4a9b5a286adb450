import json

import pytest
from pytest_httpx import HTTPXMock

from edunex._services import (
    AuthenticatedRequestClient,
    AuthService,
    InMemoryTokenStore,
)
from edunex.models.errors import OtherHttpError


@pytest.fixture
def service(client: AuthenticatedRequestClient) -> AuthService:
    return AuthService(client)


class TestAuthService:
    class TestLogin:
        @pytest.mark.anyio
        async def test_login_stores_credential(
            self,
            httpx_mock: HTTPXMock,
            service: AuthService,
            token_store: InMemoryTokenStore,
            base_url: str,
        ):
            token_store.clear_credential()
            httpx_mock.add_response(
                url=f"{base_url}auth/login",
                method="POST",
                status_code=200,
                json={
                    "accessToken": "issued-token",
                    "tokenType": "Bearer",
                    "expiresIn": 900,
                    "user": {"id": "u-1", "email": "student@example.com"},
                },
            )

            token = await service.login("student@example.com", "s3cret")

            assert token.access_token == "issued-token"
            assert token.user is not None
            assert token.user.email == "student@example.com"

            sent_request = httpx_mock.get_request()
            if sent_request is None:
                raise Exception("No request was sent")

            assert json.loads(sent_request.content) == {
                "username": "student@example.com",
                "password": "s3cret",
            }
            assert "Authorization" not in sent_request.headers

            stored = token_store.get_credential()
            assert stored is not None
            assert stored.access_token == "issued-token"
            assert stored.expires_at is not None

        @pytest.mark.anyio
        async def test_login_with_bad_credentials(
            self,
            httpx_mock: HTTPXMock,
            service: AuthService,
            base_url: str,
        ):
            httpx_mock.add_response(
                url=f"{base_url}auth/login",
                method="POST",
                status_code=401,
                json={"message": "Bad credentials"},
            )

            with pytest.raises(OtherHttpError) as exc_info:
                await service.login("student@example.com", "wrong")

            assert exc_info.value.message == "Bad credentials"

    class TestLoginUrls:
        @pytest.mark.anyio
        async def test_get_login_urls(
            self,
            httpx_mock: HTTPXMock,
            service: AuthService,
            base_url: str,
        ):
            httpx_mock.add_response(
                url=f"{base_url}auth/login-urls?userRole=STUDENT",
                json={"googleLogin": "https://accounts.example.com/o/auth"},
            )

            urls = await service.get_login_urls("STUDENT")

            assert urls.google_login == "https://accounts.example.com/o/auth"

        @pytest.mark.anyio
        async def test_error_in_body_raises(
            self,
            httpx_mock: HTTPXMock,
            service: AuthService,
            base_url: str,
        ):
            httpx_mock.add_response(
                url=f"{base_url}auth/login-urls?userRole=STUDENT",
                json={"error": "OAuth is not configured"},
            )

            with pytest.raises(OtherHttpError) as exc_info:
                await service.get_login_urls("STUDENT")

            assert exc_info.value.message == "OAuth is not configured"

    @pytest.mark.anyio
    async def test_oauth_callback_stores_credential(
        self,
        httpx_mock: HTTPXMock,
        service: AuthService,
        token_store: InMemoryTokenStore,
        base_url: str,
    ):
        httpx_mock.add_response(
            url=f"{base_url}auth/callback",
            method="POST",
            json={"accessToken": "oauth-token", "tokenType": "Bearer"},
        )

        await service.handle_oauth_callback("code-1", "INSTRUCTOR", state="xyz")

        sent_request = httpx_mock.get_request()
        assert sent_request is not None
        assert json.loads(sent_request.content) == {
            "code": "code-1",
            "userRole": "INSTRUCTOR",
            "state": "xyz",
        }
        stored = token_store.get_credential()
        assert stored is not None
        assert stored.access_token == "oauth-token"
        assert stored.expires_at is None

    @pytest.mark.anyio
    async def test_change_password_defaults_confirmation(
        self,
        httpx_mock: HTTPXMock,
        service: AuthService,
        base_url: str,
    ):
        httpx_mock.add_response(
            url=f"{base_url}auth/change-password", method="POST", status_code=200
        )

        await service.change_password("old", "new")

        sent_request = httpx_mock.get_request()
        assert sent_request is not None
        assert sent_request.headers["Authorization"] == "Bearer old-token"
        assert json.loads(sent_request.content) == {
            "oldPassword": "old",
            "newPassword": "new",
            "confirmPassword": "new",
        }

    class TestLogout:
        @pytest.mark.anyio
        async def test_logout_clears_credential(
            self,
            httpx_mock: HTTPXMock,
            service: AuthService,
            token_store: InMemoryTokenStore,
            base_url: str,
        ):
            httpx_mock.add_response(
                url=f"{base_url}auth/logout", method="POST", status_code=200
            )

            await service.logout()

            assert token_store.get_credential() is None

        @pytest.mark.anyio
        async def test_logout_clears_credential_when_server_fails(
            self,
            httpx_mock: HTTPXMock,
            service: AuthService,
            token_store: InMemoryTokenStore,
            base_url: str,
        ):
            httpx_mock.add_response(
                url=f"{base_url}auth/logout", method="POST", status_code=500
            )

            await service.logout()

            assert token_store.get_credential() is None

    @pytest.mark.anyio
    async def test_refresh_replaces_credential(
        self,
        httpx_mock: HTTPXMock,
        service: AuthService,
        token_store: InMemoryTokenStore,
        refresh_url: str,
    ):
        httpx_mock.add_response(
            url=refresh_url,
            method="POST",
            json={"accessToken": "new-token", "expiresIn": 60},
        )

        credential = await service.refresh()

        assert credential.access_token == "new-token"
        assert token_store.get_credential() == credential
