from functools import partial
from logging import getLogger
from typing import Any, Callable, Mapping, Optional

import httpx
from httpx import AsyncClient, Headers, Response

from .._config import Config
from .._utils import (
    RequestSpec,
    get_httpx_client_kwargs,
    is_public_endpoint,
    normalize_url_path,
)
from .._utils.constants import HEADER_AUTHORIZATION, HEADER_CONTENT_TYPE
from ..models.auth import Credential, TokenResponse
from ..models.errors import (
    AuthorizationExpired,
    AuthorizationPermanentlyDenied,
    OtherHttpError,
    RefreshEndpointFailure,
    TransientNetworkError,
)
from ._refresh_coordinator import RefreshCoordinator
from ._token_store import TokenStore


def log_login_required(url: str) -> None:
    getLogger("edunex").warning(f"Session expired. Please sign in again at {url}")


class AuthenticatedRequestClient:
    """HTTP client for the EduNex API gateway with transparent token refresh.

    Every request to a non-public path carries the token store's credential.
    The first 401 on such a request triggers a coordinated refresh, after which
    the request is replayed exactly once with the new credential. Concurrent
    401s share a single refresh round-trip through the ``RefreshCoordinator``.
    """

    def __init__(
        self,
        config: Config,
        token_store: TokenStore,
        *,
        coordinator: Optional[RefreshCoordinator] = None,
        on_login_required: Optional[Callable[[str], None]] = None,
        cookies: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._logger = getLogger("edunex")
        self._config = config
        self._token_store = token_store

        if coordinator is None:
            coordinator = RefreshCoordinator(
                token_store,
                on_login_required=partial(
                    on_login_required or log_login_required,
                    config.login_redirect_url,
                ),
                wait_timeout=config.refresh_wait_timeout,
            )
        self._coordinator = coordinator

        self._client = AsyncClient(
            base_url=config.base_url,
            headers=Headers(self.default_headers),
            cookies=cookies,
            **get_httpx_client_kwargs(config.timeout),
        )

    @property
    def default_headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            HEADER_CONTENT_TYPE: "application/json",
        }

    @property
    def config(self) -> Config:
        return self._config

    @property
    def token_store(self) -> TokenStore:
        return self._token_store

    @property
    def coordinator(self) -> RefreshCoordinator:
        return self._coordinator

    @property
    def cookies(self) -> httpx.Cookies:
        """Session cookies, including the refresh cookie set at sign-in."""
        return self._client.cookies

    async def send(self, spec: RequestSpec) -> Response:
        """Send a request, refreshing the credential once on an expired token.

        Args:
            spec (RequestSpec): Description of the request to send.

        Returns:
            Response: The successful response.

        Raises:
            TransientNetworkError: The transport failed or timed out.
            RefreshEndpointFailure: The token was rejected and refreshing it failed.
            AuthorizationPermanentlyDenied: The token was rejected again after a
                successful refresh.
            OtherHttpError: Any other error status.
        """
        credential: Optional[Credential] = None
        while True:
            try:
                return await self._issue(spec, credential)
            except AuthorizationExpired as e:
                if spec.is_replay:
                    self._logger.warning(
                        f"Refreshed token rejected by {spec.method} {spec.endpoint}"
                    )
                    self._coordinator.reject_credential(credential)
                    raise AuthorizationPermanentlyDenied(
                        "Access token rejected after refresh",
                        status_code=e.response.status_code,
                    ) from e

                credential = await self._coordinator.refresh(
                    self._request_new_credential
                )
                spec = spec.replay()

    async def refresh(self) -> Credential:
        """Refresh the credential now, joining any refresh already in flight."""
        return await self._coordinator.refresh(self._request_new_credential)

    async def get(self, endpoint: str, **kwargs: Any) -> Response:
        return await self.send(RequestSpec(method="GET", endpoint=endpoint, **kwargs))

    async def post(self, endpoint: str, **kwargs: Any) -> Response:
        return await self.send(RequestSpec(method="POST", endpoint=endpoint, **kwargs))

    async def put(self, endpoint: str, **kwargs: Any) -> Response:
        return await self.send(RequestSpec(method="PUT", endpoint=endpoint, **kwargs))

    async def patch(self, endpoint: str, **kwargs: Any) -> Response:
        return await self.send(
            RequestSpec(method="PATCH", endpoint=endpoint, **kwargs)
        )

    async def delete(self, endpoint: str, **kwargs: Any) -> Response:
        return await self.send(
            RequestSpec(method="DELETE", endpoint=endpoint, **kwargs)
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AuthenticatedRequestClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _issue(
        self, spec: RequestSpec, credential: Optional[Credential] = None
    ) -> Response:
        path = normalize_url_path(spec.endpoint)
        public = is_public_endpoint(spec.endpoint, self._config.public_endpoints)

        headers = dict(spec.headers)
        if not public:
            if credential is None:
                credential = self._token_store.get_credential()
            if credential is not None:
                headers[HEADER_AUTHORIZATION] = credential.authorization_header

        kwargs: dict[str, Any] = {
            "params": {k: v for k, v in spec.params.items() if v is not None},
            "headers": headers,
            "json": spec.json,
            "data": spec.data,
            "content": spec.content,
        }
        if spec.timeout is not None:
            kwargs["timeout"] = spec.timeout

        self._logger.debug(
            f"Request: {spec.method} {path}" + (" (replay)" if spec.is_replay else "")
        )
        try:
            response = await self._client.request(spec.method, path, **kwargs)
        except httpx.TransportError as e:
            self._logger.debug(f"Transport error: {spec.method} {path}: {e!r}")
            raise TransientNetworkError(f"{spec.method} {path} failed: {e}") from e

        self._logger.debug(f"Response [{response.status_code}]: {spec.method} {path}")

        if response.status_code == 401 and not public:
            await response.aclose()
            raise AuthorizationExpired(response)

        if response.is_error:
            raise OtherHttpError(response)

        return response

    async def _request_new_credential(self) -> Credential:
        # the refresh token travels as an HttpOnly session cookie in the jar
        path = normalize_url_path(self._config.refresh_path)
        try:
            response = await self._client.post(path)
        except httpx.TransportError as e:
            raise RefreshEndpointFailure(f"Token refresh failed: {e}") from e

        if response.is_error:
            raise RefreshEndpointFailure(
                f"Token refresh failed with status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            token = TokenResponse.model_validate(response.json())
        except ValueError as e:
            raise RefreshEndpointFailure(
                "Token refresh returned an unreadable response",
                status_code=response.status_code,
            ) from e

        return Credential.from_token_response(token)
