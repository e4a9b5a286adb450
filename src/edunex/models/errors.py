import json
from typing import Optional

from httpx import Response


class EduNexError(Exception):
    """Base class for every error raised by the EduNex client."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class TransientNetworkError(EduNexError):
    """The transport failed (timeout, DNS, connection reset).

    The client never retries these; the caller decides whether to try again.
    """


class AuthorizationExpired(EduNexError):
    """First HTTP 401 on an authenticated request.

    Raised internally to start the refresh protocol. Callers only see it if they
    issue requests below the client's ``send`` method.
    """

    def __init__(self, response: Response) -> None:
        self.response = response
        super().__init__(
            f"Access token rejected for {response.request.method} "
            f"{response.request.url}"
        )


class AuthorizationPermanentlyDenied(EduNexError):
    """Authorization failed and cannot be recovered without signing in again."""

    def __init__(
        self,
        message: str = "Authentication required. Please sign in again.",
        *,
        status_code: Optional[int] = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(message)


class RefreshEndpointFailure(AuthorizationPermanentlyDenied):
    """The refresh call itself failed; every request queued on it fails too."""

    def __init__(
        self,
        message: str = "Token refresh failed",
        *,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message, status_code=status_code)


class OtherHttpError(EduNexError):
    """Any other error status, passed through without interpretation."""

    def __init__(self, response: Response, message: Optional[str] = None) -> None:
        self.response = response
        self.status_code = response.status_code
        self.body = response.text

        if message is None:
            message = _extract_message(response)

        super().__init__(
            message
            or f"HTTP {self.status_code} for {response.request.method} "
            f"{response.request.url}"
        )


def _extract_message(response: Response) -> Optional[str]:
    try:
        error_body = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None

    if isinstance(error_body, dict):
        return (
            error_body.get("message")
            or error_body.get("error")
            or error_body.get("detail")
        )
    return None
