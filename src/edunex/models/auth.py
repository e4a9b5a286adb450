"""Models for authentication tokens and the credential attached to requests."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .._utils.constants import DEFAULT_TOKEN_TYPE


class User(BaseModel):
    model_config = ConfigDict(
        validate_by_name=True,
        validate_by_alias=True,
        extra="allow",
    )

    id: Optional[str] = None
    email: Optional[str] = None
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    role: Optional[str] = None


class TokenResponse(BaseModel):
    """Body returned by login, refresh and the OAuth callback."""

    model_config = ConfigDict(
        validate_by_name=True,
        validate_by_alias=True,
        extra="allow",
    )

    access_token: str = Field(alias="accessToken")
    token_type: Optional[str] = Field(default=None, alias="tokenType")
    expires_in: Optional[int] = Field(default=None, alias="expiresIn")
    refresh_token: Optional[str] = Field(default=None, alias="refreshToken")
    user: Optional[User] = None


class LoginUrls(BaseModel):
    model_config = ConfigDict(
        validate_by_name=True,
        validate_by_alias=True,
        extra="allow",
    )

    google_login: Optional[str] = Field(default=None, alias="googleLogin")


class Credential(BaseModel):
    """Bearer access token plus its type and expiry."""

    access_token: str
    token_type: str = DEFAULT_TOKEN_TYPE
    expires_at: Optional[datetime] = None

    @property
    def authorization_header(self) -> str:
        return f"{self.token_type or DEFAULT_TOKEN_TYPE} {self.access_token}"

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.expires_at is None:
            return False
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        now = now or datetime.now(timezone.utc)
        return now >= expires_at

    @classmethod
    def from_token_response(
        cls, response: TokenResponse, now: Optional[datetime] = None
    ) -> "Credential":
        expires_at = None
        if response.expires_in is not None:
            now = now or datetime.now(timezone.utc)
            expires_at = now + timedelta(seconds=response.expires_in)

        return cls(
            access_token=response.access_token,
            token_type=response.token_type or DEFAULT_TOKEN_TYPE,
            expires_at=expires_at,
        )

    def __repr__(self) -> str:
        # keep the token out of logs and tracebacks
        return (
            f"Credential(token_type={self.token_type!r}, "
            f"expires_at={self.expires_at!r})"
        )

    __str__ = __repr__
