from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ._utils._url import ensure_trailing_slash
from ._utils.constants import (
    DEFAULT_API_GATEWAY_URL,
    DEFAULT_REFRESH_WAIT_TIMEOUT,
    DEFAULT_TIMEOUT,
    ENDPOINT_REFRESH,
    LOGIN_REDIRECT_URL,
    PUBLIC_ENDPOINTS,
)


class Config(BaseModel):
    base_url: str = Field(default=DEFAULT_API_GATEWAY_URL, validate_default=True)
    timeout: float = DEFAULT_TIMEOUT
    public_endpoints: tuple[str, ...] = PUBLIC_ENDPOINTS
    refresh_path: str = ENDPOINT_REFRESH
    login_redirect_url: str = LOGIN_REDIRECT_URL
    refresh_wait_timeout: Optional[float] = DEFAULT_REFRESH_WAIT_TIMEOUT
    debug: bool = False

    @field_validator("base_url", mode="before")
    @classmethod
    def validate_url(cls, value: str) -> str:
        # paths are joined onto the gateway URL, so it must end with a slash
        assert isinstance(value, str) and value.startswith(
            ("http://", "https://")
        ), "Invalid URL"
        return ensure_trailing_slash(value)

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        assert value > 0, "Timeout must be positive"
        return value
