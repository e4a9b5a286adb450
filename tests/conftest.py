import os
from datetime import datetime, timedelta, timezone
from typing import Generator
from unittest.mock import Mock

import pytest
from click.testing import CliRunner

from edunex._config import Config
from edunex._services import AuthenticatedRequestClient, InMemoryTokenStore
from edunex.models.auth import Credential

EDUNEX_ENV = (
    "EDUNEX_API_GATEWAY_URL",
    "EDUNEX_ACCESS_TOKEN",
    "EDUNEX_TOKEN_TYPE",
    "EDUNEX_TOKEN_EXPIRES_AT",
    "EDUNEX_SESSION_COOKIE",
)


@pytest.fixture
def anyio_backend() -> str:
    # the refresh coordinator is built on asyncio futures
    return "asyncio"


@pytest.fixture
def runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Clean environment variables before and after each test."""
    for name in EDUNEX_ENV:
        monkeypatch.delenv(name, raising=False)
    yield
    # token stores write straight to os.environ
    for name in EDUNEX_ENV:
        os.environ.pop(name, None)


@pytest.fixture
def base_url() -> str:
    return "http://testserver/api/"


@pytest.fixture
def refresh_url(base_url: str) -> str:
    return f"{base_url}auth/refresh"


@pytest.fixture
def config(base_url: str) -> Config:
    return Config(base_url=base_url, timeout=5.0, refresh_wait_timeout=None)


@pytest.fixture
def credential() -> Credential:
    return Credential(
        access_token="old-token",
        token_type="Bearer",
        expires_at=datetime.now(timezone.utc) + timedelta(minutes=5),
    )


@pytest.fixture
def token_store(credential: Credential) -> InMemoryTokenStore:
    return InMemoryTokenStore(credential)


@pytest.fixture
def login_required() -> Mock:
    return Mock()


@pytest.fixture
def client(
    config: Config, token_store: InMemoryTokenStore, login_required: Mock
) -> AuthenticatedRequestClient:
    return AuthenticatedRequestClient(
        config, token_store, on_login_required=login_required
    )
