import os
from datetime import datetime
from logging import getLogger
from pathlib import Path
from typing import Mapping, Optional, Protocol, Union, runtime_checkable

from dotenv import dotenv_values

from .._utils.constants import (
    DEFAULT_TOKEN_TYPE,
    DOTENV_FILE,
    ENV_ACCESS_TOKEN,
    ENV_SESSION_COOKIE,
    ENV_TOKEN_EXPIRES_AT,
    ENV_TOKEN_TYPE,
)
from ..models.auth import Credential

logger = getLogger("edunex")

_CREDENTIAL_KEYS = (ENV_ACCESS_TOKEN, ENV_TOKEN_TYPE, ENV_TOKEN_EXPIRES_AT)


@runtime_checkable
class TokenStore(Protocol):
    """Holds the credential used to authenticate outgoing requests.

    The request client only replaces the credential after a successful refresh;
    login and logout are the surrounding application's business.
    """

    def get_credential(self) -> Optional[Credential]: ...

    def set_credential(self, credential: Credential) -> None: ...

    def clear_credential(self) -> None: ...


class InMemoryTokenStore:
    def __init__(self, credential: Optional[Credential] = None) -> None:
        self._credential = credential

    def get_credential(self) -> Optional[Credential]:
        if self._credential is not None and self._credential.is_expired():
            self._credential = None
        return self._credential

    def set_credential(self, credential: Credential) -> None:
        self._credential = credential

    def clear_credential(self) -> None:
        self._credential = None


def update_env_file(env_path: Path, env_contents: dict[str, Optional[str]]) -> None:
    """Merge ``env_contents`` into a dotenv file; ``None`` values remove the key."""
    merged: dict[str, str] = {}
    if env_path.exists():
        with open(env_path, "r") as f:
            for line in f:
                if "=" in line:
                    key, value = line.strip().split("=", 1)
                    merged[key] = value

    for key, value in env_contents.items():
        if value is None:
            merged.pop(key, None)
        else:
            merged[key] = value

    lines = [f"{key}={value}\n" for key, value in merged.items()]
    with open(env_path, "w") as f:
        f.writelines(lines)


class DotenvTokenStore:
    """Token store persisted to the process environment and a ``.env`` file.

    Used by the CLI so that a ``login`` in one invocation is picked up by the
    next one. Values already in ``os.environ`` win over the file.
    """

    def __init__(self, path: Union[str, Path, None] = None) -> None:
        self._path = Path(path) if path is not None else Path.cwd() / DOTENV_FILE

    @property
    def path(self) -> Path:
        return self._path

    def _lookup(self, key: str) -> Optional[str]:
        value = os.environ.get(key)
        if value:
            return value
        if self._path.exists():
            return dotenv_values(self._path).get(key) or None
        return None

    def get_credential(self) -> Optional[Credential]:
        access_token = self._lookup(ENV_ACCESS_TOKEN)
        if not access_token:
            return None

        expires_at = None
        raw_expires_at = self._lookup(ENV_TOKEN_EXPIRES_AT)
        if raw_expires_at:
            try:
                expires_at = datetime.fromisoformat(raw_expires_at)
            except ValueError:
                logger.warning(
                    f"Ignoring malformed {ENV_TOKEN_EXPIRES_AT} value in {self._path}"
                )

        credential = Credential(
            access_token=access_token,
            token_type=self._lookup(ENV_TOKEN_TYPE) or DEFAULT_TOKEN_TYPE,
            expires_at=expires_at,
        )
        if credential.is_expired():
            logger.info(f"Discarding expired access token from {self._path}")
            self.clear_credential()
            return None
        return credential

    def set_credential(self, credential: Credential) -> None:
        values: dict[str, Optional[str]] = {
            ENV_ACCESS_TOKEN: credential.access_token,
            ENV_TOKEN_TYPE: credential.token_type,
            ENV_TOKEN_EXPIRES_AT: (
                credential.expires_at.isoformat() if credential.expires_at else None
            ),
        }
        for key, value in values.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        update_env_file(self._path, values)

    def clear_credential(self) -> None:
        for key in _CREDENTIAL_KEYS:
            os.environ.pop(key, None)
        if self._path.exists():
            update_env_file(self._path, {key: None for key in _CREDENTIAL_KEYS})

    def get_session_cookies(self) -> dict[str, str]:
        """Cookies saved by :meth:`set_session_cookies`, e.g. the refresh cookie."""
        raw = self._lookup(ENV_SESSION_COOKIE)
        if not raw:
            return {}

        cookies: dict[str, str] = {}
        for pair in raw.split(";"):
            name, sep, value = pair.strip().partition("=")
            if sep and name:
                cookies[name] = value
        return cookies

    def set_session_cookies(self, cookies: Mapping[str, str]) -> None:
        header = "; ".join(f"{name}={value}" for name, value in cookies.items())
        if header:
            os.environ[ENV_SESSION_COOKIE] = header
        else:
            os.environ.pop(ENV_SESSION_COOKIE, None)

        if header or self._path.exists():
            update_env_file(self._path, {ENV_SESSION_COOKIE: header or None})
