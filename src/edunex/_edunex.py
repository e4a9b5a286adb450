from logging import getLogger
from os import environ as env
from typing import Any, Callable, Mapping, Optional

from dotenv import load_dotenv

from ._config import Config
from ._services import (
    AuthenticatedRequestClient,
    AuthService,
    CoursesService,
    EnrollmentsService,
    InMemoryTokenStore,
    ModulesService,
    ProgressService,
    QuizzesService,
    TokenStore,
)
from ._utils._logs import setup_logging
from ._utils.constants import (
    DEFAULT_API_GATEWAY_URL,
    DEFAULT_TOKEN_TYPE,
    ENV_ACCESS_TOKEN,
    ENV_API_GATEWAY_URL,
    ENV_TOKEN_TYPE,
)
from .models.auth import Credential

load_dotenv()


class EduNex:
    """Entry point to the EduNex API.

    Examples:
        ```python
        from edunex import EduNex

        async with EduNex(base_url="https://gateway.example.com/api") as client:
            await client.auth.login("student@example.com", "s3cret")
            courses = await client.courses.list_enrolled()
        ```
    """

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        access_token: Optional[str] = None,
        token_store: Optional[TokenStore] = None,
        on_login_required: Optional[Callable[[str], None]] = None,
        cookies: Optional[Mapping[str, str]] = None,
        debug: bool = False,
        **config_overrides: Any,
    ) -> None:
        base_url_value = (
            base_url or env.get(ENV_API_GATEWAY_URL) or DEFAULT_API_GATEWAY_URL
        )

        self._config = Config(base_url=base_url_value, debug=debug, **config_overrides)

        setup_logging(self._config.debug)
        log = getLogger("edunex")

        log.debug("CONFIG:")
        log.debug(f"{self._config.model_dump()}\n")

        if token_store is None:
            token_store = InMemoryTokenStore()
            access_token_value = access_token or env.get(ENV_ACCESS_TOKEN)
            if access_token_value:
                token_store.set_credential(
                    Credential(
                        access_token=access_token_value,
                        token_type=env.get(ENV_TOKEN_TYPE) or DEFAULT_TOKEN_TYPE,
                    )
                )

        self._client = AuthenticatedRequestClient(
            self._config,
            token_store,
            on_login_required=on_login_required,
            cookies=cookies,
        )

    @property
    def config(self) -> Config:
        return self._config

    @property
    def client(self) -> AuthenticatedRequestClient:
        return self._client

    @property
    def auth(self) -> AuthService:
        return AuthService(self._client)

    @property
    def courses(self) -> CoursesService:
        return CoursesService(self._client)

    @property
    def modules(self) -> ModulesService:
        return ModulesService(self._client)

    @property
    def quizzes(self) -> QuizzesService:
        return QuizzesService(self._client)

    @property
    def enrollments(self) -> EnrollmentsService:
        return EnrollmentsService(self._client)

    @property
    def progress(self) -> ProgressService:
        return ProgressService(self._client)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "EduNex":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
