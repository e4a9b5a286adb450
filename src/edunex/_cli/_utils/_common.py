import asyncio
import functools
import json
from typing import Any, Awaitable, Callable, Optional, TypeVar

import click
from pydantic import BaseModel

from ..._edunex import EduNex
from ..._services import DotenvTokenStore
from ...models.errors import EduNexError

T = TypeVar("T")


def verbose_option(function):
    return click.option(
        "--verbose",
        "-v",
        is_flag=True,
        help="Enable verbose logging",
    )(function)


def base_url_option(function):
    return click.option(
        "--base-url",
        envvar="EDUNEX_API_GATEWAY_URL",
        default=None,
        help="API gateway URL (defaults to EDUNEX_API_GATEWAY_URL)",
    )(function)


def _login_required(url: str) -> None:
    click.echo(
        f"Your session has expired. Run 'edunex login' to sign in again ({url}).",
        err=True,
    )


def create_client(
    base_url: Optional[str], verbose: bool, token_store: DotenvTokenStore
) -> EduNex:
    return EduNex(
        base_url=base_url,
        token_store=token_store,
        on_login_required=_login_required,
        cookies=token_store.get_session_cookies(),
        debug=verbose,
    )


def run_with_client(
    base_url: Optional[str],
    verbose: bool,
    action: Callable[[EduNex], Awaitable[T]],
) -> T:
    """Run ``action`` against a fresh client and close it afterwards.

    Session cookies (the refresh cookie among them) are saved next to the access
    token so the next invocation can still refresh it.
    """
    token_store = DotenvTokenStore()

    async def _run() -> T:
        async with create_client(base_url, verbose, token_store) as client:
            try:
                return await action(client)
            finally:
                jar = client.client.cookies.jar
                token_store.set_session_cookies(
                    {cookie.name: cookie.value or "" for cookie in jar}
                )

    return asyncio.run(_run())


def handle_errors(function):
    """Turn SDK errors into click errors so the CLI exits non-zero with a message."""

    @functools.wraps(function)
    def wrapper(*args, **kwargs):
        try:
            return function(*args, **kwargs)
        except EduNexError as e:
            raise click.ClickException(e.message) from e

    return wrapper


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    return value


def echo_json(value: Any) -> None:
    click.echo(json.dumps(_to_jsonable(value), indent=2))
