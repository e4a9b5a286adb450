import asyncio
from collections import deque
from logging import getLogger
from typing import Awaitable, Callable, Optional

from ..models.auth import Credential
from ..models.errors import RefreshEndpointFailure, TransientNetworkError
from ._token_store import TokenStore

RefreshCallable = Callable[[], Awaitable[Credential]]
LoginRequiredHook = Callable[[], None]


class RefreshCoordinator:
    """Single-flight coordination of credential refreshes.

    Whichever caller first finds no refresh in progress becomes the leader and
    performs the refresh; everyone arriving while it runs is queued and settled,
    in arrival order, with the leader's outcome. The queue is always drained
    before ``is_refreshing`` drops back to ``False``.

    All state is touched from a single event loop. The check and set of the
    in-progress flag happen in the same scheduler turn, which is what keeps two
    callers from both becoming leader.
    """

    def __init__(
        self,
        token_store: TokenStore,
        *,
        on_login_required: Optional[LoginRequiredHook] = None,
        wait_timeout: Optional[float] = None,
    ) -> None:
        self._logger = getLogger("edunex")
        self._token_store = token_store
        self._on_login_required = on_login_required
        self._wait_timeout = wait_timeout

        self._is_refreshing = False
        self._waiters: deque[asyncio.Future[Credential]] = deque()

    @property
    def is_refreshing(self) -> bool:
        return self._is_refreshing

    @property
    def pending_count(self) -> int:
        return len(self._waiters)

    async def refresh(self, perform: RefreshCallable) -> Credential:
        """Obtain a fresh credential, joining an in-flight refresh if there is one.

        Args:
            perform: Coroutine factory doing the actual refresh round-trip. It is
                only invoked by the leader.

        Returns:
            Credential: The credential now held by the token store.

        Raises:
            RefreshEndpointFailure: The refresh failed. Every queued caller
                receives its own copy, chained to the original failure.
            TransientNetworkError: This caller gave up waiting on someone else's
                refresh after ``wait_timeout`` seconds.
        """
        if self._is_refreshing:
            return await self._wait_for_refresh()

        self._is_refreshing = True
        self._logger.info("Access token expired, refreshing")
        try:
            try:
                credential = await perform()
            except RefreshEndpointFailure as e:
                failure = e
            except Exception as e:
                failure = RefreshEndpointFailure(f"Token refresh failed: {e}")
                failure.__cause__ = e
            else:
                self._token_store.set_credential(credential)
                self._drain(credential=credential)
                self._logger.info("Access token refreshed")
                return credential

            self._drain(failure=failure)
        finally:
            # cancellation or an interrupt escaping perform() leaves waiters queued
            if self._waiters:
                self._drain(
                    failure=RefreshEndpointFailure("Token refresh was interrupted")
                )
            self._is_refreshing = False

        self._logger.warning(f"Token refresh failed, sign-in required: {failure}")
        self._token_store.clear_credential()
        self.request_login()
        raise failure

    def reject_credential(self, credential: Optional[Credential] = None) -> None:
        """Drop a credential the server refused even after a refresh.

        Replays that all fail with the same credential only sign the user out
        once: after the first one the store no longer holds that credential.

        Args:
            credential: The credential that was rejected. Defaults to the one
                currently stored.
        """
        current = self._token_store.get_credential()
        if credential is None:
            credential = current
        if (
            credential is None
            or current is None
            or current.access_token != credential.access_token
        ):
            return

        self._logger.warning("Refreshed access token rejected, sign-in required")
        self._token_store.clear_credential()
        self.request_login()

    def request_login(self) -> None:
        if self._on_login_required is not None:
            self._on_login_required()

    async def _wait_for_refresh(self) -> Credential:
        waiter: asyncio.Future[Credential] = (
            asyncio.get_running_loop().create_future()
        )
        self._waiters.append(waiter)
        self._logger.debug(
            f"Refresh in progress, queued request ({len(self._waiters)} waiting)"
        )

        if self._wait_timeout is None:
            return await waiter

        try:
            return await asyncio.wait_for(
                asyncio.shield(waiter), timeout=self._wait_timeout
            )
        except asyncio.TimeoutError as e:
            if waiter in self._waiters:
                self._waiters.remove(waiter)
            waiter.cancel()
            raise TransientNetworkError(
                f"Timed out after {self._wait_timeout}s waiting for token refresh"
            ) from e
        except asyncio.CancelledError:
            if waiter in self._waiters:
                self._waiters.remove(waiter)
            waiter.cancel()
            raise

    def _drain(
        self,
        *,
        credential: Optional[Credential] = None,
        failure: Optional[RefreshEndpointFailure] = None,
    ) -> None:
        while self._waiters:
            waiter = self._waiters.popleft()
            if waiter.done():
                continue
            if failure is not None:
                waiter.set_exception(_waiter_failure(failure))
            else:
                waiter.set_result(credential)  # type: ignore[arg-type]


def _waiter_failure(failure: RefreshEndpointFailure) -> RefreshEndpointFailure:
    # each waiting task raises its own instance so tracebacks stay separate
    error = RefreshEndpointFailure(failure.message, status_code=failure.status_code)
    error.__cause__ = failure
    return error
