from logging import getLogger
from typing import Any

from httpx import Response

from .._utils import RequestSpec
from ._request_client import AuthenticatedRequestClient


class BaseService:
    def __init__(self, client: AuthenticatedRequestClient) -> None:
        self._logger = getLogger("edunex")
        self._client = client

        super().__init__()

    async def request(self, spec: RequestSpec) -> Response:
        return await self._client.send(spec)

    async def request_json(self, spec: RequestSpec) -> Any:
        response = await self.request(spec)
        if not response.content:
            return None
        return response.json()
