from typing import Any, List

from .._utils import RequestSpec
from ..models.courses import Identifier, Module
from ._base_service import BaseService


class ModulesService(BaseService):
    """Service for course modules (videos, PDFs and quizzes)."""

    async def list(self) -> List[Module]:
        spec = RequestSpec(method="GET", endpoint="/modules")
        return [Module.model_validate(item) for item in await self.request_json(spec)]

    async def retrieve(self, module_id: Identifier) -> Module:
        spec = RequestSpec(method="GET", endpoint=f"/modules/{module_id}")
        return Module.model_validate(await self.request_json(spec))

    async def list_by_course(self, course_id: Identifier) -> List[Module]:
        """Modules of a course, in course order."""
        spec = RequestSpec(method="GET", endpoint=f"/modules/course/{course_id}")
        modules = [
            Module.model_validate(item) for item in await self.request_json(spec)
        ]
        return sorted(modules, key=lambda m: m.module_order)

    async def create(self, **fields: Any) -> Module:
        spec = RequestSpec(method="POST", endpoint="/modules", json=fields)
        return Module.model_validate(await self.request_json(spec))

    async def update(self, module_id: Identifier, **fields: Any) -> Module:
        spec = RequestSpec(
            method="PUT", endpoint=f"/modules/{module_id}", json=fields
        )
        return Module.model_validate(await self.request_json(spec))

    async def delete(self, module_id: Identifier) -> None:
        spec = RequestSpec(method="DELETE", endpoint=f"/modules/{module_id}")
        await self.request(spec)

    async def reorder(self, module_id: Identifier, new_order: int) -> None:
        spec = RequestSpec(
            method="POST",
            endpoint=f"/modules/{module_id}/reorder",
            params={"newOrder": new_order},
        )
        await self.request(spec)
