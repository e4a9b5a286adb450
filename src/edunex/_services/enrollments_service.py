from typing import List

from .._utils import RequestSpec
from ..models.courses import Enrollment, Identifier
from ._base_service import BaseService


class EnrollmentsService(BaseService):
    """Service for course enrollments.

    Enrolling and unenrolling act on the signed-in user; the backend takes the
    user id from the access token.
    """

    async def list(self) -> List[Enrollment]:
        return await self._list(RequestSpec(method="GET", endpoint="/enrollments"))

    async def retrieve(self, enrollment_id: Identifier) -> Enrollment:
        spec = RequestSpec(method="GET", endpoint=f"/enrollments/{enrollment_id}")
        return Enrollment.model_validate(await self.request_json(spec))

    async def list_for_user(self) -> List[Enrollment]:
        return await self._list(RequestSpec(method="GET", endpoint="/enrollments/user"))

    async def list_for_course(self, course_id: Identifier) -> List[Enrollment]:
        return await self._list(
            RequestSpec(method="GET", endpoint=f"/enrollments/course/{course_id}")
        )

    async def is_enrolled(self, course_id: Identifier) -> bool:
        spec = RequestSpec(
            method="GET",
            endpoint="/enrollments/check",
            params={"courseId": course_id},
        )
        return bool(await self.request_json(spec))

    async def enroll(self, course_id: Identifier) -> Enrollment:
        spec = RequestSpec(method="POST", endpoint=f"/enrollments/course/{course_id}")
        return Enrollment.model_validate(await self.request_json(spec))

    async def unenroll(self, course_id: Identifier) -> None:
        spec = RequestSpec(method="DELETE", endpoint=f"/enrollments/course/{course_id}")
        await self.request(spec)

    async def _list(self, spec: RequestSpec) -> List[Enrollment]:
        return [
            Enrollment.model_validate(item) for item in await self.request_json(spec)
        ]
