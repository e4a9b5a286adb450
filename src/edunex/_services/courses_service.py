from typing import Any, Optional

from .._utils import RequestSpec
from .._utils.constants import ROLE_STUDENT, STATUS_PUBLISHED
from ..models.courses import Course, CourseStatus, Identifier
from ._base_service import BaseService


class CoursesService(BaseService):
    """Service for browsing and authoring courses.

    Students only ever see published courses; instructors may also work with
    drafts.
    """

    async def search(
        self, query: str = "", status: Optional[CourseStatus] = None
    ) -> list[Course]:
        """Search the course catalogue.

        Args:
            query (str): Free-text query; empty returns every course.
            status (Optional[CourseStatus]): Restrict to published or draft courses.

        Returns:
            list[Course]: Matching courses.
        """
        spec = self._search_spec(query, status)
        return [Course.model_validate(item) for item in await self.request_json(spec)]

    async def retrieve(
        self,
        course_id: Identifier,
        *,
        include_modules: bool = False,
        user_role: Optional[str] = None,
    ) -> Course:
        """Retrieve a course by id.

        Args:
            course_id: The course id.
            include_modules (bool): Embed the course modules in the response.
            user_role (Optional[str]): ``STUDENT`` restricts the lookup to
                published courses.
        """
        spec = self._retrieve_spec(course_id, include_modules, user_role)
        course = Course.model_validate(await self.request_json(spec))
        course.modules.sort(key=lambda m: m.module_order)
        return course

    async def create(self, **fields: Any) -> Course:
        spec = RequestSpec(method="POST", endpoint="/courses", json=fields)
        return Course.model_validate(await self.request_json(spec))

    async def update(self, course_id: Identifier, **fields: Any) -> Course:
        spec = RequestSpec(method="PUT", endpoint=f"/courses/{course_id}", json=fields)
        return Course.model_validate(await self.request_json(spec))

    async def delete(self, course_id: Identifier) -> None:
        spec = RequestSpec(method="DELETE", endpoint=f"/courses/{course_id}")
        await self.request(spec)

    async def publish(self, course_id: Identifier) -> Course:
        spec = RequestSpec(method="POST", endpoint=f"/courses/{course_id}/publish")
        return Course.model_validate(await self.request_json(spec))

    async def list_by_instructor(self, instructor_id: str) -> list[Course]:
        spec = RequestSpec(
            method="GET", endpoint=f"/courses/instructor/{instructor_id}"
        )
        return [Course.model_validate(item) for item in await self.request_json(spec)]

    async def list_enrolled(
        self, status: Optional[CourseStatus] = None
    ) -> list[Course]:
        """Courses the signed-in user is enrolled in."""
        spec = RequestSpec(
            method="GET",
            endpoint="/courses/enrolled",
            params={"status": _status_value(status)},
        )
        return [Course.model_validate(item) for item in await self.request_json(spec)]

    async def list_by_category(
        self, category: str, status: Optional[CourseStatus] = None
    ) -> list[Course]:
        spec = RequestSpec(
            method="GET",
            endpoint=f"/courses/category/{category}",
            params={"status": _status_value(status)},
        )
        return [Course.model_validate(item) for item in await self.request_json(spec)]

    def _search_spec(self, query: str, status: Optional[CourseStatus]) -> RequestSpec:
        return RequestSpec(
            method="GET",
            endpoint="/courses/search",
            params={"query": query, "status": _status_value(status)},
        )

    def _retrieve_spec(
        self,
        course_id: Identifier,
        include_modules: bool,
        user_role: Optional[str],
    ) -> RequestSpec:
        status = STATUS_PUBLISHED if user_role == ROLE_STUDENT else None
        return RequestSpec(
            method="GET",
            endpoint=f"/courses/{course_id}",
            params={"includeModules": include_modules, "status": status},
        )


def _status_value(status: Optional[CourseStatus]) -> Optional[str]:
    if status is None:
        return None
    return CourseStatus(status).value
