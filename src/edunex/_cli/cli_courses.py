import click

from ..models.courses import CourseStatus
from ._utils._common import (
    base_url_option,
    echo_json,
    handle_errors,
    run_with_client,
    verbose_option,
)

_STATUS_CHOICE = click.Choice([s.value for s in CourseStatus], case_sensitive=False)


@click.group()
def courses():
    r"""Browse EduNex courses.

    \b
    Examples:
        edunex courses search python
        edunex courses enrolled --status PUBLISHED
    """
    pass


@courses.command(name="search")
@click.argument("query", default="")
@click.option("--status", type=_STATUS_CHOICE, default=None, help="Course status")
@base_url_option
@verbose_option
@handle_errors
def search_courses(query, status, base_url=None, verbose=False):
    """Search the course catalogue."""

    async def _search(client):
        return await client.courses.search(
            query, status=CourseStatus(status.upper()) if status else None
        )

    echo_json(run_with_client(base_url, verbose, _search))


@courses.command(name="enrolled")
@click.option("--status", type=_STATUS_CHOICE, default=None, help="Course status")
@base_url_option
@verbose_option
@handle_errors
def enrolled_courses(status, base_url=None, verbose=False):
    """List the courses you are enrolled in."""

    async def _enrolled(client):
        return await client.courses.list_enrolled(
            status=CourseStatus(status.upper()) if status else None
        )

    echo_json(run_with_client(base_url, verbose, _enrolled))


@click.group()
def enrollments():
    """Inspect your course enrollments."""
    pass


@enrollments.command(name="list")
@base_url_option
@verbose_option
@handle_errors
def list_enrollments(base_url=None, verbose=False):
    """List your enrollments."""

    async def _list(client):
        return await client.enrollments.list_for_user()

    echo_json(run_with_client(base_url, verbose, _list))
