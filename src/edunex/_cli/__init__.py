import click

from .cli_auth import login, logout
from .cli_courses import courses, enrollments


@click.group()
@click.version_option(package_name="edunex-client")
def cli() -> None:
    """EduNex command line client."""


cli.add_command(login)
cli.add_command(logout)
cli.add_command(courses)
cli.add_command(enrollments)
