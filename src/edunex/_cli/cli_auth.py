import click

from ._utils._common import (
    base_url_option,
    handle_errors,
    run_with_client,
    verbose_option,
)


@click.command()
@click.option("--username", "-u", prompt=True, help="Account email")
@click.option(
    "--password",
    "-p",
    prompt=True,
    hide_input=True,
    help="Account password",
)
@base_url_option
@verbose_option
@handle_errors
def login(username, password, base_url=None, verbose=False):
    """Sign in and store the access token in the local .env file."""

    async def _login(client):
        return await client.auth.login(username, password)

    token = run_with_client(base_url, verbose, _login)

    name = token.user.email if token.user and token.user.email else username
    click.echo(f"Signed in as {name}.")


@click.command()
@base_url_option
@verbose_option
@handle_errors
def logout(base_url=None, verbose=False):
    """Sign out and remove the stored access token."""

    async def _logout(client):
        await client.auth.logout()

    run_with_client(base_url, verbose, _logout)
    click.echo("Signed out.")
