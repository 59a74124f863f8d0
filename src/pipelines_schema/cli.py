"""pipelines-schema CLI - Azure Pipelines schema resolution from the command line."""
import asyncio
import json
from pathlib import Path
from typing import Awaitable, Callable, Optional, TypeVar

import click

from scitrera_app_framework import Variables, get_variables

T = TypeVar("T")


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logs")
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """pipelines-schema - Pick the YAML schema for Azure Pipelines files."""
    if ctx.obj is None:
        ctx.obj = get_variables()  # get variables instance prior to preconfigure() call
    v = ctx.obj
    if verbose:
        v.set("LOGGING_LEVEL", "DEBUG")


def _workspace(folder: Optional[str]):
    from pipelines_schema.models import WorkspaceFolder
    # resolve before preconfigure() changes the working directory
    return WorkspaceFolder.from_path(folder) if folder else None


def _run(v: Variables, main: Callable[[Variables], Awaitable[T]]) -> T:
    """Run ``main`` with services initialized, letting detached prompts finish first."""
    from pipelines_schema.dependencies import initialize_services, shutdown_services
    from pipelines_schema.services.notifier import get_association_notifier
    from pipelines_schema.services.resolution import get_resolution_service

    async def runner() -> T:
        variables = await initialize_services(v)
        try:
            result = await main(variables)
            await get_resolution_service(variables).wait_for_background_tasks()
            await get_association_notifier(variables).drain()
            return result
        finally:
            await shutdown_services(variables)

    return asyncio.run(runner())


@cli.command()
@click.argument("folder", required=False, type=click.Path(exists=True, file_okay=False))
@click.pass_obj
def resolve(v: Variables, folder: Optional[str]):
    """Print the schema location for FOLDER (static schema when omitted)."""
    from pipelines_schema.services.resolution import get_resolution_service

    workspace = _workspace(folder)

    async def main(v):
        location = await get_resolution_service(v).resolve(workspace)
        click.echo(f"{location.path} ({location.source.value})")

    _run(v, main)


@cli.command()
@click.argument("folder", required=False, type=click.Path(exists=True, file_okay=False))
@click.pass_obj
def associations(v: Variables, folder: Optional[str]):
    """Publish and print the schema association map for FOLDER."""
    from pipelines_schema.services.publisher import get_association_publisher

    workspace = _workspace(folder)

    async def main(v):
        published = await get_association_publisher(v).publish(workspace)
        click.echo(json.dumps(published, indent=2))

    _run(v, main)


@cli.command()
@click.argument("folders", nargs=-1, required=True, type=click.Path(exists=True, file_okay=False))
@click.pass_obj
def watch(v: Variables, folders: tuple[str, ...]):
    """Publish associations for FOLDERS and re-publish on sign-in or organization selection until interrupted."""
    from pipelines_schema.services.publisher import get_association_publisher

    workspaces = [_workspace(folder) for folder in folders]

    async def main(v):
        publisher = get_association_publisher(v)
        for workspace in workspaces:
            await publisher.publish(workspace)
        click.echo(f"Watching {len(workspaces)} workspace folder(s); press Ctrl+C to stop", err=True)
        await asyncio.Event().wait()

    try:
        _run(v, main)
    except KeyboardInterrupt:
        click.echo("Stopped", err=True)


@cli.command()
@click.argument("folder", type=click.Path(exists=True, file_okay=False))
@click.pass_obj
def forget(v: Variables, folder: str):
    """Forget the organization chosen for FOLDER."""
    from pipelines_schema.services.workspace_state import get_workspace_state_service

    workspace = _workspace(folder)

    async def main(v) -> bool:
        return await get_workspace_state_service(v).forget_organization_details(workspace.name)

    if _run(v, main):
        click.echo(f"Forgot organization for {workspace.name}")
    else:
        click.echo(f"No organization saved for {workspace.name}")


@cli.command()
@click.pass_obj
def info(v: Variables):
    """Show configuration, sessions and saved organizations."""
    from pipelines_schema.services.identity import get_identity_provider
    from pipelines_schema.services.resolution import get_resolution_service
    from pipelines_schema.services.schema_fetcher import get_schema_fetcher
    from pipelines_schema.services.workspace_state import get_workspace_state_service

    async def main(v):
        identity_provider = get_identity_provider(v)
        signed_in = await identity_provider.wait_for_login()
        saved = await get_workspace_state_service(v).get_organization_details()

        click.echo(f"Data directory:   {Path.cwd()}")
        click.echo(f"Schema storage:   {get_schema_fetcher(v).storage_root}")
        click.echo(f"Static schema:    {get_resolution_service(v).get_fallback_location().path}")
        click.echo(f"Signed in:        {'yes' if signed_in else 'no'} ({len(identity_provider.sessions)} session(s))")
        click.echo("Saved organizations:")
        if not saved:
            click.echo("  (none)")
        for name, details in sorted(saved.items()):
            click.echo(f"  {name}: {details.organization} (tenant {details.tenant})")

    _run(v, main)


@cli.command()
def version():
    """Show version information."""
    from pipelines_schema import __version__
    click.echo(f"pipelines-schema v{__version__}")


if __name__ == "__main__":
    cli()
