from __future__ import annotations

import functools
import os.path

import click
import uvloop

from logovote.app.infrastructure import InMemoryFileContent
from logovote.app.namespaces.services import BackupService
from logovote.config import config
from logovote.infrastructure.context import AppContext


def async_to_sync(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        return uvloop.run(func(*args, **kwargs))
    return wrapper


def warn_if_cache_is_local() -> None:
    if config.cache.backend_dsn == "mem://":
        click.echo(
            "Warning: cache backend is local, a running API server won't see "
            "these changes until it restarts.",
            err=True,
        )


@click.group()
def cli():
    pass


@cli.command()
@async_to_sync
async def prune() -> None:
    """Delete old namespaces without votes right away."""
    warn_if_cache_is_local()
    async with AppContext(config) as ctx:
        result = await ctx.usecases.superadmin.prune()
    click.echo(
        f"Checked {result.checked} namespaces: "
        f"{len(result.deleted)} deleted, {len(result.failed)} failed."
    )


@cli.command()
@click.argument("path", type=click.Path(dir_okay=False, writable=True))
@async_to_sync
async def export(path: str) -> None:
    """Export all namespaces and uploaded files to a ZIP archive at PATH."""
    async with AppContext(config) as ctx:
        with open(path, "wb") as f:
            for chunk in ctx.usecases.superadmin.export():
                f.write(chunk)
    click.echo(f"Exported to {os.path.abspath(path)}")


@cli.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.confirmation_option(
    prompt="All current namespaces and uploads will be replaced. Continue?"
)
@async_to_sync
async def import_(path: str) -> None:
    """Replace all namespaces and uploaded files with an archive at PATH."""
    warn_if_cache_is_local()
    with open(path, "rb") as f:
        content = InMemoryFileContent(f.read(), filename=os.path.basename(path))

    async with AppContext(config) as ctx:
        try:
            count = await ctx.usecases.superadmin.import_(content)
        except BackupService.InvalidArchive as exc:
            raise click.ClickException(f"Not a ZIP archive: {path}") from exc
    click.echo(f"Imported {count} namespaces.")


@cli.command("rebuild-names")
@async_to_sync
async def rebuild_names() -> None:
    """Rebuild friendly name registry from namespace records and report it."""
    async with AppContext(config) as ctx:
        count = await ctx.usecases.superadmin.rebuild_names()
    click.echo(f"Found {count} friendly names.")


if __name__ == "__main__":
    cli()
