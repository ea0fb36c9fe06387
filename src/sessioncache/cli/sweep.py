"""sessioncache sweep command - remove expired and corrupt records now."""

import click

from sessioncache.cli.utils import namespaces_or_builtin, open_store


@click.command()
@click.argument("namespaces", nargs=-1)
@click.pass_context
def sweep_command(ctx: click.Context, namespaces: tuple[str, ...]) -> None:
    """Sweep NAMESPACES (default: the built-in tool namespaces).

    Sweeps normally happen lazily during saves and loads; this runs one for
    namespaces that have not been touched in a while.
    """
    total = 0
    for namespace in namespaces_or_builtin(namespaces):
        removed = open_store(ctx, namespace).sweep()
        total += removed
        click.echo(f"{namespace}: removed {removed}")
    click.echo(f"Total removed: {total}")
