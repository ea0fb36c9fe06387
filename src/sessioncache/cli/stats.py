"""sessioncache stats command - show namespace occupancy and policy."""

import json

import click
from rich.console import Console
from rich.table import Table

from sessioncache.cli.utils import cli_errors, namespaces_or_builtin, open_store


@click.command()
@click.argument("namespaces", nargs=-1)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def stats_command(ctx: click.Context, namespaces: tuple[str, ...], as_json: bool) -> None:
    """Show stats for NAMESPACES (default: the built-in tool namespaces)."""
    results = []
    for namespace in namespaces_or_builtin(namespaces):
        store = open_store(ctx, namespace)
        with cli_errors():
            results.append(store.stats())

    if as_json:
        click.echo(json.dumps([s.to_dict() for s in results], indent=2))
        return

    table = Table(title="Session namespaces")
    table.add_column("namespace", style="cyan")
    table.add_column("live", justify="right")
    table.add_column("max", justify="right")
    table.add_column("ttl (h)", justify="right")
    table.add_column("policy")
    table.add_column("location", overflow="fold")
    for s in results:
        table.add_row(
            s.namespace,
            str(s.live_count),
            str(s.max_entries),
            f"{s.ttl_ms / 3_600_000:g}",
            s.eviction_policy.value,
            s.storage_location,
        )
    Console().print(table)
