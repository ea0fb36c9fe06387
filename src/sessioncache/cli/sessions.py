"""sessioncache list/show/delete commands - inspect individual sessions."""

import json

import click
from rich.console import Console
from rich.table import Table

from sessioncache.cli.utils import cli_errors, format_ms, open_store


@click.command()
@click.argument("namespace")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_command(ctx: click.Context, namespace: str, as_json: bool) -> None:
    """List live sessions in NAMESPACE. Does not refresh access times."""
    store = open_store(ctx, namespace)
    records = store.list()

    if as_json:
        click.echo(
            json.dumps(
                [
                    {
                        "session_id": r.session_id,
                        "created_at": r.created_at,
                        "last_accessed_at": r.last_accessed_at,
                    }
                    for r in records
                ],
                indent=2,
            )
        )
        return

    if not records:
        click.echo(f"No live sessions in '{namespace}'.")
        return

    table = Table(title=f"{namespace} ({len(records)} live)")
    table.add_column("session", style="cyan", overflow="fold")
    table.add_column("created")
    table.add_column("last accessed")
    for r in records:
        table.add_row(r.session_id, format_ms(r.created_at), format_ms(r.last_accessed_at))
    Console().print(table)


@click.command()
@click.argument("namespace")
@click.argument("session_id")
@click.pass_context
def show_command(ctx: click.Context, namespace: str, session_id: str) -> None:
    """Print SESSION_ID from NAMESPACE as JSON.

    This is a regular load: expired or corrupt records are removed, and
    LRU namespaces record the access.
    """
    store = open_store(ctx, namespace)
    record = store.load(session_id)
    if record is None:
        raise click.ClickException(f"No live session '{session_id}' in '{namespace}'")
    click.echo(record.model_dump_json(indent=2))


@click.command()
@click.argument("namespace")
@click.argument("session_id")
@click.pass_context
def delete_command(ctx: click.Context, namespace: str, session_id: str) -> None:
    """Delete SESSION_ID from NAMESPACE."""
    store = open_store(ctx, namespace)
    with cli_errors():
        removed = store.delete(session_id)
    if not removed:
        raise click.ClickException(f"No session '{session_id}' in '{namespace}'")
    click.echo(f"Deleted '{session_id}' from '{namespace}'")
