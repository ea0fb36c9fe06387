"""sessioncache CLI - inspect and maintain tool session namespaces."""

from pathlib import Path

import click

from sessioncache import __version__
from sessioncache.cli.sessions import delete_command, list_command, show_command
from sessioncache.cli.stats import stats_command
from sessioncache.cli.sweep import sweep_command
from sessioncache.cli.utils import get_settings
from sessioncache.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="sessioncache")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML config layered over ~/.config/sessioncache/config.yaml",
)
@click.option(
    "--base-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Override storage.base_dir",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, base_dir: Path | None, verbose: bool) -> None:
    """Session cache - persistent per-tool session storage."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["base_dir"] = base_dir

    logging_config = get_settings(ctx).logging
    if verbose:
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(config=logging_config)


cli.add_command(stats_command, name="stats")
cli.add_command(list_command, name="list")
cli.add_command(show_command, name="show")
cli.add_command(delete_command, name="delete")
cli.add_command(sweep_command, name="sweep")


if __name__ == "__main__":
    cli()
