"""CLI utilities."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import click

from sessioncache.config.loader import load_config
from sessioncache.config.models import SessionCacheConfig
from sessioncache.core.errors import SessionCacheError
from sessioncache.store.namespace import NamespaceStore
from sessioncache.store.policy import BUILTIN_NAMESPACES, resolve_namespace_config


def get_settings(ctx: click.Context) -> SessionCacheConfig:
    """Load settings once per invocation from the group's --config option."""
    obj: dict[str, Any] = ctx.ensure_object(dict)
    if "settings" not in obj:
        with cli_errors():
            obj["settings"] = load_config(obj.get("config_path"))
    settings: SessionCacheConfig = obj["settings"]
    return settings


def open_store(ctx: click.Context, namespace: str) -> NamespaceStore[Any]:
    """Open a store for ``namespace`` with payloads left as raw JSON values.

    Raises:
        click.ClickException: If the namespace name or settings are invalid.
    """
    settings = get_settings(ctx)
    base_dir: Path | None = ctx.obj.get("base_dir")
    with cli_errors():
        config = resolve_namespace_config(namespace, settings=settings)
    return NamespaceStore(
        config,
        base_dir or settings.storage.base_path,
        sweep_threshold=settings.storage.sweep_threshold,
    )


def namespaces_or_builtin(namespaces: tuple[str, ...]) -> list[str]:
    return list(namespaces) if namespaces else sorted(BUILTIN_NAMESPACES)


def format_ms(timestamp_ms: int) -> str:
    """Render an epoch-millisecond timestamp as UTC ISO-8601."""
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=UTC).isoformat(timespec="seconds")


@contextmanager
def cli_errors() -> Iterator[None]:
    """Turn store/config errors into ClickException (exit code 1, no traceback)."""
    try:
        yield
    except SessionCacheError as e:
        raise click.ClickException(str(e)) from e
