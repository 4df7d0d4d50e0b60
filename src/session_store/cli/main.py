"""CLI entry point for session-store.

Invoked as::

    session-store [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m session_store.cli.main

Commands
--------
- version         — Show version information
- find            — Print the payload stored for a token
- save            — Store a payload for a token with a TTL
- delete          — Remove a token
- delete-pattern  — Remove every token starting with a pattern
"""
from __future__ import annotations

import logging
import sys
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import click
from rich.console import Console

from session_store import __version__
from session_store.config import DEFAULT_PREFIX, StoreConfig, load_config
from session_store.errors import ConfigError, StoreError
from session_store.store.base import Store

console = Console()


# ---------------------------------------------------------------------------
# Store factory
# ---------------------------------------------------------------------------


def _build_config(url: str | None, prefix: str | None, config_path: str | None) -> StoreConfig:
    """Merge an optional YAML config file with command-line overrides."""
    config = load_config(config_path) if config_path else StoreConfig()
    overrides: dict[str, object] = {}
    if url is not None:
        overrides["url"] = url
    if prefix is not None:
        overrides["prefix"] = prefix
    if not overrides:
        return config
    return StoreConfig.model_validate({**config.model_dump(), **overrides})


def _make_store(config: StoreConfig) -> Store:
    """Instantiate the Redis store described by ``config``."""
    from session_store.store.redis import RedisStore

    return RedisStore.from_config(config)


def _run(action: str, func: Callable[..., Any], *args: Any) -> Any:
    """Call a store operation, exiting with status 1 on backend errors."""
    try:
        return func(*args)
    except StoreError as exc:
        console.print(f"[red]{action} failed:[/red] {exc}")
        sys.exit(1)


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------


@click.group()
@click.option(
    "--url",
    default=None,
    envvar="SESSION_STORE_URL",
    help="Redis connection URL (default redis://localhost:6379/0).",
)
@click.option(
    "--prefix",
    default=None,
    envvar="SESSION_STORE_PREFIX",
    help=f"Key namespace prefix (default {DEFAULT_PREFIX!r}).",
)
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(dir_okay=False),
    help="YAML file with store settings.",
)
@click.option(
    "--log-level",
    default="WARNING",
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
)
@click.version_option(version=__version__)
@click.pass_context
def cli(
    ctx: click.Context,
    url: str | None,
    prefix: str | None,
    config_path: str | None,
    log_level: str,
) -> None:
    """Inspect and manage sessions in a Redis session store."""
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    ctx.ensure_object(dict)
    try:
        ctx.obj["config"] = _build_config(url, prefix, config_path)
    except (ConfigError, ValueError) as exc:
        console.print(f"[red]Invalid configuration:[/red] {exc}")
        sys.exit(1)


def _store(ctx: click.Context) -> Store:
    if "store" not in ctx.obj:
        store = _make_store(ctx.obj["config"])
        ctx.call_on_close(store.close)
        ctx.obj["store"] = store
    return ctx.obj["store"]


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show version information."""
    console.print(f"[bold]session-store[/bold] v{__version__}")


# ---------------------------------------------------------------------------
# find
# ---------------------------------------------------------------------------


@cli.command(name="find")
@click.argument("token")
@click.pass_context
def find_command(ctx: click.Context, token: str) -> None:
    """Print the payload stored for TOKEN."""
    payload, found = _run("Find", _store(ctx).find, token)
    if not found:
        console.print(f"[yellow]Session not found:[/yellow] {token}")
        sys.exit(1)
    click.echo(payload.decode("utf-8", errors="replace"))


# ---------------------------------------------------------------------------
# save
# ---------------------------------------------------------------------------


@cli.command(name="save")
@click.argument("token")
@click.argument("data")
@click.option(
    "--ttl",
    default=86400,
    show_default=True,
    type=click.IntRange(min=1),
    help="Seconds until the session expires.",
)
@click.pass_context
def save_command(ctx: click.Context, token: str, data: str, ttl: int) -> None:
    """Store DATA for TOKEN, expiring TTL seconds from now."""
    expiry = datetime.now(timezone.utc) + timedelta(seconds=ttl)
    _run("Save", _store(ctx).save, token, data.encode("utf-8"), expiry)
    console.print(f"[green]Session saved:[/green] {token} (expires {expiry.isoformat()})")


# ---------------------------------------------------------------------------
# delete
# ---------------------------------------------------------------------------


@cli.command(name="delete")
@click.argument("token")
@click.pass_context
def delete_command(ctx: click.Context, token: str) -> None:
    """Remove TOKEN.  Removing a missing token succeeds."""
    _run("Delete", _store(ctx).delete, token)
    console.print(f"[green]Session deleted:[/green] {token}")


# ---------------------------------------------------------------------------
# delete-pattern
# ---------------------------------------------------------------------------


@cli.command(name="delete-pattern")
@click.argument("pattern")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
def delete_pattern_command(ctx: click.Context, pattern: str, yes: bool) -> None:
    """Remove every session whose token starts with PATTERN."""
    prefix = ctx.obj["config"].prefix
    if not yes:
        click.confirm(f"Delete all sessions matching {prefix}{pattern}*?", abort=True)
    _run("Delete by pattern", _store(ctx).delete_by_pattern, pattern)
    console.print(f"[green]Sessions deleted:[/green] {prefix}{pattern}*")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


if __name__ == "__main__":
    cli()
