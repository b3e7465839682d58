#!/usr/bin/env python3
"""
School Administration command line.

Browse, search and export the entity tables held in the configured record
store, check login credentials, or start the mock REST server:

    schooladmin list persons --search stu --sort regNo --page 2
    schooladmin export payments --search 2024 -o payments.csv
    schooladmin serve --port 8000
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from schooladmin.backend.core.listing import ENTITIES
from schooladmin.backend.core.listing.controller import resolve_field
from schooladmin.backend.core.storage import StoreError, build_store
from schooladmin.backend.core.utils.config import CONFIG_ENV, get_default_config, load_config
from schooladmin.backend.core.utils.logging_setup import setup_logging_from_config
from schooladmin.backend.services import TableSession, login, service_for

console = Console()
logger = logging.getLogger(__name__)

DEFAULT_CONFIG = "configs/default_config.yaml"
RESOURCE_CHOICE = click.Choice(sorted(ENTITIES))


def _load(config_path: str) -> dict:
    if Path(config_path).exists():
        return load_config(config_path)
    if config_path != DEFAULT_CONFIG:
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    return get_default_config()


def _fail(ctx: click.Context, label: str, exc: Exception) -> None:
    console.print(f"\n[bold red]{label}:[/bold red] {exc}")
    logger.debug("%s", label, exc_info=exc)
    if ctx.obj.get("debug"):
        raise exc
    raise SystemExit(1) from exc


def _open_session(ctx: click.Context, resource: str, page_size: int | None) -> TableSession:
    cfg = ctx.obj["config"]
    store = build_store(cfg)
    ctx.call_on_close(store.close)
    return TableSession(
        service_for(store, resource),
        page_size=page_size or cfg["listing"]["page_size"],
    )


def _apply_query(session: TableSession, search: str, sort: str | None, desc: bool) -> None:
    ctrl = session.controller
    ctrl.set_search_text(search)
    if sort:
        ctrl.set_sort(sort)
        if desc:
            ctrl.set_sort(sort)


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(),
    default=DEFAULT_CONFIG,
    help="Path to configuration file.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose output.")
@click.option("--debug", is_flag=True, default=False, help="Enable debug mode with additional logging.")
@click.pass_context
def main(ctx: click.Context, config: str, verbose: bool, debug: bool):
    """Institute administration data: tables, exports and the mock API."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug

    try:
        cfg = _load(config)
    except FileNotFoundError as e:
        console.print(f"\n[bold red]Configuration error:[/bold red] {e}")
        raise SystemExit(1) from e

    override = logging.DEBUG if debug else (logging.INFO if verbose else None)
    setup_logging_from_config(cfg, override)
    ctx.obj["config"] = cfg
    ctx.obj["config_path"] = Path(config).resolve() if Path(config).exists() else None


@main.command("list")
@click.argument("resource", type=RESOURCE_CHOICE)
@click.option("--search", "-s", default="", help="Case-insensitive free-text filter.")
@click.option("--sort", "sort_field", default=None, help="Field to sort by.")
@click.option("--desc", is_flag=True, default=False, help="Sort descending.")
@click.option("--page", "-p", type=int, default=1, help="Page to show (ignored if out of range).")
@click.option("--page-size", type=click.IntRange(min=1), default=None, help="Rows per page.")
@click.pass_context
def list_command(
    ctx: click.Context,
    resource: str,
    search: str,
    sort_field: str | None,
    desc: bool,
    page: int,
    page_size: int | None,
):
    """Show one page of RESOURCE as a table."""
    try:
        session = _open_session(ctx, resource, page_size)
    except StoreError as e:
        _fail(ctx, "Storage error", e)
        return

    _apply_query(session, search, sort_field, desc)
    ctrl = session.controller
    ctrl.go_to_page(page)

    table = Table(title=session.entity.label, show_lines=False)
    table.add_column("ID", justify="right", style="dim")
    for header, _ in session.entity.export_columns:
        table.add_column(header)

    for record in ctrl.iter_visible_rows():
        cells = [str(record.get("id", ""))]
        for _, accessor in session.entity.export_columns:
            value = resolve_field(record, accessor)
            cells.append("" if value is None else str(value))
        table.add_row(*cells)

    console.print(table)

    info = ctrl.page_info()
    if info.filtered_count == 0:
        console.print("[yellow]No rows.[/yellow]")
        return
    window = ctx.obj["config"]["listing"]["page_window"]
    pages = " ".join(
        f"[bold]{n}[/bold]" if n == info.page else str(n) for n in ctrl.page_numbers(window)
    )
    console.print(
        f"Showing {info.first_row} to {info.last_row} of {info.filtered_count} "
        f"(total {info.total_count})   Pages: {pages}"
    )


@main.command("export")
@click.argument("resource", type=RESOURCE_CHOICE)
@click.option("--search", "-s", default="", help="Case-insensitive free-text filter.")
@click.option("--sort", "sort_field", default=None, help="Field to sort by.")
@click.option("--desc", is_flag=True, default=False, help="Sort descending.")
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default=None,
    help="Output CSV path (default: <resource>_<date>.csv).",
)
@click.pass_context
def export_command(
    ctx: click.Context,
    resource: str,
    search: str,
    sort_field: str | None,
    desc: bool,
    output: str | None,
):
    """Write every RESOURCE row matching the search to CSV."""
    try:
        session = _open_session(ctx, resource, None)
    except StoreError as e:
        _fail(ctx, "Storage error", e)
        return

    _apply_query(session, search, sort_field, desc)
    filename, text = session.export_csv()
    path = Path(output or filename)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text + "\n", encoding="utf-8")
    console.print(
        f"[bold green]Exported {session.controller.filtered_count} rows[/bold green] → {path}"
    )


@main.command("login")
@click.argument("username")
@click.argument("password")
@click.pass_context
def login_command(ctx: click.Context, username: str, password: str):
    """Check USERNAME / PASSWORD against the stored users."""
    store = build_store(ctx.obj["config"])
    try:
        result = login(store, username, password)
    except StoreError as e:
        _fail(ctx, "Storage error", e)
        return
    finally:
        store.close()

    if not result.success:
        console.print(f"[bold red]{result.message}[/bold red]")
        raise SystemExit(1)
    console.print(f"[bold green]{result.message}[/bold green] – role: {result.user['role']}")
    console.print(f"Token: {result.token}")


@main.command("serve")
@click.option("--host", default=None, help="Bind address (default from config).")
@click.option("--port", type=int, default=None, help="Port (default from config).")
@click.option("--reload", is_flag=True, default=False, help="Auto-reload on code changes.")
@click.pass_context
def serve_command(ctx: click.Context, host: str | None, port: int | None, reload: bool):
    """Run the mock REST API with uvicorn."""
    import uvicorn

    # The server process builds its own app; point it at the same config file
    config_path = ctx.obj["config_path"]
    if config_path is not None:
        os.environ[CONFIG_ENV] = str(config_path)

    api_cfg = ctx.obj["config"]["api"]
    uvicorn.run(
        "schooladmin.backend.api.app:app",
        host=host or api_cfg["host"],
        port=port or int(api_cfg["port"]),
        reload=reload,
    )


if __name__ == "__main__":
    main()
