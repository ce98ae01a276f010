"""Wires CLI — `wr`, a local task tracker for AI coding agents."""

import json
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from wires import __version__
from wires.cli.render import (
    GraphFormat,
    OutputFormat,
    resolve_format,
    to_json,
    wire_detail,
    wire_table,
)
from wires.core.config import WiresSettings, get_settings
from wires.core.errors import WireError
from wires.core.repository import find_wires_dir, init_repository, open_database
from wires.dag.export import to_dot
from wires.dag.readiness import satisfied_statuses
from wires.models.wire import WireStatus
from wires.schemas.wire import StatusChange
from wires.services import DependencyService, GraphService, WireService

logger = logging.getLogger("wires.cli")

app = typer.Typer(
    name="wr",
    help="Lightweight local task tracker optimized for AI coding agents",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


@contextmanager
def _store():
    """Open the repository's database for one command; report WireErrors and exit 1."""
    db = None
    try:
        settings = get_settings(find_wires_dir())
        db = open_database(settings)
        yield db, settings
    except WireError as e:
        _fail(e)
    finally:
        if db is not None:
            db.dispose()


def _fail(error: WireError):
    logger.debug(f"Command failed with {error.kind}: {error.message}")
    if sys.stderr.isatty():
        err_console.print(f"[red]Error:[/red] {error.message}", highlight=False)
    else:
        typer.echo(json.dumps(error.to_dict()), err=True)
    raise typer.Exit(1)


def _parse_status(value: Optional[str]) -> Optional[WireStatus]:
    if value is None:
        return None
    try:
        return WireStatus.parse(value)
    except WireError as e:
        _fail(e)


def _wire_service(db, settings: WiresSettings) -> WireService:
    return WireService(
        db,
        satisfied=satisfied_statuses(settings.cancelled_unblocks),
        id_attempts=settings.id_attempts,
    )


def _echo_change(change: StatusChange):
    exclude = None if change.warnings else {"warnings"}
    typer.echo(json.dumps(change.model_dump(mode="json", exclude=exclude)))


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
):
    """Lightweight local task tracker optimized for AI coding agents."""
    try:
        settings = get_settings(find_wires_dir())
    except WireError as e:
        _fail(e)
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.ERROR)
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )


# ─── Repository ───


@app.command()
def init():
    """Initialize a new wires repository in the current directory."""
    try:
        db_path = init_repository(Path.cwd())
    except WireError as e:
        _fail(e)
    typer.echo(json.dumps({"status": "initialized", "path": str(db_path)}))


@app.command()
def version():
    """Show wires version."""
    typer.echo(f"wires v{__version__}")


# ─── Wire Commands ───


@app.command()
def new(
    title: str = typer.Argument(..., help="Wire title"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="Wire description"),
    priority: int = typer.Option(0, "--priority", "-p", help="Priority (higher = more important)"),
):
    """Create a new wire."""
    with _store() as (db, settings):
        wire = _wire_service(db, settings).create(title, description=description, priority=priority)
        typer.echo(
            json.dumps(
                wire.model_dump(mode="json", include={"id", "title", "status", "priority", "created_at"})
            )
        )


@app.command(name="list")
def list_wires(
    status: Optional[str] = typer.Option(None, "--status", "-s", help="Filter by status"),
    fmt: Optional[OutputFormat] = typer.Option(None, "--format", "-f", help="Output format"),
):
    """List wires, newest first."""
    status_filter = _parse_status(status)
    with _store() as (db, settings):
        service = _wire_service(db, settings)
        if resolve_format(fmt) is OutputFormat.json:
            typer.echo(to_json(service.list(status_filter)))
            return

        wires = service.list_details(status_filter)
        if not wires:
            console.print("[dim]No wires found.[/dim]")
            return
        console.print(wire_table(wires, satisfied=service.satisfied))


@app.command()
def show(
    wire_id: str = typer.Argument(..., help="Wire ID"),
    fmt: Optional[OutputFormat] = typer.Option(None, "--format", "-f", help="Output format"),
):
    """Show a wire with its dependencies and the wires it blocks."""
    with _store() as (db, settings):
        detail = _wire_service(db, settings).get_detail(wire_id)
        if resolve_format(fmt) is OutputFormat.json:
            typer.echo(to_json(detail))
        else:
            console.print(wire_detail(detail))


@app.command()
def update(
    wire_id: str = typer.Argument(..., help="Wire ID"),
    title: Optional[str] = typer.Option(None, "--title", help="New title"),
    description: Optional[str] = typer.Option(None, "--description", help="New description (empty clears it)"),
    status: Optional[str] = typer.Option(None, "--status", help="New status"),
    priority: Optional[int] = typer.Option(None, "--priority", help="New priority"),
):
    """Update wire fields."""
    new_status = _parse_status(status)
    with _store() as (db, settings):
        wire = _wire_service(db, settings).update(
            wire_id, title=title, description=description, status=new_status, priority=priority
        )
        typer.echo(json.dumps(wire.model_dump(mode="json", include={"id", "status", "priority", "updated_at"})))


@app.command()
def start(wire_id: str = typer.Argument(..., help="Wire ID")):
    """Set wire status to IN_PROGRESS."""
    with _store() as (db, settings):
        _echo_change(_wire_service(db, settings).start(wire_id))


@app.command()
def done(wire_id: str = typer.Argument(..., help="Wire ID")):
    """Set wire status to DONE (warns about unfinished dependencies)."""
    with _store() as (db, settings):
        _echo_change(_wire_service(db, settings).done(wire_id))


@app.command()
def cancel(wire_id: str = typer.Argument(..., help="Wire ID")):
    """Set wire status to CANCELLED."""
    with _store() as (db, settings):
        _echo_change(_wire_service(db, settings).cancel(wire_id))


@app.command()
def rm(wire_id: str = typer.Argument(..., help="Wire ID")):
    """Delete a wire and every dependency touching it."""
    with _store() as (db, settings):
        _wire_service(db, settings).delete(wire_id)
        typer.echo(json.dumps({"id": wire_id, "action": "deleted"}))


# ─── Dependency Commands ───


@app.command()
def dep(
    wire_id: str = typer.Argument(..., help="Wire ID that has the dependency"),
    depends_on: str = typer.Argument(..., help="Wire ID that it depends on"),
):
    """Add a dependency (WIRE_ID depends on DEPENDS_ON)."""
    with _store() as (db, _):
        DependencyService(db).add_edge(wire_id, depends_on)
        typer.echo(json.dumps({"wire_id": wire_id, "depends_on": depends_on, "action": "added"}))


@app.command()
def undep(
    wire_id: str = typer.Argument(..., help="Wire ID that has the dependency"),
    depends_on: str = typer.Argument(..., help="Wire ID that it depends on"),
):
    """Remove a dependency. Removing a missing dependency succeeds."""
    with _store() as (db, _):
        DependencyService(db).remove_edge(wire_id, depends_on)
        typer.echo(json.dumps({"wire_id": wire_id, "depends_on": depends_on, "action": "removed"}))


# ─── Graph Commands ───


@app.command()
def ready(
    fmt: Optional[OutputFormat] = typer.Option(None, "--format", "-f", help="Output format"),
):
    """Find wires ready to work on: active and with every dependency DONE."""
    with _store() as (db, settings):
        wires = GraphService(db, satisfied=satisfied_statuses(settings.cancelled_unblocks)).ready()
        if resolve_format(fmt) is OutputFormat.json:
            typer.echo(to_json(wires))
        elif not wires:
            console.print("[dim]No ready wires.[/dim]")
        else:
            console.print(wire_table(wires, title="Ready"))


@app.command()
def graph(
    fmt: GraphFormat = typer.Option(GraphFormat.json, "--format", "-f", help="json or dot (GraphViz)"),
):
    """Export the dependency graph."""
    with _store() as (db, _):
        exported = GraphService(db).export()
        if fmt is GraphFormat.dot:
            typer.echo(to_dot(exported), nl=False)
        else:
            typer.echo(to_json(exported))


if __name__ == "__main__":
    app()
