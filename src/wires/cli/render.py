"""Output rendering — JSON for pipes, rich tables for terminals."""

import json
import sys
from enum import Enum
from typing import Any, Iterable

from pydantic import BaseModel
from rich.console import Group
from rich.table import Table
from rich.text import Text

from wires.dag.readiness import DONE_ONLY
from wires.models.wire import WireStatus
from wires.schemas.wire import DependencyInfo, WireDetail, WireRecord


class OutputFormat(str, Enum):
    json = "json"
    table = "table"


class GraphFormat(str, Enum):
    json = "json"
    dot = "dot"


STATUS_SYMBOLS = {
    WireStatus.TODO: ("○", "default"),
    WireStatus.IN_PROGRESS: ("◐", "yellow"),
    WireStatus.DONE: ("●", "green"),
    WireStatus.CANCELLED: ("✕", "red"),
}


def resolve_format(fmt: OutputFormat | None) -> OutputFormat:
    """Explicit choice wins; otherwise table on a terminal, JSON when piped."""
    if fmt is not None:
        return fmt
    return OutputFormat.table if sys.stdout.isatty() else OutputFormat.json


def to_json(data: Any) -> str:
    if isinstance(data, BaseModel):
        return data.model_dump_json(by_alias=True, exclude_none=True)
    if isinstance(data, list):
        return json.dumps(
            [d.model_dump(mode="json", by_alias=True, exclude_none=True) if isinstance(d, BaseModel) else d for d in data]
        )
    return json.dumps(data, default=str)


def status_symbol(status: WireStatus) -> Text:
    symbol, color = STATUS_SYMBOLS[status]
    return Text(symbol, style=color)


def open_blockers(deps: Iterable[DependencyInfo], satisfied: frozenset[WireStatus] = DONE_ONLY) -> list[str]:
    return [d.id for d in deps if d.status not in satisfied]


def wire_table(
    wires: list[WireRecord],
    title: str | None = None,
    satisfied: frozenset[WireStatus] = DONE_ONLY,
) -> Table:
    table = Table(title=title, show_header=True, show_lines=False, box=None)
    table.add_column("", no_wrap=True)
    table.add_column("ID", style="bold", no_wrap=True)
    table.add_column("Title")
    table.add_column("Pri", justify="right")
    table.add_column("Blocked by", style="dim")

    for w in wires:
        blockers = open_blockers(w.depends_on, satisfied) if isinstance(w, WireDetail) else []
        table.add_row(
            status_symbol(w.status),
            w.id,
            w.title,
            str(w.priority),
            ", ".join(blockers) or "",
        )
    return table


def _dependency_lines(label: str, deps: list[DependencyInfo]) -> Text:
    text = Text(f"\n{label}:\n", style="bold")
    for d in deps:
        text.append("  ")
        text.append_text(status_symbol(d.status))
        text.append(f" {d.id}  {d.title}\n")
    return text


def wire_detail(detail: WireDetail) -> Group:
    header = Text()
    header.append_text(status_symbol(detail.status))
    header.append(f" {detail.id}  ", style="bold")
    header.append(detail.title)
    header.append(f"  [pri:{detail.priority}] {detail.status.value}", style="dim")

    parts: list[Any] = [header]
    if detail.description:
        parts.append(Text(f"\n{detail.description}"))
    if detail.depends_on:
        parts.append(_dependency_lines("Depends on", detail.depends_on))
    if detail.blocks:
        parts.append(_dependency_lines("Blocks", detail.blocks))
    return Group(*parts)
