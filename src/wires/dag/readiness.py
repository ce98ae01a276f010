"""Readiness — which wires are active and have no unfinished blocker."""

from __future__ import annotations
from collections import defaultdict
from collections.abc import Iterable

from wires.dag.graph import EdgeLike, edge_pair
from wires.models.wire import WireStatus
from wires.schemas.wire import WireRecord

DONE_ONLY = frozenset({WireStatus.DONE})
DONE_OR_CANCELLED = frozenset({WireStatus.DONE, WireStatus.CANCELLED})


def ready_sort_key(wire: WireRecord) -> tuple:
    """Priority descending, then oldest first, then id."""
    return (-wire.priority, wire.created_at, wire.id)


def ready_wires(
    wires: Iterable[WireRecord],
    edges: Iterable[EdgeLike],
    satisfied: frozenset[WireStatus] = DONE_ONLY,
) -> list[WireRecord]:
    """Return the wires that can be worked on now.

    A wire qualifies when its status is TODO or IN_PROGRESS and every wire it
    depends on has a status in ``satisfied``. Pure function over a snapshot.
    """
    wires = list(wires)
    status_by_id = {w.id: w.status for w in wires}

    blockers: dict[str, set[str]] = defaultdict(set)
    for wire_id, depends_on in map(edge_pair, edges):
        blockers[wire_id].add(depends_on)

    ready = [
        w
        for w in wires
        if w.status.is_active
        and all(status_by_id.get(dep) in satisfied for dep in blockers.get(w.id, ()))
    ]
    ready.sort(key=ready_sort_key)
    return ready


def satisfied_statuses(cancelled_unblocks: bool = False) -> frozenset[WireStatus]:
    """Blocker statuses that count as finished under the configured policy."""
    return DONE_OR_CANCELLED if cancelled_unblocks else DONE_ONLY
