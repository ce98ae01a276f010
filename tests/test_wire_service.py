"""Tests for wire lifecycle: create, update, status changes, delete."""

from datetime import datetime, timedelta

import pytest

from wires.core.errors import DuplicateWireId, EmptyTitle, InvalidStatus, NotFound
from wires.dag.readiness import DONE_OR_CANCELLED
from wires.models.wire import WireStatus
from wires.services import WireService
from wires.services.wire_service import generate_id


class TestGenerateId:
    def test_seven_hex_chars(self):
        wire_id = generate_id("Build the thing")
        assert len(wire_id) == 7
        int(wire_id, 16)


class TestWireStatus:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("todo", WireStatus.TODO),
            ("in_progress", WireStatus.IN_PROGRESS),
            ("in-progress", WireStatus.IN_PROGRESS),
            ("DONE", WireStatus.DONE),
            (" cancelled ", WireStatus.CANCELLED),
        ],
    )
    def test_parse(self, text, expected):
        assert WireStatus.parse(text) is expected

    def test_parse_invalid(self):
        with pytest.raises(InvalidStatus):
            WireStatus.parse("blocked")


class TestCreate:
    def test_create_defaults(self, wires):
        wire = wires.create("Write docs")
        assert len(wire.id) == 7
        assert wire.title == "Write docs"
        assert wire.status == WireStatus.TODO
        assert wire.priority == 0
        assert wire.description is None
        assert wire.created_at == wire.updated_at

    def test_create_with_description_and_priority(self, wires):
        wire = wires.create("Ship", description="release 1.0", priority=3)
        fetched = wires.get(wire.id)
        assert fetched.description == "release 1.0"
        assert fetched.priority == 3

    @pytest.mark.parametrize("title", ["", "   "])
    def test_empty_title_rejected(self, wires, title):
        with pytest.raises(EmptyTitle):
            wires.create(title)
        assert wires.count() == 0

    def test_ids_are_distinct(self, wires):
        ids = {wires.create("same title").id for _ in range(20)}
        assert len(ids) == 20

    def test_id_collision_regenerates(self, db):
        ids = iter(["aaaaaaa", "aaaaaaa", "bbbbbbb"])
        service = WireService(db, id_factory=lambda title: next(ids))
        assert service.create("first").id == "aaaaaaa"
        assert service.create("second").id == "bbbbbbb"

    def test_duplicate_id_after_attempts(self, db):
        service = WireService(db, id_attempts=3, id_factory=lambda title: "aaaaaaa")
        service.create("first")
        with pytest.raises(DuplicateWireId):
            service.create("second")
        assert service.count() == 1


class TestQuery:
    def test_get_missing(self, wires):
        with pytest.raises(NotFound) as exc:
            wires.get("nope123")
        assert "nope123" in exc.value.message

    def test_list_newest_first(self, wires):
        first = wires.create("first")
        second = wires.create("second")
        third = wires.create("third")
        assert [w.id for w in wires.list()] == [third.id, second.id, first.id]

    def test_list_by_status(self, wires):
        a = wires.create("a")
        b = wires.create("b")
        wires.start(b.id)
        assert [w.id for w in wires.list(WireStatus.IN_PROGRESS)] == [b.id]
        assert [w.id for w in wires.list(WireStatus.TODO)] == [a.id]
        assert wires.list(WireStatus.DONE) == []

    def test_get_detail(self, wires, deps):
        a = wires.create("a")
        b = wires.create("b")
        c = wires.create("c")
        deps.add_edge(a.id, b.id)
        deps.add_edge(c.id, a.id)

        detail = wires.get_detail(a.id)
        assert [d.id for d in detail.depends_on] == [b.id]
        assert [d.id for d in detail.blocks] == [c.id]
        assert detail.depends_on[0].title == "b"

    def test_list_details(self, wires, deps):
        a = wires.create("a")
        b = wires.create("b")
        deps.add_edge(a.id, b.id)
        details = {d.id: d for d in wires.list_details()}
        assert [d.id for d in details[a.id].depends_on] == [b.id]
        assert [d.id for d in details[b.id].blocks] == [a.id]


class TestUpdate:
    def test_update_fields(self, wires):
        wire = wires.create("old", description="desc")
        updated = wires.update(wire.id, title="new", priority=7, status=WireStatus.IN_PROGRESS)
        assert updated.title == "new"
        assert updated.priority == 7
        assert updated.status == WireStatus.IN_PROGRESS
        assert updated.description == "desc"
        assert updated.updated_at >= wire.updated_at

    def test_empty_description_clears(self, wires):
        wire = wires.create("t", description="desc")
        assert wires.update(wire.id, description="").description is None

    def test_empty_title_rejected(self, wires):
        wire = wires.create("keep me")
        with pytest.raises(EmptyTitle):
            wires.update(wire.id, title="  ")
        assert wires.get(wire.id).title == "keep me"

    def test_update_missing(self, wires):
        with pytest.raises(NotFound):
            wires.update("nope123", title="x")

    def test_noop_update(self, wires):
        wire = wires.create("t")
        assert wires.update(wire.id).updated_at == wire.updated_at


class TestStatusChanges:
    def test_start_done_cancel(self, wires):
        wire = wires.create("t")
        assert wires.start(wire.id).status == WireStatus.IN_PROGRESS
        assert wires.done(wire.id).status == WireStatus.DONE
        assert wires.cancel(wire.id).status == WireStatus.CANCELLED

    def test_done_without_dependencies_has_no_warnings(self, wires):
        wire = wires.create("t")
        assert wires.done(wire.id).warnings == []

    def test_done_warns_about_incomplete_dependencies(self, wires, deps):
        a = wires.create("a")
        b = wires.create("b")
        c = wires.create("c")
        deps.add_edge(a.id, b.id)
        deps.add_edge(a.id, c.id)
        wires.done(c.id)
        wires.start(b.id)

        change = wires.done(a.id)
        assert change.status == WireStatus.DONE
        assert [(w.type, w.wire_id, w.status) for w in change.warnings] == [
            ("incomplete_dependency", b.id, WireStatus.IN_PROGRESS)
        ]
        assert wires.get(a.id).status == WireStatus.DONE

    def test_cancelled_dependency_warns_by_default(self, wires, deps):
        a = wires.create("a")
        b = wires.create("b")
        deps.add_edge(a.id, b.id)
        wires.cancel(b.id)
        assert len(wires.done(a.id).warnings) == 1

    def test_cancelled_dependency_quiet_when_it_unblocks(self, db, deps):
        service = WireService(db, satisfied=DONE_OR_CANCELLED)
        a = service.create("a")
        b = service.create("b")
        deps.add_edge(a.id, b.id)
        service.cancel(b.id)
        assert service.done(a.id).warnings == []

    def test_status_change_missing(self, wires):
        with pytest.raises(NotFound):
            wires.start("nope123")


class TestTimestamps:
    @pytest.fixture
    def clock(self, monkeypatch):
        """Each timestamp read is one second after the previous one."""
        ticks = iter(datetime(2025, 1, 1) + timedelta(seconds=n) for n in range(1000))
        monkeypatch.setattr("wires.repositories.wire_repo.utcnow", lambda: next(ticks))

    def test_update_refreshes_updated_at(self, wires, clock):
        wire = wires.create("t")
        updated = wires.update(wire.id, priority=3)
        assert updated.updated_at > wire.updated_at
        assert updated.created_at == wire.created_at
        assert wires.get(wire.id).updated_at == updated.updated_at

    @pytest.mark.parametrize("action", ["start", "done", "cancel"])
    def test_status_shortcut_refreshes_updated_at(self, wires, clock, action):
        wire = wires.create("t")
        change = getattr(wires, action)(wire.id)
        assert change.updated_at > wire.updated_at

        stored = wires.get(wire.id)
        assert stored.updated_at == change.updated_at
        assert stored.created_at == wire.created_at

    def test_successive_mutations_keep_advancing(self, wires, clock):
        wire = wires.create("t")
        stamps = [wire.updated_at]
        stamps.append(wires.start(wire.id).updated_at)
        stamps.append(wires.update(wire.id, title="renamed").updated_at)
        stamps.append(wires.done(wire.id).updated_at)
        assert stamps == sorted(set(stamps))
        assert wires.get(wire.id).created_at == wire.created_at


class TestDelete:
    def test_delete_removes_wire_and_edges(self, wires, deps):
        a = wires.create("a")
        b = wires.create("b")
        c = wires.create("c")
        deps.add_edge(a.id, b.id)
        deps.add_edge(b.id, c.id)

        wires.delete(b.id)
        assert wires.count() == 2
        assert deps.edges() == []
        with pytest.raises(NotFound):
            wires.get(b.id)

    def test_delete_missing(self, wires):
        with pytest.raises(NotFound):
            wires.delete("nope123")
