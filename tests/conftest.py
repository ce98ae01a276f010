"""Shared test fixtures for wires tests."""

import pytest
from typer.testing import CliRunner

from wires.core.database import Database
from wires.core.repository import init_repository
from wires.services import DependencyService, GraphService, WireService


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's WIRES_* environment out of the tests."""
    for name in ("WIRES_DB_PATH", "WIRES_LOG_LEVEL", "WIRES_CANCELLED_UNBLOCKS", "WIRES_ID_ATTEMPTS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def db():
    """Fresh in-memory store for each test."""
    database = Database.in_memory()
    yield database
    database.dispose()


@pytest.fixture
def file_db(tmp_path):
    """File-backed store in an initialized repository under tmp_path."""
    db_path = init_repository(tmp_path)
    database = Database.from_path(db_path)
    yield database
    database.dispose()


@pytest.fixture
def wires(db):
    return WireService(db)


@pytest.fixture
def deps(db):
    return DependencyService(db)


@pytest.fixture
def graph(db):
    return GraphService(db)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def repo_dir(tmp_path, monkeypatch):
    """An initialized repository that is also the working directory."""
    monkeypatch.chdir(tmp_path)
    init_repository(tmp_path)
    return tmp_path
