"""Wires repository lifecycle — `.wires/` creation and discovery."""

import logging
from pathlib import Path

from wires.core.config import WiresSettings
from wires.core.database import Database
from wires.core.errors import AlreadyInitialized, NotARepository

logger = logging.getLogger("wires.repository")

WIRES_DIR = ".wires"
DB_NAME = "wires.db"


def init_repository(path: Path) -> Path:
    """Create `.wires/wires.db` with the schema under ``path``. Returns the db path."""
    wires_dir = path / WIRES_DIR
    if wires_dir.exists():
        raise AlreadyInitialized(str(wires_dir))

    wires_dir.mkdir(parents=True)
    db_path = wires_dir / DB_NAME
    db = Database.from_path(db_path)
    try:
        db.create_tables()
    finally:
        db.dispose()

    logger.info(f"Initialized wires repository: {db_path}")
    return db_path


def find_database(start: Path | None = None) -> Path:
    """Search ``start`` and its parents for `.wires/wires.db`, like git does for `.git`."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        db_path = directory / WIRES_DIR / DB_NAME
        if db_path.exists():
            return db_path
    raise NotARepository()


def find_wires_dir(start: Path | None = None) -> Path | None:
    try:
        return find_database(start).parent
    except NotARepository:
        return None


def open_database(settings: WiresSettings, start: Path | None = None) -> Database:
    """Open the store named by settings, or the one discovered from ``start``."""
    if settings.db_path is not None:
        db = Database.from_path(settings.db_path, busy_timeout=settings.busy_timeout)
        db.create_tables()
        return db

    return Database.from_path(find_database(start), busy_timeout=settings.busy_timeout)
