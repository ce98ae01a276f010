"""Wires configuration — reads from env vars, .env and .wires/config.toml."""

import tomllib
from pathlib import Path
from typing import Any, Dict

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings

from wires.core.errors import InvalidConfig


class WiresSettings(BaseSettings):
    """Runtime settings for the wr CLI and the store."""

    # Storage (None means: discover .wires/wires.db upward from the cwd)
    db_path: Path | None = Field(default=None, alias="WIRES_DB_PATH")
    busy_timeout: float = 30.0

    # Logging
    log_level: str = "error"

    # Readiness policy
    cancelled_unblocks: bool = False

    # Id generation
    id_attempts: int = 5

    model_config = {"env_prefix": "WIRES_", "env_file": ".env", "populate_by_name": True}


def _load_toml_config(wires_dir: Path | None) -> Dict[str, Any]:
    """Load the [wires] table from .wires/config.toml, if present."""
    if wires_dir is None:
        return {}

    config_path = wires_dir / "config.toml"
    if not config_path.exists():
        return {}

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise InvalidConfig(str(config_path), str(e)) from e
    section = data.get("wires", {})
    return section if isinstance(section, dict) else {}


def get_settings(wires_dir: Path | None = None) -> WiresSettings:
    """Build settings; env vars take precedence over the repository config file."""
    settings = WiresSettings()
    toml_config = _load_toml_config(wires_dir)
    if not toml_config:
        return settings

    overrides = {
        key: value
        for key, value in toml_config.items()
        if key in WiresSettings.model_fields and key not in settings.model_fields_set
    }
    explicit = settings.model_dump(include=settings.model_fields_set)
    try:
        return WiresSettings(**overrides, **explicit)
    except ValidationError as e:
        raise InvalidConfig(str(wires_dir / "config.toml"), str(e)) from e
