"""Configuration loading from environment variables and puha.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

_DEFAULT_STATE_FILE = Path("space.json")
_CONFIG_FILENAME = "puha.toml"


@dataclass
class StoreConfig:
    """Where and how the tree is persisted."""

    file: Path = _DEFAULT_STATE_FILE
    indent: int = 2


@dataclass
class RenderConfig:
    """Tree rendering options."""

    indent: int = 2
    descriptions: bool = False


@dataclass
class PuhaConfig:
    """Top-level puha configuration."""

    store: StoreConfig = field(default_factory=StoreConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    log_level: str = "WARNING"


def load_config(config_path: Path | None = None) -> PuhaConfig:
    """Load configuration from environment variables and optional puha.toml.

    Priority: environment variables > puha.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text())
    else:
        # Search current dir and ~/.puha/
        for candidate in [Path.cwd() / _CONFIG_FILENAME, Path.home() / ".puha" / _CONFIG_FILENAME]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text())
                break

    store_data = file_data.get("store", {})
    render_data = file_data.get("render", {})

    config = PuhaConfig(
        store=StoreConfig(
            file=Path(os.getenv("PUHA_FILE", store_data.get("file", str(_DEFAULT_STATE_FILE)))),
            indent=int(store_data.get("indent", 2)),
        ),
        render=RenderConfig(
            indent=int(os.getenv("PUHA_INDENT", render_data.get("indent", 2))),
            descriptions=bool(render_data.get("descriptions", False)),
        ),
        log_level=os.getenv("PUHA_LOG_LEVEL", file_data.get("log_level", "WARNING")),
    )
    return config
