"""Runtime configuration loader for argsparser."""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass, fields
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .reflow import DEFAULT_LINE_SIZE

__all__ = [
    "DEFAULT_PROGRAM_NAME",
    "ParserConfig",
    "get_runtime_config",
    "load_config",
    "reload_config",
]

_LOGGER = logging.getLogger("argsparser.config")

_CONFIG_ENV = "ARGSPARSER_CONFIG"

DEFAULT_PROGRAM_NAME = "program"


def _global_config_roots() -> List[Path]:
    home = Path.home()
    if sys.platform == "win32":
        base = Path(os.getenv("APPDATA", home / "AppData" / "Roaming"))
        return [base / "argsparser"]
    if sys.platform == "darwin":
        return [home / "Library/Application Support" / "argsparser"]
    xdg = Path(os.getenv("XDG_CONFIG_HOME", home / ".config"))
    roots = [xdg / "argsparser", home / ".config/argsparser"]
    deduped: List[Path] = []
    for root in roots:
        expanded = root.expanduser()
        if expanded not in deduped:
            deduped.append(expanded)
    return deduped


def _default_config_locations() -> List[Path]:
    locations = [
        Path("config/argsparser.local.json"),
        Path("config/argsparser.json"),
        Path("argsparser.json"),
    ]
    for root in _global_config_roots():
        locations.append(root / "argsparser.json")
    return locations


def _as_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off"}:
            return False
    return default


def _as_size(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        size = int(value)
    except (TypeError, ValueError):
        return default
    return size if size >= 0 else default


def _as_text(value: Any, default: str) -> str:
    if value is None:
        return default
    return str(value)


@dataclass(slots=True)
class ParserConfig:
    show_help: bool = True
    description: str = ""
    epilogue: str = ""
    program_name: str = ""
    exit_on_help: bool = True
    margin_size: int = 0
    line_size: int = DEFAULT_LINE_SIZE

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        defaults = cls()
        if not isinstance(data, dict):
            return defaults
        return cls(
            show_help=_as_bool(data.get("show_help"), defaults.show_help),
            description=_as_text(data.get("description"), defaults.description),
            epilogue=_as_text(data.get("epilogue"), defaults.epilogue),
            program_name=_as_text(data.get("program_name"), defaults.program_name),
            exit_on_help=_as_bool(data.get("exit_on_help"), defaults.exit_on_help),
            margin_size=_as_size(data.get("margin_size"), defaults.margin_size),
            line_size=_as_size(data.get("line_size"), defaults.line_size),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _candidate_paths(explicit: Optional[Path]) -> Iterable[Path]:
    if explicit is not None:
        yield explicit
    env_path = os.getenv(_CONFIG_ENV)
    if env_path:
        yield Path(env_path).expanduser()
    yield from _default_config_locations()


def load_config(path: Optional[Path] = None) -> ParserConfig:
    """Return the first readable configuration, or defaults when none exist."""

    for candidate in _candidate_paths(path):
        try:
            if not candidate.exists():
                continue
            data = json.loads(candidate.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            _LOGGER.warning("Skipping unreadable config %s: %s", candidate, exc)
            continue
        if isinstance(data, dict):
            _LOGGER.debug("Loaded parser config from %s", candidate)
            return ParserConfig.from_dict(data)
        _LOGGER.warning("Skipping config %s: top-level value is not an object", candidate)
    return ParserConfig()


@lru_cache(maxsize=1)
def get_runtime_config() -> ParserConfig:
    """Return the cached runtime configuration."""

    return load_config(None)


def reload_config(path: Optional[Path] = None) -> ParserConfig:
    """Reload configuration from disk, bypassing the cache."""

    get_runtime_config.cache_clear()
    return get_runtime_config() if path is None else load_config(path)
