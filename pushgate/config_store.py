"""Layered settings: defaults < env < config file < command-line overrides."""
import json
import logging
import threading
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

_PARSERS = {
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
    ".json": json.loads,
}


def _read_config_file(path: Path) -> dict[str, Any]:
    """Return the settings mapping from a YAML or JSON file, or {} if it cannot be used."""
    if not path.exists():
        logger.debug("No config file at %s; using env and defaults", path)
        return {}
    parse = _PARSERS.get(path.suffix.lower())
    if parse is None:
        logger.warning("Unsupported config file type (want .yaml, .yml or .json): %s", path)
        return {}
    try:
        data = parse(path.read_text())
    except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
        logger.warning("Ignoring config file %s: %s", path, e)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file %s must hold a mapping, got %s", path, type(data).__name__)
        return {}
    return data


class ConfigStore:
    """
    Builds the Settings object for the process.

    ``update`` is how the CLI pushes its flags on top of the env and the config file.
    """

    def __init__(self, settings_cls: type, config_file_path: Optional[str] = None):
        self._settings_cls = settings_cls
        self._path = Path(config_file_path).expanduser().resolve() if config_file_path else None
        self._overrides: dict[str, Any] = {}
        self._current: Optional[Any] = None
        self._lock = threading.RLock()

    def _build(self, overrides: dict[str, Any]) -> Any:
        # BaseSettings reads env and .env on instantiation; the file and overrides are layered on top.
        layers = self._settings_cls().model_dump()
        if self._path is not None:
            file_values = _read_config_file(self._path)
            if file_values:
                logger.info("Config file %s overrides env for: %s", self._path, ", ".join(sorted(file_values)))
            layers.update(file_values)
        layers.update(overrides)
        return self._settings_cls(**layers)

    def get_settings(self) -> Any:
        with self._lock:
            if self._current is None:
                self._current = self._build(self._overrides)
            return self._current

    def update(self, overrides: dict[str, Any]) -> None:
        """Apply overrides. Invalid values are logged and the current settings stay in place."""
        with self._lock:
            merged = {**self._overrides, **overrides}
            try:
                self._current = self._build(merged)
            except Exception as e:
                logger.warning("Rejected config overrides %s: %s", sorted(overrides), e)
                return
            self._overrides = merged

    def clear_overrides(self) -> None:
        """Drop all overrides; the next read rebuilds from env and the config file."""
        with self._lock:
            self._overrides = {}
            self._current = None
