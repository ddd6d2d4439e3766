#!/usr/bin/env python3

from pathlib import Path
from typing import Any, Callable, Dict, Optional
from medialibfs.constants import DEFAULT_ORIGIN
from medialibfs.store import MediaStore
import importlib
import json
import logging


def load_store_factory(target: str) -> Callable[[], MediaStore]:
    """Resolve a "package.module:attribute" string into a store factory.

    The attribute may be a MediaStore subclass or any callable returning a
    fresh store handle.

    Args:
        target: Dotted module path and attribute name separated by ":"

    Returns:
        The resolved callable

    Raises:
        ValueError: If the target is malformed or does not name a callable
    """
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Store must be given as 'module:attribute', got {target!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"Cannot import store module {module_name!r}: {e}") from e

    factory = module
    for part in attr.split("."):
        factory = getattr(factory, part, None)
        if factory is None:
            raise ValueError(f"{module_name!r} has no attribute {attr!r}")

    if not callable(factory):
        raise ValueError(f"Store {target!r} is not callable")
    return factory


class ConfigManager:
    """Centralized configuration manager for MediaLibFS."""

    DEFAULT_CONFIG_DIR = Path.home() / ".config" / "medialibfs"
    CONFIG_FILE_NAME = "config.json"

    def __init__(
        self,
        config_dir: Optional[str] = None,
        config_file: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize with optional overrides for defaults.

        Args:
            config_dir: Directory holding config.json
            config_file: Explicit config file path, overrides config_dir
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger("MediaLibFS")
        self.config_dir = Path(config_dir) if config_dir else self.DEFAULT_CONFIG_DIR
        self.config_file = (
            Path(config_file)
            if config_file
            else self.config_dir / self.CONFIG_FILE_NAME
        )

        self.origin = DEFAULT_ORIGIN
        self.show_all_items = True
        self.store: Optional[str] = None
        self.strings: Dict[str, str] = {}

        self._load()

    def _load(self) -> None:
        if not self.config_file.exists():
            self.logger.debug(f"No config file at {self.config_file}, using defaults")
            return

        with open(self.config_file, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid config file {self.config_file}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Config file {self.config_file} must hold a JSON object")

        self.origin = str(data.get("origin", self.origin)).strip("/") or DEFAULT_ORIGIN
        self.show_all_items = bool(data.get("show_all_items", self.show_all_items))
        self.store = data.get("store", self.store)
        strings = data.get("strings") or {}
        if not isinstance(strings, dict):
            raise ValueError("'strings' must be a JSON object")
        self.strings = {str(k): str(v) for k, v in strings.items()}
        self.logger.info(f"Loaded configuration from {self.config_file}")

    def apply_overrides(self, **overrides: Any) -> None:
        """Apply command-line values on top of the file; None means unset."""
        for key, value in overrides.items():
            if value is None:
                continue
            if not hasattr(self, key):
                raise AttributeError(f"Unknown configuration key: {key}")
            setattr(self, key, value)

    def store_factory(self) -> Callable[[], MediaStore]:
        """Return the configured store factory.

        Raises:
            ValueError: If no store is configured or it cannot be loaded
        """
        if not self.store:
            raise ValueError(
                "No store configured; pass --store or set 'store' in "
                f"{self.config_file}"
            )
        return load_store_factory(self.store)
