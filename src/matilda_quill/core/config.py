#!/usr/bin/env python3
"""Configuration loader that reads from config files."""
import copy
import os
from pathlib import Path
from typing import Any

import tomllib
from pydantic import ValidationError

from ..schemas.configuration import Configuration
from .errors import ConfigurationError
from .logging import get_logger, setup_logging

logger = setup_logging(__name__)

# Mirrors the Configuration defaults; a user file only needs the keys it changes.
DEFAULT_CONFIG: dict[str, Any] = Configuration().model_dump(mode="json")


class ConfigLoader:
    """Load the ``[quill]`` section of a TOML config file."""

    def __init__(self, config_path: str | Path | None = None, strict: bool = False) -> None:
        if config_path is None:
            config_path = self._default_config_path()

        self.config_file = str(config_path)
        self.strict = strict
        config_path = Path(config_path)
        quill_config: dict[str, Any] = {}
        if config_path.exists():
            try:
                with open(config_path, "rb") as f:
                    quill_config = tomllib.load(f).get("quill", {})
            except tomllib.TOMLDecodeError as e:
                if strict:
                    raise ConfigurationError(f"Malformed TOML in {self.config_file}: {e}") from e
                logger.warning(f"Malformed TOML in {self.config_file}, using defaults: {e}")

        self._config = self._merge_dicts(DEFAULT_CONFIG, quill_config)
        self._configuration: Configuration | None = None

    def _default_config_path(self) -> Path:
        env_path = os.environ.get("MATILDA_QUILL_CONFIG")
        if env_path:
            return Path(env_path)
        return Path.home() / ".matilda" / "quill.toml"

    def _merge_dicts(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        merged = copy.deepcopy(base)
        for key, value in override.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = self._merge_dicts(merged[key], value)
            else:
                merged[key] = value
        return merged

    def get(self, key_path: str, default: Any = None) -> Any:
        """Get a value using dot notation (e.g., 'smart_punctuation.target_category')"""
        keys = key_path.split(".")
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    @property
    def configuration(self) -> Configuration:
        """Validated settings snapshot.

        Invalid settings fall back to defaults unless the loader is strict.
        """
        if self._configuration is None:
            try:
                self._configuration = Configuration.model_validate(self._config)
            except ValidationError as e:
                if self.strict:
                    raise ConfigurationError(f"Invalid settings in {self.config_file}: {e}") from e
                logger.warning(f"Invalid settings in {self.config_file}, using defaults: {e}")
                self._configuration = Configuration()
        return self._configuration

    @property
    def stage_order(self) -> list[str]:
        return list(self.get("stage_order", []))

    @property
    def strip_markers(self) -> bool:
        return bool(self.get("strip_markers", True))

    @property
    def case_formatter_enabled(self) -> bool:
        return bool(self.get("case_formatter_enabled", False))

    @property
    def smart_punctuation_target(self) -> str:
        return str(self.get("smart_punctuation.target_category", "dialogue"))


# Global singleton instance
_config_loader: ConfigLoader | None = None


def get_config() -> ConfigLoader:
    """Get the global config loader instance"""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader()
    return _config_loader


def reset_config() -> None:
    """Drop the cached loader so the next get_config() re-reads the file."""
    global _config_loader
    _config_loader = None


__all__ = ["ConfigLoader", "DEFAULT_CONFIG", "get_config", "reset_config", "get_logger", "setup_logging"]
