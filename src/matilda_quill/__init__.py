"""MATILDA QUILL - Chat message formatter with a configurable stage pipeline."""

from importlib import metadata
from importlib import import_module
from pathlib import Path
import tomllib
from typing import TYPE_CHECKING


def _get_version() -> str:
    try:
        return metadata.version("goobits-matilda-quill")
    except metadata.PackageNotFoundError:
        pass

    try:
        pyproject_path = Path(__file__).resolve().parents[2] / "pyproject.toml"
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
        return str(data["project"]["version"])
    except (OSError, KeyError, tomllib.TOMLDecodeError):
        return "unknown"


__version__ = _get_version()

if TYPE_CHECKING:
    from .core.config import ConfigLoader, get_config
    from .schemas.configuration import Configuration, FindReplaceRule, StageId, StyleRule
    from .session import ChatMessage, MessageFormatter, MessageHost
    from .text_formatting import PipelineEngine, format_legacy, run_pipeline

_LAZY_EXPORTS = {
    "ConfigLoader": (".core.config", "ConfigLoader"),
    "get_config": (".core.config", "get_config"),
    "Configuration": (".schemas.configuration", "Configuration"),
    "FindReplaceRule": (".schemas.configuration", "FindReplaceRule"),
    "StyleRule": (".schemas.configuration", "StyleRule"),
    "StageId": (".schemas.configuration", "StageId"),
    "PipelineEngine": (".text_formatting", "PipelineEngine"),
    "run_pipeline": (".text_formatting", "run_pipeline"),
    "format_legacy": (".text_formatting", "format_legacy"),
    "ChatMessage": (".session", "ChatMessage"),
    "MessageFormatter": (".session", "MessageFormatter"),
    "MessageHost": (".session", "MessageHost"),
}


def __getattr__(name):
    if name in {"core", "schemas", "session", "text_formatting"}:
        module = import_module(f".{name}", __name__)
        globals()[name] = module
        return module

    if name not in _LAZY_EXPORTS:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    module_name, attr_name = _LAZY_EXPORTS[name]
    module = import_module(module_name, __name__)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value


__all__ = [
    "ConfigLoader",
    "get_config",
    "Configuration",
    "FindReplaceRule",
    "StyleRule",
    "StageId",
    "PipelineEngine",
    "run_pipeline",
    "format_legacy",
    "ChatMessage",
    "MessageFormatter",
    "MessageHost",
]
