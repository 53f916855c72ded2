"""Hook implementations for Matilda Quill - chat message formatter.

This file contains the business logic for the CLI commands.

IMPORTANT: Hook names must use snake_case with 'on_' prefix
Example:
- Command 'format' -> Hook function 'on_format'
- Command 'chat' -> Hook function 'on_chat'
"""

from pathlib import Path
from typing import Any, Dict

from .core.config import ConfigLoader, setup_logging
from .session import JsonlChatHost, MessageFormatter
from .text_formatting import format_legacy
from .text_formatting.internal.pipeline import get_engine
from .text_formatting.tagging import find_all_spans, strip_all_markers

logger = setup_logging(__name__)


def _read_input(text: str | None, file: str | None) -> str:
    if file:
        return Path(file).read_text(encoding="utf-8")
    if text is None:
        raise ValueError("Provide TEXT or --file")
    return text


def on_format(
    text: str | None = None,
    file: str | None = None,
    config: str | None = None,
    legacy: bool = False,
    keep_markers: bool = False,
    **kwargs,
) -> Dict[str, Any]:
    """Handle format command.

    Returns:
        Dictionary with status, formatted text and run details

    """
    source = _read_input(text, file)
    if legacy:
        output = format_legacy(source)
        return {"status": "success", "text": output, "changed": output != source, "warnings": []}

    configuration = ConfigLoader(config).configuration
    if keep_markers:
        configuration = configuration.model_copy(update={"strip_markers": False})
    run = get_engine().run_detailed(source, configuration)
    return {
        "status": "success",
        "text": run.output_text,
        "changed": run.changed,
        "stage_order": run.stage_order,
        "warnings": run.warnings,
    }


def on_inspect(text: str | None = None, file: str | None = None, config: str | None = None, **kwargs) -> Dict[str, Any]:
    """Handle inspect command: list the spans tagged by the pipeline."""
    source = _read_input(text, file)
    configuration = ConfigLoader(config).configuration.model_copy(update={"strip_markers": False})
    tagged = get_engine().run(source, configuration)
    spans = [
        {"category": span.category, "start": span.start, "end": span.end, "content": strip_all_markers(span.content)}
        for span in find_all_spans(tagged)
    ]
    return {"status": "success", "text": strip_all_markers(tagged), "spans": spans}


def on_chat(
    path: str,
    last: bool = False,
    legacy: bool = False,
    config: str | None = None,
    output: str | None = None,
    dry_run: bool = False,
    undo_preview: bool = False,
    **kwargs,
) -> Dict[str, Any]:
    """Handle chat command: format the assistant messages of a JSONL chat log.

    With ``undo_preview`` the formatted text is reported and then undone, and
    nothing is saved.
    """
    host = JsonlChatHost(path, ConfigLoader(config))
    formatter = MessageFormatter(host, use_legacy=legacy)
    changed = formatter.format_last() if last else formatter.format_all()
    preview = [{"index": index, "text": host.messages()[index].text} for index in dict.fromkeys(host.rendered)]
    if undo_preview:
        formatter.undo()
    saved_to = None
    if changed and not (dry_run or undo_preview):
        saved_to = str(host.save(output))
    return {
        "status": "success",
        "changed": changed,
        "preview": preview,
        "rendered": host.rendered,
        "notifications": host.notifications,
        "saved_to": saved_to,
    }


def on_config(config: str | None = None, **kwargs) -> Dict[str, Any]:
    """Handle config command: show the effective configuration."""
    loader = ConfigLoader(config)
    return {"status": "success", "config_file": loader.config_file, "config": loader.configuration.to_host_dict()}


__all__ = ["on_format", "on_inspect", "on_chat", "on_config"]
