#!/usr/bin/env python3
"""
MATILDA QUILL - Chat message formatter with a configurable stage pipeline
"""

import json as jsonlib
import sys

import rich_click as click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .app_hooks import on_chat, on_config, on_format, on_inspect

# Configure rich-click to enable markup
click.rich_click.USE_RICH_MARKUP = True

# Dracula theme colors
click.rich_click.STYLE_OPTION = "#ff79c6"
click.rich_click.STYLE_ARGUMENT = "#8be9fd"
click.rich_click.STYLE_COMMAND = "#50fa7b"
click.rich_click.STYLE_USAGE = "#bd93f9"
click.rich_click.STYLE_HELPTEXT = "#b3b8c0"

console = Console()


def _emit(result: dict, as_json: bool) -> None:
    if as_json:
        click.echo(jsonlib.dumps(result, ensure_ascii=False, indent=2))


def _read_stdin_if_needed(text, file):
    if text is None and file is None and not sys.stdin.isatty():
        return sys.stdin.read()
    return text


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="MATILDA QUILL")
def main():
    """✒️  Format chat messages: tag dialogue, fix punctuation, tidy paragraphs."""


@main.command("format")
@click.argument("text", required=False)
@click.option("--file", "file", type=click.Path(exists=True, dir_okay=False), help=" 📄 Read the message from a file")
@click.option("--config", help=" ⚙️  Configuration file path")
@click.option("--legacy", is_flag=True, help=" 🕰️  Use the fixed narration/dialogue formatter")
@click.option("--keep-markers", is_flag=True, help=" 🏷️  Keep internal tag markers in the output")
@click.option("--json", "as_json", is_flag=True, help=" 📄 Output JSON format (default: simple text)")
def format_command(text, file, config, legacy, keep_markers, as_json):
    """Format one message."""
    text = _read_stdin_if_needed(text, file)
    try:
        result = on_format(text=text, file=file, config=config, legacy=legacy, keep_markers=keep_markers)
    except ValueError as e:
        raise click.UsageError(str(e)) from e
    if as_json:
        _emit(result, True)
        return
    for warning in result["warnings"]:
        console.print(f"[yellow]warning:[/yellow] {warning}")
    click.echo(result["text"])


@main.command("inspect")
@click.argument("text", required=False)
@click.option("--file", "file", type=click.Path(exists=True, dir_okay=False), help=" 📄 Read the message from a file")
@click.option("--config", help=" ⚙️  Configuration file path")
@click.option("--json", "as_json", is_flag=True, help=" 📄 Output JSON format")
def inspect_command(text, file, config, as_json):
    """Show the spans the pipeline tags in a message."""
    text = _read_stdin_if_needed(text, file)
    try:
        result = on_inspect(text=text, file=file, config=config)
    except ValueError as e:
        raise click.UsageError(str(e)) from e
    if as_json:
        _emit(result, True)
        return
    table = Table(title="Tagged spans")
    table.add_column("Category", style="cyan")
    table.add_column("Start", justify="right")
    table.add_column("End", justify="right")
    table.add_column("Content")
    for span in result["spans"]:
        table.add_row(span["category"], str(span["start"]), str(span["end"]), span["content"])
    console.print(table)
    console.print(result["text"], markup=False)


@main.command("chat")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--last", is_flag=True, help=" 🎯 Only format the most recent assistant message")
@click.option("--legacy", is_flag=True, help=" 🕰️  Use the fixed narration/dialogue formatter")
@click.option("--config", help=" ⚙️  Configuration file path")
@click.option("--output", type=click.Path(dir_okay=False), help=" 💾 Write to this file instead of PATH")
@click.option("--dry-run", is_flag=True, help=" 🧪 Report changes without saving")
@click.option("--undo-preview", is_flag=True, help=" 👀 Show the formatted messages, then undo them without saving")
@click.option("--json", "as_json", is_flag=True, help=" 📄 Output JSON format")
def chat_command(path, last, legacy, config, output, dry_run, undo_preview, as_json):
    """Format the assistant messages of a JSONL chat log."""
    result = on_chat(
        path=path, last=last, legacy=legacy, config=config, output=output, dry_run=dry_run, undo_preview=undo_preview
    )
    if as_json:
        _emit(result, True)
        return
    if undo_preview:
        for item in result["preview"]:
            console.print(f"[cyan]#{item['index']}[/cyan] {escape(item['text'])}", highlight=False)
    for note in result["notifications"]:
        console.print(note)
    if result["saved_to"]:
        console.print(f"[green]Saved[/green] {result['saved_to']}")


@main.command("config")
@click.option("--config", help=" ⚙️  Configuration file path")
@click.option("--json", "as_json", is_flag=True, help=" 📄 Output JSON format")
def config_command(config, as_json):
    """Show the effective configuration."""
    result = on_config(config=config)
    if as_json:
        _emit(result, True)
        return
    console.print(f"[bold]Config file:[/bold] {result['config_file']}")
    console.print_json(data=result["config"])


if __name__ == "__main__":
    main()
