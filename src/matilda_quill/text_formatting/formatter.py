#!/usr/bin/env python3
"""Entry points for formatting one message string.

- run_pipeline: configurable stage pipeline
- format_legacy: fixed narration/dialogue formatter
"""

from .internal.pipeline import PipelineEngine, PipelineRun, get_engine, run_pipeline
from .legacy import format_legacy


def format_message(text: str, config=None, legacy: bool = False) -> str:
    """Format ``text`` with the pipeline, or the legacy formatter when asked."""
    if legacy:
        return format_legacy(text)
    return run_pipeline(text, config)


__all__ = [
    "PipelineEngine",
    "PipelineRun",
    "get_engine",
    "run_pipeline",
    "format_legacy",
    "format_message",
]
