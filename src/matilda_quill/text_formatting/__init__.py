"""Text formatting package for Matilda Quill chat messages."""

from .formatter import PipelineEngine, PipelineRun, format_legacy, format_message, run_pipeline

__all__ = ["PipelineEngine", "PipelineRun", "format_legacy", "format_message", "run_pipeline"]
