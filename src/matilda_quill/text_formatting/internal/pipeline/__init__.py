#!/usr/bin/env python3
"""Pipeline module for message formatting.

Core components:
- PipelineEngine: folds text through the configured stage order
- PipelineRun: per-run report (output, order used, warnings)
- run_pipeline: convenience function over the default stages
"""

from .engine import PipelineEngine, PipelineRun, get_engine, run_pipeline
from .registry import STAGE_CLASSES, default_stages, get_stage_class

__all__ = [
    "PipelineEngine",
    "PipelineRun",
    "get_engine",
    "run_pipeline",
    "STAGE_CLASSES",
    "default_stages",
    "get_stage_class",
]
