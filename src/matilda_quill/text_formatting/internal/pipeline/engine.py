#!/usr/bin/env python3
"""Pipeline engine: folds text through the configured stage order.

The engine keeps no state between runs. Each run reads one frozen
``Configuration`` snapshot, so runs over different messages can be
interleaved freely.
"""

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

from ....core.config import setup_logging
from ....schemas.configuration import Configuration
from ...stages import Stage
from ...tagging import strip_all_markers
from .registry import default_stages

logger = setup_logging(__name__, log_filename="text_formatting.txt")


@dataclass
class PipelineRun:
    """Outcome of a single pipeline run."""

    input_text: str
    output_text: str
    stage_order: list[str]
    warnings: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.output_text != self.input_text


class PipelineEngine:
    """Run an ordered set of stages over a string."""

    def __init__(self, stages: Sequence[Stage] | None = None):
        stages = list(stages) if stages is not None else default_stages()
        self._stages: dict[str, Stage] = {}
        for stage in stages:
            key = stage.stage_id.value
            if key in self._stages:
                raise ValueError(f"Stage {key!r} registered twice")
            self._stages[key] = stage
        self.default_order: list[str] = list(self._stages)

    @property
    def stage_ids(self) -> list[str]:
        return list(self.default_order)

    def resolve_order(self, requested: Sequence[str]) -> tuple[list[str], str | None]:
        """Return the order to run and a warning if ``requested`` was invalid.

        ``requested`` must be a permutation of the registered stage ids;
        otherwise the registration order is used.
        """
        requested = [str(getattr(stage_id, "value", stage_id)) for stage_id in requested]
        if Counter(requested) == Counter(self.default_order):
            return requested, None
        warning = (
            f"Stage order {requested} does not match registered stages {self.default_order}; "
            "using default order"
        )
        return list(self.default_order), warning

    def run_detailed(self, text: str, config: Configuration) -> PipelineRun:
        order, warning = self.resolve_order(config.stage_order)
        result = PipelineRun(input_text=text, output_text=text, stage_order=order)
        if warning:
            logger.warning(warning)
            result.warnings.append(warning)

        for stage_id in order:
            stage = self._stages[stage_id]
            before = result.output_text
            result.output_text = stage.process(before, config)
            if result.output_text != before:
                logger.debug(f"{stage.name}: {before!r} -> {result.output_text!r}")

        if config.strip_markers:
            result.output_text = strip_all_markers(result.output_text)
        return result

    def run(self, text: str, config: Configuration) -> str:
        return self.run_detailed(text, config).output_text


_default_engine: PipelineEngine | None = None


def get_engine() -> PipelineEngine:
    """Shared engine over the default stage registry."""
    global _default_engine
    if _default_engine is None:
        _default_engine = PipelineEngine()
    return _default_engine


def run_pipeline(text: str, config: Configuration | None = None) -> str:
    """Format one string with ``config`` (defaults when omitted)."""
    return get_engine().run(text, config or Configuration())
