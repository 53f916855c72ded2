"""Stage registry.

Stage identity is the ``StageId`` value, never a class name. Keep the
default order here so the engine and the config editors agree on it.
"""

from __future__ import annotations

from ...stages import (
    CaseFormatterStage,
    FindReplaceStage,
    ParagraphControlStage,
    SmartPunctuationStage,
    Stage,
    StyleMapperStage,
)
from ....schemas.configuration import DEFAULT_STAGE_ORDER, StageId

STAGE_CLASSES: dict[StageId, type[Stage]] = {
    StageId.FIND_AND_REPLACE: FindReplaceStage,
    StageId.PARAGRAPH_CONTROL: ParagraphControlStage,
    StageId.STYLE_MAPPER: StyleMapperStage,
    StageId.SMART_PUNCTUATION: SmartPunctuationStage,
    StageId.CASE_FORMATTER: CaseFormatterStage,
}


def get_stage_class(stage_id: StageId | str) -> type[Stage]:
    """Look up the stage class registered for ``stage_id``."""
    try:
        return STAGE_CLASSES[StageId(stage_id)]
    except ValueError:
        raise KeyError(f"Unknown stage: {stage_id!r}") from None


def default_stages() -> list[Stage]:
    """One instance of every registered stage, in default order."""
    return [get_stage_class(stage_id)() for stage_id in DEFAULT_STAGE_ORDER]
