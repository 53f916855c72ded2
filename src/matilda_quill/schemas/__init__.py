"""Pydantic models shared between the pipeline and its hosts."""

from .configuration import (
    DEFAULT_STAGE_ORDER,
    Configuration,
    FindReplaceRule,
    ParagraphMode,
    SentimentKeywords,
    SmartPunctuationConfig,
    StageId,
    StyleRule,
)

__all__ = [
    "DEFAULT_STAGE_ORDER",
    "Configuration",
    "FindReplaceRule",
    "ParagraphMode",
    "SentimentKeywords",
    "SmartPunctuationConfig",
    "StageId",
    "StyleRule",
]
