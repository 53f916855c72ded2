"""Concrete pipeline stages."""

from .base import Stage
from .case_formatter import CaseFormatterStage, format_case
from .find_replace import FindReplaceStage, apply_find_replace_rules
from .paragraph import ParagraphControlStage, control_paragraphs
from .smart_punctuation import SmartPunctuationStage, punctuate_spans
from .style_mapper import StyleMapperStage, apply_style_rules

__all__ = [
    "Stage",
    "CaseFormatterStage",
    "FindReplaceStage",
    "ParagraphControlStage",
    "SmartPunctuationStage",
    "StyleMapperStage",
    "apply_find_replace_rules",
    "apply_style_rules",
    "control_paragraphs",
    "format_case",
    "punctuate_spans",
]
