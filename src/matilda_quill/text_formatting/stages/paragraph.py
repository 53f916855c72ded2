#!/usr/bin/env python3
"""Paragraph count control stage."""

import re

from ...schemas.configuration import Configuration, ParagraphMode, StageId
from .base import Stage

LINE_BREAK = re.compile(r"\r\n|\r|\n")
EXCESS_BLANK_LINES = re.compile(r"\n{3,}")


def split_paragraphs(text: str) -> list[str]:
    """Trimmed, non-empty lines of ``text``."""
    paragraphs = (line.strip() for line in LINE_BREAK.split(text.strip()))
    return [p for p in paragraphs if p]


def control_paragraphs(text: str, mode: ParagraphMode | str, max_paragraphs: int = 3, min_paragraphs: int = 1) -> str:
    """Normalize paragraph structure.

    ``none`` returns the text untouched. ``single`` joins everything with
    spaces; ``max`` keeps the first ``max_paragraphs``; ``min`` only re-joins
    (it never pads up to ``min_paragraphs``).
    """
    mode = ParagraphMode(mode)
    if mode is ParagraphMode.NONE:
        return text

    paragraphs = split_paragraphs(text)
    if mode is ParagraphMode.SINGLE:
        return " ".join(paragraphs)

    if mode is ParagraphMode.MAX:
        paragraphs = paragraphs[: max(max_paragraphs, 1)]
    # MIN re-joins without padding up to min_paragraphs.

    return EXCESS_BLANK_LINES.sub("\n\n", "\n\n".join(paragraphs))


class ParagraphControlStage(Stage):
    stage_id = StageId.PARAGRAPH_CONTROL
    name = "Paragraph Control"

    def process(self, text: str, config: Configuration) -> str:
        return control_paragraphs(
            text,
            config.paragraph_control_mode,
            config.paragraph_control_max,
            config.paragraph_control_min,
        )
