#!/usr/bin/env python3
"""Sentence-case normalization that leaves tag markers alone."""

import re

from ...schemas.configuration import Configuration, StageId
from ..tagging import split_on_markers
from .base import Stage

SENTENCE_BOUNDARY = re.compile(r"([.!?]\s+)(\w)")


def sentence_case(segment: str) -> str:
    """Capitalize the first character and every letter that starts a sentence.

    The rest of each word keeps its case.
    """
    stripped = segment.lstrip()
    if not stripped:
        return segment
    lead = len(segment) - len(stripped)
    segment = segment[:lead] + stripped[0].upper() + stripped[1:]
    return SENTENCE_BOUNDARY.sub(lambda m: m.group(1) + m.group(2).upper(), segment)


def format_case(text: str, enabled: bool = True) -> str:
    if not enabled or not text.strip():
        return text
    segments = split_on_markers(text)
    # Even indexes are plain text, odd indexes are markers.
    return "".join(segment if i % 2 else sentence_case(segment) for i, segment in enumerate(segments))


class CaseFormatterStage(Stage):
    stage_id = StageId.CASE_FORMATTER
    name = "Case Formatter"

    def process(self, text: str, config: Configuration) -> str:
        return format_case(text, config.case_formatter_enabled)
