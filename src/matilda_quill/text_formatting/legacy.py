#!/usr/bin/env python3
"""Legacy narration/dialogue formatter.

A fixed two-pass formatter kept as a simpler alternative to the pipeline:
narration (text outside double quotes) is wrapped in ``*emphasis*`` and
dialogue ending in a comma gets sentiment-based punctuation.
"""

import re

from ..core.config import setup_logging
from .sentiment import SentimentScorer

logger = setup_logging(__name__, log_filename="text_formatting.txt")

CURLY_DOUBLE_QUOTES = re.compile("[“”]")
WHITESPACE_RUN = re.compile(r"\s+")

# Cleanup applied after assembly, in order.
EMPHASIZED_DIALOGUE = re.compile(r'\*"([^"]+)"\*')
EMPHASIS_BEFORE_QUOTE = re.compile(r'\*"')
EMPHASIS_AFTER_QUOTE = re.compile(r'"\*')
EMPTY_NARRATION_GAP = re.compile(r"(?<!\*)\* \*(?!\*)")
DOUBLED_EMPHASIS = re.compile(r"\*\*")

POSITIVE_THRESHOLD = 0.05
NEGATIVE_THRESHOLD = -0.05

_scorer = SentimentScorer.legacy()


def _emphasize(narration: str) -> str:
    if not narration.startswith("*"):
        narration = "*" + narration
    if not narration.endswith("*"):
        narration = narration + "*"
    return narration


def _punctuate_dialogue(dialogue: str) -> str:
    if not dialogue.endswith(","):
        return dialogue
    score = _scorer.score(dialogue)
    if score > POSITIVE_THRESHOLD:
        return dialogue[:-1] + "!"
    if score < NEGATIVE_THRESHOLD:
        return dialogue[:-1] + "..."
    return dialogue[:-1] + "."


def _cleanup(text: str) -> str:
    text = EMPHASIZED_DIALOGUE.sub(r'"\1"', text)
    text = EMPHASIS_BEFORE_QUOTE.sub('* "', text)
    text = EMPHASIS_AFTER_QUOTE.sub('" *', text)
    text = EMPTY_NARRATION_GAP.sub(" ", text)
    text = DOUBLED_EMPHASIS.sub("*", text)
    return text.replace("  ", " ").strip()


def format_legacy(text: str) -> str:
    """Format ``text`` with the fixed narration/dialogue rules.

    Segments between double quotes alternate narration (even) and dialogue
    (odd). Consecutive narration segments are merged before emphasis.
    Running the formatter on its own output changes nothing.
    """
    if not text or not text.strip():
        return text

    text = CURLY_DOUBLE_QUOTES.sub('"', text)
    pieces: list[str] = []
    narration: list[str] = []

    def flush_narration() -> None:
        if narration:
            pieces.append(_emphasize(" ".join(narration)))
            narration.clear()

    for index, part in enumerate(text.split('"')):
        part = part.strip()
        if not part:
            continue
        if index % 2 == 0:
            narration.append(part)
        else:
            flush_narration()
            pieces.append(f'"{_punctuate_dialogue(part)}"')
    flush_narration()

    formatted = WHITESPACE_RUN.sub(" ", " ".join(pieces)).strip()
    formatted = _cleanup(formatted)
    logger.debug(f"Legacy format: {text!r} -> {formatted!r}")
    return formatted


__all__ = ["format_legacy"]
