#!/usr/bin/env python3
"""Sentiment-aware trailing punctuation for tagged spans."""

from ...core.config import setup_logging
from ...core.errors import MarkerError
from ...schemas.configuration import Configuration, SmartPunctuationConfig, StageId
from ..sentiment import SentimentScorer
from ..tagging import find_spans, validate_category
from .base import Stage

logger = setup_logging(__name__, log_filename="text_formatting.txt")


def choose_replacement(score: float, settings: SmartPunctuationConfig) -> str:
    """Pick the replacement for a trailing comma; thresholds are strict."""
    if score > settings.positive_threshold:
        return settings.positive_replacement
    if score < settings.negative_threshold:
        return settings.negative_replacement
    return settings.neutral_replacement


def punctuate_spans(text: str, settings: SmartPunctuationConfig, scorer: SentimentScorer | None = None) -> str:
    """Replace the trailing comma of every target-category span.

    Spans that do not end in a comma, and spans of other categories, are
    left verbatim.
    """
    if not settings.enabled:
        return text
    try:
        category = validate_category(settings.target_category)
    except MarkerError as e:
        logger.warning(f"Smart punctuation disabled for this run: {e}")
        return text

    scorer = scorer or SentimentScorer()
    pieces: list[str] = []
    position = 0
    for span in find_spans(text, category):
        if not span.content.endswith(","):
            continue
        score = scorer.score(span.content)
        replacement = choose_replacement(score, settings)
        logger.debug(f"{category} span {span.content!r} scored {score}, comma -> {replacement!r}")
        comma_index = span.content_end - 1
        pieces.append(text[position:comma_index])
        pieces.append(replacement)
        position = span.content_end
    if not pieces:
        return text
    pieces.append(text[position:])
    return "".join(pieces)


class SmartPunctuationStage(Stage):
    stage_id = StageId.SMART_PUNCTUATION
    name = "Smart Punctuation"

    def process(self, text: str, config: Configuration) -> str:
        scorer = SentimentScorer.from_keywords(config.sentiment)
        return punctuate_spans(text, config.smart_punctuation, scorer)
