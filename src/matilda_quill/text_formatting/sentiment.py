#!/usr/bin/env python3
"""Keyword-count sentiment heuristic."""

import re
from collections.abc import Iterable
from functools import lru_cache

from ..schemas.configuration import NEGATIVE_WORDS, POSITIVE_WORDS, SentimentKeywords
from .tagging import strip_all_markers

KEYWORD_WEIGHT = 0.1

# Keyword set of the legacy narration/dialogue formatter.
LEGACY_POSITIVE_WORDS: tuple[str, ...] = ("good", "great", "happy", "awesome", "excellent", "love")
LEGACY_NEGATIVE_WORDS: tuple[str, ...] = ("bad", "sad", "terrible", "awful", "hate", "poor")


@lru_cache(maxsize=256)
def _keyword_pattern(word: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(word.lower())}\b")


class SentimentScorer:
    """Score text by whole-word keyword hits.

    Each positive keyword occurrence adds ``KEYWORD_WEIGHT``, each negative
    one subtracts it. The sum is not clamped.
    """

    def __init__(self, positive_words: Iterable[str] = POSITIVE_WORDS, negative_words: Iterable[str] = NEGATIVE_WORDS):
        self.positive_words = tuple(w for w in positive_words if w)
        self.negative_words = tuple(w for w in negative_words if w)

    @classmethod
    def from_keywords(cls, keywords: SentimentKeywords) -> "SentimentScorer":
        return cls(keywords.positive_words, keywords.negative_words)

    @classmethod
    def legacy(cls) -> "SentimentScorer":
        return cls(LEGACY_POSITIVE_WORDS, LEGACY_NEGATIVE_WORDS)

    def count(self, text: str) -> tuple[int, int]:
        """Return (positive hits, negative hits) for ``text``."""
        plain = strip_all_markers(text).lower()
        positive = sum(len(_keyword_pattern(word).findall(plain)) for word in self.positive_words)
        negative = sum(len(_keyword_pattern(word).findall(plain)) for word in self.negative_words)
        return positive, negative

    def score(self, text: str) -> float:
        positive, negative = self.count(text)
        # Rounded so that e.g. three hits compare equal to a 0.3 threshold.
        return round((positive - negative) * KEYWORD_WEIGHT, 6)


_default_scorer = SentimentScorer()


def score(text: str) -> float:
    """Score ``text`` with the default keyword lists."""
    return _default_scorer.score(text)


__all__ = ["SentimentScorer", "score", "KEYWORD_WEIGHT", "LEGACY_POSITIVE_WORDS", "LEGACY_NEGATIVE_WORDS"]
