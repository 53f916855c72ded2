#!/usr/bin/env python3
"""Inline tag markers for semantic spans.

A tagged span is ``content`` bracketed by a start marker and an end marker
that both encode the span's category::

    START_OPEN + category + MARKER_CLOSE + content + END_OPEN + category + MARKER_CLOSE

The three marker characters come from the Unicode Private Use Area, which
chat text never contains, so stages can add and find markers without
colliding with literal text. Category names may not contain them.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass

from intervaltree import IntervalTree

from ..core.errors import MarkerError

START_OPEN = "\ue000"
MARKER_CLOSE = "\ue001"
END_OPEN = "\ue002"
RESERVED_CHARACTERS = frozenset({START_OPEN, MARKER_CLOSE, END_OPEN})

# Any start or end marker, whatever its category.
MARKER_PATTERN = re.compile(f"[{START_OPEN}{END_OPEN}][^{START_OPEN}{MARKER_CLOSE}{END_OPEN}]*{MARKER_CLOSE}")
START_MARKER_PATTERN = re.compile(f"{START_OPEN}([^{START_OPEN}{MARKER_CLOSE}{END_OPEN}]*){MARKER_CLOSE}")


@dataclass(frozen=True)
class TaggedSpan:
    """One occurrence of a tagged span.

    ``start``/``end`` cover the whole span including both markers;
    ``content_start``/``content_end`` cover the bracketed content only.
    """

    category: str
    start: int
    end: int
    content_start: int
    content_end: int
    content: str

    def __iter__(self):
        # Unpacks as (start, end, content).
        return iter((self.start, self.end, self.content))


def validate_category(category: str) -> str:
    if not category:
        raise MarkerError("Category name must not be empty")
    if RESERVED_CHARACTERS.intersection(category):
        raise MarkerError(f"Category name {category!r} contains a reserved marker character")
    return category


def start_marker(category: str) -> str:
    return f"{START_OPEN}{validate_category(category)}{MARKER_CLOSE}"


def end_marker(category: str) -> str:
    return f"{END_OPEN}{validate_category(category)}{MARKER_CLOSE}"


def wrap(content: str, category: str) -> str:
    """Bracket ``content`` with the start/end markers of ``category``."""
    return f"{start_marker(category)}{content}{end_marker(category)}"


def _span_pattern(category: str) -> re.Pattern[str]:
    return re.compile(
        f"{re.escape(start_marker(category))}(.*?){re.escape(end_marker(category))}",
        re.DOTALL,
    )


def find_spans(text: str, category: str) -> Iterator[TaggedSpan]:
    """Lazily yield the non-overlapping spans of ``category``, left to right.

    Each call scans ``text`` afresh. The content may still contain markers of
    other categories when spans nest.
    """
    for match in _span_pattern(category).finditer(text):
        yield TaggedSpan(
            category=category,
            start=match.start(),
            end=match.end(),
            content_start=match.start(1),
            content_end=match.end(1),
            content=match.group(1),
        )


def categories_in(text: str) -> list[str]:
    """Categories with at least one start marker, in order of first appearance."""
    seen: dict[str, None] = {}
    for match in START_MARKER_PATTERN.finditer(text):
        seen.setdefault(match.group(1), None)
    return list(seen)


def find_all_spans(text: str) -> list[TaggedSpan]:
    """Spans of every category, sorted by position.

    Nested spans are kept. Spans that cross another span (start inside it and
    end outside it) lose to the span that starts first.
    """
    candidates: list[TaggedSpan] = []
    for category in categories_in(text):
        if not category:
            continue
        candidates.extend(find_spans(text, category))
    candidates.sort(key=lambda span: (span.start, -span.end))

    tree = IntervalTree()
    accepted: list[TaggedSpan] = []
    for span in candidates:
        crossing = [
            interval
            for interval in tree[span.start : span.end]
            if not (interval.begin <= span.start and span.end <= interval.end)
            and not (span.start <= interval.begin and interval.end <= span.end)
        ]
        if crossing:
            continue
        tree[span.start : span.end] = span
        accepted.append(span)
    return accepted


def strip_all_markers(text: str) -> str:
    """Remove every start/end marker, leaving the bracketed content in place."""
    if START_OPEN not in text and END_OPEN not in text:
        return text
    return MARKER_PATTERN.sub("", text)


def split_on_markers(text: str) -> list[str]:
    """Split into alternating plain and marker segments.

    Even indexes are plain text (possibly empty), odd indexes are markers.
    """
    return re.split(f"({MARKER_PATTERN.pattern})", text)


__all__ = [
    "TaggedSpan",
    "START_OPEN",
    "MARKER_CLOSE",
    "END_OPEN",
    "RESERVED_CHARACTERS",
    "wrap",
    "start_marker",
    "end_marker",
    "find_spans",
    "find_all_spans",
    "categories_in",
    "strip_all_markers",
    "split_on_markers",
    "validate_category",
]
