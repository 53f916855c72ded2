#!/usr/bin/env python3
"""Style mapper stage: tags semantic spans.

Each rule's ``replace_template`` may contain ``$TAG_START`` and ``$TAG_END``.
Group references such as ``$1`` in the user's template are resolved by the
regex replace; the placeholders become the rule category's markers as plain
text, so a category name is never read as a group reference.
"""

import re
from collections.abc import Iterable

from ...core.config import setup_logging
from ...core.errors import MarkerError
from ...schemas.configuration import Configuration, StageId, StyleRule
from ..patterns import compile_rule_pattern, translate_replacement
from ..tagging import end_marker, start_marker
from .base import Stage

logger = setup_logging(__name__, log_filename="text_formatting.txt")

TAG_START_PLACEHOLDER = "$TAG_START"
TAG_END_PLACEHOLDER = "$TAG_END"


def expand_tag_placeholders(template: str, category: str, *, escape_backslashes: bool = False) -> str:
    """Substitute the marker placeholders for ``category``.

    With ``escape_backslashes`` the markers are written for a Python ``re.sub``
    template, so backslashes in the category stay literal.

    Raises:
        MarkerError: If ``category`` cannot be encoded as a marker.

    """
    start, end = start_marker(category), end_marker(category)
    if escape_backslashes:
        start, end = start.replace("\\", "\\\\"), end.replace("\\", "\\\\")
    return template.replace(TAG_START_PLACEHOLDER, start).replace(TAG_END_PLACEHOLDER, end)


def apply_style_rules(text: str, rules: Iterable[StyleRule]) -> str:
    for index, rule in enumerate(rules):
        if not rule.enabled:
            continue
        label = rule.name or f"#{index}"
        if not rule.find_pattern or not rule.category_name or not rule.replace_template:
            logger.warning(f"Skipping style rule {label}: pattern, category and template are all required")
            continue
        try:
            pattern = compile_rule_pattern(rule.find_pattern)
            template = expand_tag_placeholders(
                translate_replacement(rule.replace_template, pattern), rule.category_name, escape_backslashes=True
            )
            text = pattern.sub(template, text)
        except (re.error, MarkerError) as e:
            logger.warning(f"Skipping style rule {label}: {e}")
    return text


class StyleMapperStage(Stage):
    stage_id = StageId.STYLE_MAPPER
    name = "Style Mapper"

    def process(self, text: str, config: Configuration) -> str:
        return apply_style_rules(text, config.style_mapper_rules)
