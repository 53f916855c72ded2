#!/usr/bin/env python3
"""Find-and-replace cleanup stage."""

import re
from collections.abc import Iterable

from ...core.config import setup_logging
from ...schemas.configuration import Configuration, FindReplaceRule, StageId
from ..patterns import compile_rule_pattern, literal_replacement, translate_replacement
from .base import Stage

logger = setup_logging(__name__, log_filename="text_formatting.txt")


def apply_find_replace_rules(text: str, rules: Iterable[FindReplaceRule]) -> str:
    """Apply rules in list order; each rule sees the previous rule's output.

    A rule whose pattern does not compile is skipped.
    """
    for index, rule in enumerate(rules):
        if not rule.enabled or not rule.pattern:
            continue
        try:
            pattern = compile_rule_pattern(rule.pattern, is_regex=rule.is_regex, case_sensitive=rule.case_sensitive)
            if rule.is_regex:
                text = pattern.sub(translate_replacement(rule.replacement, pattern), text)
            else:
                text = pattern.sub(literal_replacement(rule.replacement), text)
        except re.error as e:
            logger.warning(f"Skipping find-and-replace rule {index} ({rule.pattern!r}): {e}")
    return text


class FindReplaceStage(Stage):
    stage_id = StageId.FIND_AND_REPLACE
    name = "Find and Replace"

    def process(self, text: str, config: Configuration) -> str:
        return apply_find_replace_rules(text, config.find_and_replace_rules)
