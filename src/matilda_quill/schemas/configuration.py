"""Pipeline configuration models.

Field names are snake_case in Python; the camelCase names used by host
settings exports (``findAndReplaceRules``, ``stageOrder``, ...) are accepted
as aliases and produced by :meth:`Configuration.to_host_dict`.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, PositiveInt
from pydantic.alias_generators import to_camel


class StageId(str, Enum):
    """Stable identifiers of the registered pipeline stages."""

    FIND_AND_REPLACE = "find_and_replace"
    PARAGRAPH_CONTROL = "paragraph_control"
    STYLE_MAPPER = "style_mapper"
    SMART_PUNCTUATION = "smart_punctuation"
    CASE_FORMATTER = "case_formatter"


DEFAULT_STAGE_ORDER: tuple[str, ...] = tuple(stage.value for stage in StageId)

POSITIVE_WORDS: tuple[str, ...] = (
    "good",
    "great",
    "happy",
    "awesome",
    "excellent",
    "love",
    "wonderful",
    "amazing",
    "glad",
    "fantastic",
    "beautiful",
    "thanks",
)
NEGATIVE_WORDS: tuple[str, ...] = (
    "bad",
    "sad",
    "terrible",
    "awful",
    "hate",
    "poor",
    "horrible",
    "angry",
    "upset",
    "afraid",
    "sorry",
    "hurt",
)


class QuillModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class FindReplaceRule(QuillModel):
    pattern: str = ""
    replacement: str = ""
    is_regex: bool = False
    case_sensitive: bool = False
    enabled: bool = True


class StyleRule(QuillModel):
    name: str = ""
    find_pattern: str = ""
    category_name: str = ""
    replace_template: str = ""
    enabled: bool = True


class SmartPunctuationConfig(QuillModel):
    enabled: bool = True
    target_category: str = "dialogue"
    positive_replacement: str = "!"
    negative_replacement: str = "..."
    neutral_replacement: str = "."
    positive_threshold: float = 0.05
    negative_threshold: float = -0.05


class SentimentKeywords(QuillModel):
    positive_words: tuple[str, ...] = POSITIVE_WORDS
    negative_words: tuple[str, ...] = NEGATIVE_WORDS


class ParagraphMode(str, Enum):
    NONE = "none"
    SINGLE = "single"
    MAX = "max"
    MIN = "min"


DIALOGUE_RULE = StyleRule(
    name="Dialogue",
    find_pattern="([\"\u201c])([^\"\u201c\u201d\n]*)([\"\u201d])",
    category_name="dialogue",
    replace_template="$1$TAG_START$2$TAG_END$3",
)
EMPHASIS_RULE = StyleRule(
    name="Emphasis",
    find_pattern=r"\*([^*\n]+)\*",
    category_name="emphasis",
    replace_template="*$TAG_START$1$TAG_END*",
)


class Configuration(QuillModel):
    """Read-only settings snapshot consumed by every stage."""

    find_and_replace_rules: tuple[FindReplaceRule, ...] = ()
    paragraph_control_mode: ParagraphMode = ParagraphMode.NONE
    paragraph_control_max: PositiveInt = 3
    paragraph_control_min: PositiveInt = 1
    style_mapper_rules: tuple[StyleRule, ...] = (DIALOGUE_RULE, EMPHASIS_RULE)
    smart_punctuation: SmartPunctuationConfig = Field(default_factory=SmartPunctuationConfig)
    case_formatter_enabled: bool = False
    stage_order: tuple[str, ...] = DEFAULT_STAGE_ORDER
    strip_markers: bool = True
    sentiment: SentimentKeywords = Field(default_factory=SentimentKeywords)

    def to_host_dict(self) -> dict[str, Any]:
        """Dump camelCase, JSON-compatible settings for the host store."""
        return self.model_dump(mode="json", by_alias=True)


RuleKind = Literal["find_and_replace", "style_mapper"]

_RULE_FIELDS: dict[str, str] = {
    "find_and_replace": "find_and_replace_rules",
    "style_mapper": "style_mapper_rules",
}


def _rules_field(kind: str) -> str:
    try:
        return _RULE_FIELDS[kind]
    except KeyError:
        raise ValueError(f"Unknown rule kind: {kind!r}") from None


def add_find_replace_rule(config: Configuration, rule: FindReplaceRule) -> Configuration:
    return config.model_copy(update={"find_and_replace_rules": (*config.find_and_replace_rules, rule)})


def add_style_rule(config: Configuration, rule: StyleRule) -> Configuration:
    return config.model_copy(update={"style_mapper_rules": (*config.style_mapper_rules, rule)})


def remove_rule(config: Configuration, kind: RuleKind, index: int) -> Configuration:
    """Return a copy of ``config`` without the rule at ``index``.

    Raises:
        IndexError: If ``index`` is out of range for that rule list.

    """
    field_name = _rules_field(kind)
    rules = list(getattr(config, field_name))
    del rules[index]
    return config.model_copy(update={field_name: tuple(rules)})


def toggle_rule(config: Configuration, kind: RuleKind, index: int, enabled: bool | None = None) -> Configuration:
    """Flip (or set) the ``enabled`` flag of one rule."""
    field_name = _rules_field(kind)
    rules = list(getattr(config, field_name))
    rule = rules[index]
    new_state = (not rule.enabled) if enabled is None else enabled
    rules[index] = rule.model_copy(update={"enabled": new_state})
    return config.model_copy(update={field_name: tuple(rules)})


def move_stage(config: Configuration, stage_id: StageId | str, new_index: int) -> Configuration:
    """Move one stage to ``new_index`` within the stage order.

    A stage order that has drifted from the registered set is reset to the
    default before the move so the result is always a valid permutation.
    """
    stage_name = StageId(stage_id).value
    order = list(config.stage_order)
    if sorted(order) != sorted(DEFAULT_STAGE_ORDER):
        order = list(DEFAULT_STAGE_ORDER)
    order.remove(stage_name)
    new_index = max(0, min(new_index, len(order)))
    order.insert(new_index, stage_name)
    return config.model_copy(update={"stage_order": tuple(order)})


def reset_stage_order(config: Configuration) -> Configuration:
    return config.model_copy(update={"stage_order": DEFAULT_STAGE_ORDER})


__all__ = [
    "Configuration",
    "FindReplaceRule",
    "StyleRule",
    "SmartPunctuationConfig",
    "SentimentKeywords",
    "ParagraphMode",
    "StageId",
    "DEFAULT_STAGE_ORDER",
    "POSITIVE_WORDS",
    "NEGATIVE_WORDS",
    "DIALOGUE_RULE",
    "EMPHASIS_RULE",
    "add_find_replace_rule",
    "add_style_rule",
    "remove_rule",
    "toggle_rule",
    "move_stage",
    "reset_stage_order",
]
