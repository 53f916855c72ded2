#!/usr/bin/env python3
"""Tests for the find-and-replace stage."""

from matilda_quill.schemas.configuration import Configuration, FindReplaceRule
from matilda_quill.text_formatting.stages import FindReplaceStage, apply_find_replace_rules


def _rule(pattern, replacement, **kwargs):
    return FindReplaceRule(pattern=pattern, replacement=replacement, **kwargs)


class TestLiteralRules:
    """Test non-regex rules."""

    def test_metacharacters_are_escaped(self):
        """Test that 'a.b' matches only the literal substring."""
        result = apply_find_replace_rules("a.b axb", [_rule("a.b", "X")])
        assert result == "X axb"

    def test_case_insensitive_by_default(self):
        assert apply_find_replace_rules("Cat cat", [_rule("cat", "dog")]) == "dog dog"

    def test_case_sensitive(self):
        assert apply_find_replace_rules("Cat cat", [_rule("cat", "dog", case_sensitive=True)]) == "Cat dog"

    def test_replacement_inserted_verbatim(self):
        """Test that '$1' in a literal rule's replacement is not a group reference."""
        assert apply_find_replace_rules("price", [_rule("price", "$1 \\n")]) == "$1 \\n"

    def test_replaces_every_occurrence(self):
        assert apply_find_replace_rules("x x x", [_rule("x", "y")]) == "y y y"


class TestRegexRules:
    """Test regex rules and replacement syntax."""

    def test_backreferences(self):
        rule = _rule(r"(\w+)@(\w+)", "$2 at $1", is_regex=True)
        assert apply_find_replace_rules("me@home", [rule]) == "home at me"

    def test_whole_match_and_dollar_escape(self):
        test_cases = [
            (_rule("cat", "[$&]", is_regex=True), "a cat", "a [cat]"),
            (_rule("cost", "$$5", is_regex=True), "cost", "$5"),
            (_rule("a", "$2", is_regex=True), "a", "$2"),
        ]
        for rule, text, expected in test_cases:
            result = apply_find_replace_rules(text, [rule])
            assert result == expected, f"{rule.replacement!r} on {text!r} should give {expected!r}, got {result!r}"

    def test_named_groups(self):
        rule = _rule(r"(?<word>\w+)!", "$<word>.", is_regex=True)
        assert apply_find_replace_rules("hi!", [rule]) == "hi."

    def test_backslash_in_replacement_is_literal(self):
        rule = _rule("a", "\\n", is_regex=True)
        assert apply_find_replace_rules("a", [rule]) == "\\n"

    def test_regex_case_flag(self):
        assert apply_find_replace_rules("Yes yes", [_rule("^yes", "no", is_regex=True)]) == "no yes"
        assert apply_find_replace_rules("Yes yes", [_rule("yes", "no", is_regex=True, case_sensitive=True)]) == "Yes no"


class TestRuleSequencing:
    """Test ordering and failure isolation."""

    def test_rules_apply_in_order(self):
        """Test that each rule sees the previous rule's output."""
        rules = [_rule("a", "b"), _rule("b", "c")]
        assert apply_find_replace_rules("a", rules) == "c"
        assert apply_find_replace_rules("a", list(reversed(rules))) == "b"

    def test_invalid_regex_is_skipped(self):
        rules = [_rule("(", "!", is_regex=True), _rule("x", "y")]
        assert apply_find_replace_rules("xx", rules) == "yy"

    def test_oversized_repeat_count_is_skipped(self):
        """Test that a pattern the parser rejects with OverflowError is skipped."""
        rules = [_rule("a{4294967296}", "!", is_regex=True), _rule("x", "y")]
        assert apply_find_replace_rules("xx", rules) == "yy"

    def test_disabled_and_empty_rules_are_skipped(self):
        rules = [_rule("x", "y", enabled=False), _rule("", "z")]
        assert apply_find_replace_rules("x", rules) == "x"

    def test_empty_input(self):
        assert apply_find_replace_rules("", [_rule("x", "y")]) == ""

    def test_stage_reads_configuration(self):
        config = Configuration(find_and_replace_rules=[_rule("teh", "the")])
        assert FindReplaceStage().process("teh cat", config) == "the cat"
