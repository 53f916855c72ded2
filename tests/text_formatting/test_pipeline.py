#!/usr/bin/env python3
"""Tests for the pipeline engine.

Covers stage ordering, stage order repair, final marker stripping and the
end-to-end dialogue example.
"""

import pytest

from matilda_quill.schemas.configuration import (
    DEFAULT_STAGE_ORDER,
    Configuration,
    FindReplaceRule,
    SmartPunctuationConfig,
    StageId,
)
from matilda_quill.text_formatting import PipelineEngine, run_pipeline
from matilda_quill.text_formatting.internal.pipeline import default_stages, get_stage_class
from matilda_quill.text_formatting.stages import CaseFormatterStage, FindReplaceStage
from matilda_quill.text_formatting.tagging import wrap

EXAMPLE = 'He said, "I am happy," and walked away.'


class TestEndToEnd:
    """Test the full default pipeline."""

    def test_dialogue_example(self):
        """Test that a positive dialogue comma becomes an exclamation mark."""
        assert run_pipeline(EXAMPLE, Configuration()) == 'He said, "I am happy!" and walked away.'

    def test_uncompilable_rule_does_not_abort_run(self):
        """Test that a rule the regex parser rejects with OverflowError is skipped."""
        config = Configuration(find_and_replace_rules=[FindReplaceRule(pattern="a{4294967296}", is_regex=True)])
        assert run_pipeline(EXAMPLE, config) == 'He said, "I am happy!" and walked away.'

    def test_curly_quoted_dialogue(self):
        text = "He said, \u201cI am happy,\u201d and walked away."
        assert run_pipeline(text, Configuration()) == "He said, \u201cI am happy!\u201d and walked away."

    def test_dialogue_example_with_case_formatter(self):
        config = Configuration(case_formatter_enabled=True)
        assert run_pipeline(EXAMPLE, config) == 'He said, "I am happy!" and walked away.'

    def test_markers_kept_when_requested(self):
        config = Configuration(strip_markers=False)
        result = run_pipeline(EXAMPLE, config)
        assert result == 'He said, "' + wrap("I am happy!", "dialogue") + '" and walked away.'

    def test_default_configuration_when_omitted(self):
        assert run_pipeline(EXAMPLE) == 'He said, "I am happy!" and walked away.'

    def test_negative_and_neutral_dialogue(self):
        test_cases = [
            ('"I hate this," she said.', '"I hate this..." she said.'),
            ('"See you tomorrow," he said.', '"See you tomorrow." he said.'),
        ]
        for input_text, expected in test_cases:
            result = run_pipeline(input_text, Configuration())
            assert result == expected, f"Input {input_text!r} should format to {expected!r}, got {result!r}"

    def test_empty_input(self):
        assert run_pipeline("", Configuration()) == ""
        assert run_pipeline("   ", Configuration()) == "   "


class TestStageOrder:
    """Test stage order validation and sensitivity."""

    def test_order_sensitivity(self):
        """Test that stages compose by sequential text mutation."""
        strip_stars = FindReplaceRule(pattern="*", replacement="")
        emphasis_punctuation = SmartPunctuationConfig(target_category="emphasis")
        text = "*so happy,*"

        replace_first = Configuration(
            find_and_replace_rules=[strip_stars],
            smart_punctuation=emphasis_punctuation,
        )
        replace_last = replace_first.model_copy(
            update={
                "stage_order": (
                    "style_mapper",
                    "smart_punctuation",
                    "find_and_replace",
                    "paragraph_control",
                    "case_formatter",
                )
            }
        )
        assert run_pipeline(text, replace_first) == "so happy,"
        assert run_pipeline(text, replace_last) == "so happy!"

    def test_invalid_order_falls_back_with_warning(self):
        engine = PipelineEngine()
        for bad_order in [("style_mapper",), ("style_mapper",) * 5, (*DEFAULT_STAGE_ORDER, "extra"), ()]:
            run = engine.run_detailed(EXAMPLE, Configuration(stage_order=bad_order))
            assert run.stage_order == list(DEFAULT_STAGE_ORDER), f"Order {bad_order} should be repaired"
            assert run.warnings, f"Order {bad_order} should produce a warning"
            assert run.output_text == 'He said, "I am happy!" and walked away.'

    def test_valid_custom_order_used(self):
        order = tuple(reversed(DEFAULT_STAGE_ORDER))
        run = PipelineEngine().run_detailed("x", Configuration(stage_order=order))
        assert run.stage_order == list(order)
        assert run.warnings == []

    def test_custom_stage_set(self):
        engine = PipelineEngine([CaseFormatterStage()])
        config = Configuration(case_formatter_enabled=True, stage_order=("case_formatter",))
        run = engine.run_detailed("hello", config)
        assert run.output_text == "Hello"
        assert run.warnings == []

    def test_duplicate_stage_registration_rejected(self):
        with pytest.raises(ValueError):
            PipelineEngine([FindReplaceStage(), FindReplaceStage()])


class TestPipelineRun:
    """Test run reports and purity."""

    def test_changed_flag(self):
        engine = PipelineEngine()
        assert engine.run_detailed(EXAMPLE, Configuration()).changed is True
        assert engine.run_detailed("nothing to do", Configuration()).changed is False

    def test_configuration_not_mutated(self):
        config = Configuration(case_formatter_enabled=True)
        before = config.model_dump()
        run_pipeline(EXAMPLE, config)
        assert config.model_dump() == before

    def test_runs_are_independent(self):
        engine = PipelineEngine()
        first = engine.run('"good,"', Configuration())
        engine.run('"bad,"', Configuration(case_formatter_enabled=True))
        assert engine.run('"good,"', Configuration()) == first


class TestRegistry:
    def test_default_stages_follow_default_order(self):
        assert [stage.stage_id.value for stage in default_stages()] == list(DEFAULT_STAGE_ORDER)

    def test_lookup_by_identifier(self):
        assert get_stage_class(StageId.CASE_FORMATTER) is CaseFormatterStage
        assert get_stage_class("find_and_replace") is FindReplaceStage
        with pytest.raises(KeyError):
            get_stage_class("FindReplaceStage")
