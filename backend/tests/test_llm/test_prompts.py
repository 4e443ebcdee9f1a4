"""Tests for the analysis prompt convention."""

from __future__ import annotations

from app.llm.prompts import (
    DEFAULT_ANNOTATION_RULES,
    DEFAULT_FORMATTING_INSTRUCTIONS,
    build_analysis_prompt,
    get_all_templates,
)
from app.models.analysis import AnalysisType
from app.parsing.splitter import ANNOTATIONS_DELIMITER


def _analysis_type(**kwargs) -> AnalysisType:
    fields = {"id": "navigation", "name": "Navigation", "system_prompt": "You audit navigation."}
    fields.update(kwargs)
    return AnalysisType(**fields)


def test_prompt_starts_with_system_prompt():
    prompt = build_analysis_prompt(_analysis_type())
    assert prompt.startswith("You audit navigation.")
    assert "SPECIFIC COORDINATION INSTRUCTIONS" not in prompt


def test_prompt_uses_defaults():
    prompt = build_analysis_prompt(_analysis_type())
    assert DEFAULT_FORMATTING_INSTRUCTIONS in prompt
    assert DEFAULT_ANNOTATION_RULES in prompt
    assert prompt.rstrip().endswith(ANNOTATIONS_DELIMITER)


def test_prompt_json_example_has_single_braces():
    prompt = build_analysis_prompt(_analysis_type())
    assert '"annotations": [' in prompt
    assert "{{" not in prompt


def test_prompt_overrides():
    prompt = build_analysis_prompt(
        _analysis_type(
            coordination_prompt="Focus on the sidebar.",
            formatting_instructions="Role : [x]",
            annotation_rules="- Boxes never overlap",
        )
    )
    assert "SPECIFIC COORDINATION INSTRUCTIONS:\nFocus on the sidebar." in prompt
    assert "Role : [x]" in prompt
    assert "- Boxes never overlap" in prompt
    assert DEFAULT_FORMATTING_INSTRUCTIONS not in prompt


def test_templates():
    templates = get_all_templates()
    assert templates["delimiter"] == "---ANNOTATIONS---"
    assert set(templates) == {"formatting_instructions", "annotation_rules", "user_instruction", "delimiter"}
