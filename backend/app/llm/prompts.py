"""Prompt convention for image analyses, matched to the response parsers.

The system prompt of an analysis type is extended with the technical
instructions below so the model answers with numbered sections, the
``---ANNOTATIONS---`` delimiter and a JSON annotations payload.
"""

from __future__ import annotations

from app.models.analysis import AnalysisType
from app.parsing.splitter import ANNOTATIONS_DELIMITER

DEFAULT_FORMATTING_INSTRUCTIONS = (
    "Role and function : [description] | Position and hierarchy : [description] | "
    "Visual boundaries : [description] | Accessibility issues : [list] | "
    "Code suggestions : [HTML/CSS code]"
)

DEFAULT_ANNOTATION_RULES = (
    "Precise coordinates as percentages of the image. x,y = top-left corner of the region."
)

USER_INSTRUCTION = (
    "Analyze this image according to the requested criteria. First give a "
    "conversational analysis, then the annotations with precise coordinates."
)

_TECHNICAL_TEMPLATE = """

TECHNICAL INSTRUCTIONS FOR THE ANSWER:
Your answer must be structured in two parts:

1. TEXTUAL ANALYSIS: Follow the system prompt above exactly.
   STRUCTURE your analysis with numbered sections (1., 2., 3., etc.), one per identified zone/region.
   Inside a section, write details as "- Label : content" lines and put code in ``` fenced blocks.

2. ANNOTATIONS: For each numbered section of your analysis, create ONE matching annotation:
{{
  "annotations": [
    {{
      "id": "zone_1",
      "type": "info",
      "title": "Zone name (e.g. Side Navigation, Header, etc.)",
      "description": "STRUCTURE the content with this exact format: {formatting}",
      "x": [X position as a percentage 0-100],
      "y": [Y position as a percentage 0-100],
      "width": [width as a percentage],
      "height": [height as a percentage],
      "color": "#0066cc"
    }}
  ]
}}
"type" is one of "issue", "recommendation" or "info".

CRUCIAL TECHNICAL RULES:
{rules}
- Each annotation must carry the FULL content of its matching section
- Include ALL details following the specified format
- Do not summarize or shorten: copy ALL the text of each section

Separate the two parts with a line containing only {delimiter}
"""


def build_analysis_prompt(analysis_type: AnalysisType) -> str:
    """System prompt of ``analysis_type`` plus the response-format instructions."""
    prompt = analysis_type.system_prompt

    if analysis_type.coordination_prompt:
        prompt += f"\n\nSPECIFIC COORDINATION INSTRUCTIONS:\n{analysis_type.coordination_prompt}"

    prompt += _TECHNICAL_TEMPLATE.format(
        formatting=analysis_type.formatting_instructions or DEFAULT_FORMATTING_INSTRUCTIONS,
        rules=analysis_type.annotation_rules or DEFAULT_ANNOTATION_RULES,
        delimiter=ANNOTATIONS_DELIMITER,
    )
    return prompt


def get_all_templates() -> dict[str, str]:
    return {
        "formatting_instructions": DEFAULT_FORMATTING_INSTRUCTIONS,
        "annotation_rules": DEFAULT_ANNOTATION_RULES,
        "user_instruction": USER_INSTRUCTION,
        "delimiter": ANNOTATIONS_DELIMITER,
    }
