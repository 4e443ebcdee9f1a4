"""Parse an annotation description into labeled fields.

Descriptions follow ``"Label : content | Label : content"`` when the model
respects the formatting instructions, and drift into ``Label: content``
lines or plain prose when it doesn't.
"""

from __future__ import annotations

import re

from app.models.annotation import LabeledField

_FIELD_SEPARATOR = " | "
_LABEL_SEPARATOR = " : "

# Label at a line start, then content up to the next labeled line or the end.
_GENERIC_FIELD_RE = re.compile(
    r"^([^:\n]+?)[ \t]*:[ \t]*(.+?)(?=\n[^:\n]+:|\Z)",
    re.MULTILINE | re.DOTALL,
)

_CODE_LABEL_HINTS = ("code", "html", "css", "suggestion")
_CODE_CONTENT_HINTS = ("<", "{", "class=", "aria-", "function", "const ", "var ")

# Unlabeled text this long with double-space indentation reads as code.
_INDENTED_MIN_LINES = 4
_INDENT = "  "


def parse_inline_fields(description: str) -> list[LabeledField]:
    """Split ``description`` into fields and flag the ones holding code."""
    if not description or not description.strip():
        return []

    if _FIELD_SEPARATOR in description:
        segments = (_split_segment(segment) for segment in description.split(_FIELD_SEPARATOR))
        return [field for field in segments if field is not None]

    matches = list(_GENERIC_FIELD_RE.finditer(description))
    if matches:
        fields = [_make_field(m.group(1).strip(), m.group(2).strip()) for m in matches]
        preamble = description[:matches[0].start()].strip()
        if preamble:
            fields.insert(0, LabeledField(label="", content=preamble, is_code=_looks_like_unlabeled_code(preamble)))
        return fields

    text = description.strip()
    return [LabeledField(label="", content=text, is_code=_looks_like_unlabeled_code(text))]


def is_code_field(label: str, content: str) -> bool:
    """Permissive heuristic; a false positive only renders prose as code."""
    lowered = label.lower()
    if any(hint in lowered for hint in _CODE_LABEL_HINTS):
        return True
    return any(hint in content for hint in _CODE_CONTENT_HINTS)


def _split_segment(segment: str) -> LabeledField | None:
    # Segments without a "Label : " prefix are dropped
    label, sep, content = segment.partition(_LABEL_SEPARATOR)
    if not sep or not label.strip():
        return None
    return _make_field(label.strip(), content.strip())


def _make_field(label: str, content: str) -> LabeledField:
    return LabeledField(label=label, content=content, is_code=is_code_field(label, content))


def _looks_like_unlabeled_code(text: str) -> bool:
    if is_code_field("", text):
        return True
    return len(text.split("\n")) >= _INDENTED_MIN_LINES and _INDENT in text
