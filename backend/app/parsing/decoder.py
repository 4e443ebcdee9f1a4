"""Decode and validate the annotations JSON payload of a model response.

The payload is produced by an LLM following a prompting convention, so
nothing about it is trusted. Every problem becomes a ``ParseWarning``
instead of an exception: a malformed annotation block must degrade to
"fewer annotations", never abort display of the analysis.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any

from app.models.annotation import Annotation, AnnotationType, DecodeResult, ParseWarning

logger = logging.getLogger(__name__)

_COORDINATES = ("x", "y", "width", "height")
_VALID_TYPES = {t.value for t in AnnotationType}

# Longest excerpt of an undecodable payload copied into the log.
_LOG_EXCERPT_CHARS = 500


def decode_annotations(annotations_json: str | None) -> DecodeResult:
    """Parse ``annotations_json`` into validated annotations plus warnings."""
    if annotations_json is None or not annotations_json.strip():
        return DecodeResult()

    try:
        data = json.loads(annotations_json)
    except (ValueError, RecursionError) as e:
        logger.warning(
            "Annotations JSON could not be parsed: %s (payload starts with %r)",
            e,
            annotations_json[:_LOG_EXCERPT_CHARS],
        )
        # JSONDecodeError carries a short msg; digit-limit and nesting errors do not
        reason = getattr(e, "msg", None) or str(e)
        return DecodeResult(
            warnings=[ParseWarning(code="invalid_json", message=f"Annotations JSON is invalid: {reason}")]
        )

    entries = data.get("annotations") if isinstance(data, dict) else None
    if not isinstance(entries, list):
        logger.warning("Annotations payload has no 'annotations' list")
        return DecodeResult(
            warnings=[ParseWarning(code="missing_annotations", message="No 'annotations' list in payload")]
        )

    annotations: list[Annotation] = []
    warnings: list[ParseWarning] = []
    seen_ids: set[str] = set()

    for index, entry in enumerate(entries):
        annotation = _decode_entry(entry, index, seen_ids, warnings)
        if annotation is not None:
            seen_ids.add(annotation.id)
            annotations.append(annotation)

    if warnings:
        logger.warning(
            "Decoded %d/%d annotations with %d warnings",
            len(annotations),
            len(entries),
            len(warnings),
        )
    else:
        logger.debug("Decoded %d annotations", len(annotations))

    return DecodeResult(annotations=annotations, warnings=warnings)


def _decode_entry(
    entry: Any,
    index: int,
    seen_ids: set[str],
    warnings: list[ParseWarning],
) -> Annotation | None:
    if not isinstance(entry, dict):
        warnings.append(ParseWarning(
            code="invalid_entry",
            message=f"Annotation #{index + 1} is not an object",
            index=index,
        ))
        return None

    raw_type = entry.get("type")
    if raw_type is None:
        ann_type = AnnotationType.INFO
    elif isinstance(raw_type, str) and raw_type in _VALID_TYPES:
        ann_type = AnnotationType(raw_type)
    else:
        warnings.append(ParseWarning(
            code="unknown_type",
            message=f"Annotation #{index + 1} has unknown type {raw_type!r}",
            index=index,
        ))
        return None

    ann_id = _decode_id(entry.get("id"), index, seen_ids, warnings)
    x, y, width, height = _decode_box(entry, index, warnings)

    color = entry.get("color")
    return Annotation(
        id=ann_id,
        type=ann_type,
        title=_as_text(entry.get("title")),
        description=_as_text(entry.get("description")),
        x=x,
        y=y,
        width=width,
        height=height,
        color=str(color) if color is not None else None,
    )


def _decode_id(raw_id: Any, index: int, seen_ids: set[str], warnings: list[ParseWarning]) -> str:
    ann_id = str(raw_id).strip() if raw_id is not None else ""
    if not ann_id:
        ann_id = f"annotation_{index + 1}"

    if ann_id not in seen_ids:
        return ann_id

    suffix = 2
    while f"{ann_id}-{suffix}" in seen_ids:
        suffix += 1
    unique = f"{ann_id}-{suffix}"
    warnings.append(ParseWarning(
        code="duplicate_id",
        message=f"Annotation #{index + 1} reuses id {ann_id!r}, renamed to {unique!r}",
        index=index,
    ))
    return unique


def _decode_box(
    entry: dict[str, Any],
    index: int,
    warnings: list[ParseWarning],
) -> tuple[float, float, float, float]:
    values: dict[str, float] = {}
    for key in _COORDINATES:
        number = _as_number(entry.get(key))
        if number is None:
            warnings.append(ParseWarning(
                code="invalid_coordinate",
                message=f"Annotation #{index + 1} has no numeric {key!r}, using 0",
                index=index,
            ))
            number = 0.0
        values[key] = number

    x = _clamp(values["x"], 0.0, 100.0)
    y = _clamp(values["y"], 0.0, 100.0)
    width = _clamp(values["width"], 0.0, 100.0 - x)
    height = _clamp(values["height"], 0.0, 100.0 - y)

    if (x, y, width, height) != (values["x"], values["y"], values["width"], values["height"]):
        warnings.append(ParseWarning(
            code="clamped",
            message=f"Annotation #{index + 1} was clamped into the image bounds",
            index=index,
        ))
    return x, y, width, height


def _as_number(value: Any) -> float | None:
    # bool is an int subclass; true/false are not coordinates
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            number = float(value.strip().rstrip("%"))
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))
