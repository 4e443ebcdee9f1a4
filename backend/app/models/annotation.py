"""Annotation model: positioned callouts over an analyzed image."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class AnnotationType(str, enum.Enum):
    ISSUE = "issue"
    RECOMMENDATION = "recommendation"
    INFO = "info"


class Annotation(BaseModel):
    """One region of the image, in percentages of its natural size.

    ``x``/``y`` is the top-left corner. Decoded annotations satisfy
    ``x + width <= 100`` and ``y + height <= 100``.
    """

    id: str
    type: AnnotationType = AnnotationType.INFO
    title: str = ""
    description: str = ""
    x: float = Field(0.0, ge=0, le=100)
    y: float = Field(0.0, ge=0, le=100)
    width: float = Field(0.0, ge=0, le=100)
    height: float = Field(0.0, ge=0, le=100)
    color: str | None = None  # author hint, overridden by the type palette

    model_config = {"frozen": True}


class ParseWarning(BaseModel):
    code: str  # invalid_json, missing_annotations, invalid_entry, unknown_type, ...
    message: str
    index: int | None = None  # position in the annotations array, if any

    model_config = {"frozen": True}


class DecodeResult(BaseModel):
    annotations: list[Annotation] = Field(default_factory=list)
    warnings: list[ParseWarning] = Field(default_factory=list)


class LabeledField(BaseModel):
    label: str = ""
    content: str = ""
    is_code: bool = False

    model_config = {"frozen": True}


class OverlayBox(BaseModel):
    """CSS-ready box, relative to an overlay sized exactly like the image."""

    annotation_id: str
    analysis_type_id: str
    type: AnnotationType
    title: str = ""
    color: str
    left: str
    top: str
    width: str
    height: str


class PixelBox(BaseModel):
    annotation_id: str
    left: float
    top: float
    width: float
    height: float
