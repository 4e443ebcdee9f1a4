"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from app.models.analysis import AnalysisResult
from app.models.annotation import Annotation, LabeledField, OverlayBox, ParseWarning, PixelBox
from app.models.sections import StructuredNode


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    providers_configured: dict[str, bool] = Field(default_factory=dict)


class ParseResponse(BaseModel):
    content: str
    sections: list[StructuredNode] = Field(default_factory=list)
    annotations: list[Annotation] = Field(default_factory=list)
    warnings: list[ParseWarning] = Field(default_factory=list)
    has_delimiter: bool = False
    result: AnalysisResult | None = None


class FieldsResponse(BaseModel):
    fields: list[LabeledField] = Field(default_factory=list)


class OverlaySummary(BaseModel):
    issues: int = 0
    recommendations: int = 0
    visible_types: int = 0
    total_types: int = 0
    visible_annotations: int = 0


class OverlayResponse(BaseModel):
    boxes: list[OverlayBox] = Field(default_factory=list)
    pixel_boxes: list[PixelBox] = Field(default_factory=list)
    colors: dict[str, str] = Field(default_factory=dict)
    visible_types: dict[str, bool] = Field(default_factory=dict)
    summary: OverlaySummary = Field(default_factory=OverlaySummary)
    selected: Annotation | None = None
    selected_fields: list[LabeledField] = Field(default_factory=list)


class AnalyzeResponse(BaseModel):
    result: AnalysisResult
    message: str = ""
    sections: list[StructuredNode] = Field(default_factory=list)
    duration_ms: float = 0.0
    llm_configured: bool = True
