"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from app.models.analysis import AnalysisResult, AnalysisType


class ImagePayload(BaseModel):
    url: str | None = Field(default=None, description="Public URL of the image")
    data: str | None = Field(default=None, description="Base64-encoded image bytes")
    mime_type: str = Field(default="image/jpeg", description="Media type of 'data'")


class ParseRequest(BaseModel):
    raw: str = Field(..., description="Full text of one model completion")
    analysis_type_id: str | None = Field(
        default=None,
        description="When set, the response also carries an AnalysisResult",
    )
    analysis_type_name: str = Field(default="", description="Display name of the analysis type")
    provider: str = Field(default="", description="Provider that produced the text")


class FieldsRequest(BaseModel):
    description: str = Field(..., description="Annotation description string")


class OverlayRequest(BaseModel):
    results: list[AnalysisResult] = Field(..., description="Loaded analysis results, in display order")
    visible_types: dict[str, bool] = Field(
        default_factory=dict,
        description="Visibility per analysis type id; missing types are visible",
    )
    show_annotations: bool = Field(default=True, description="Master overlay toggle")
    rendered_width: float | None = Field(default=None, ge=0, description="Displayed image width in px")
    rendered_height: float | None = Field(default=None, ge=0, description="Displayed image height in px")
    selected_id: str | None = Field(default=None, description="Annotation to open in the detail panel")


class AnalyzeRequest(BaseModel):
    analysis_type: AnalysisType = Field(..., description="Analysis type with its prompt template")
    provider: str = Field(default="openai", description="openai or anthropic")
    image: ImagePayload = Field(..., description="Image to analyze")


class OverlayImageRequest(OverlayRequest):
    image: ImagePayload = Field(..., description="Image to annotate; only base64 'data' is read")
