"""Analysis types and per-invocation analysis results."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field, computed_field

from app.models.annotation import Annotation, AnnotationType, ParseWarning


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenUsage(BaseModel):
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0


class AnalysisType(BaseModel):
    """A named analysis category with its own prompt template."""

    id: str
    name: str
    description: str = ""
    system_prompt: str = ""
    category: str = ""
    active: bool = True
    coordination_prompt: str | None = None
    formatting_instructions: str | None = None
    annotation_rules: str | None = None


class AnalysisResult(BaseModel):
    """Output of one (image, analysis type, provider) invocation."""

    analysis_type_id: str
    analysis_type_name: str = ""
    provider: str = ""
    model: str = ""
    content: str = ""
    annotations: list[Annotation] = Field(default_factory=list)
    usage: TokenUsage = Field(default_factory=TokenUsage)
    timestamp: datetime = Field(default_factory=_utcnow)
    warnings: list[ParseWarning] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def issue_count(self) -> int:
        return sum(1 for a in self.annotations if a.type == AnnotationType.ISSUE)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def recommendation_count(self) -> int:
        return sum(1 for a in self.annotations if a.type == AnnotationType.RECOMMENDATION)
