"""Chat-message rendering of finished analyses."""

from __future__ import annotations

from app.llm.model_router import provider_label
from app.models.analysis import AnalysisResult

_HEADER_ICON = "📊"


def analysis_header(type_name: str, provider: str) -> str:
    """``📊 **Analyse <type> (<provider>) terminée**``, read back as a main title."""
    name = type_name or "Inconnue"
    return f"{_HEADER_ICON} **Analyse {name} ({provider_label(provider)}) terminée**"


def format_analysis_message(result: AnalysisResult) -> str:
    return f"{analysis_header(result.analysis_type_name, result.provider)}\n\n{result.content}"
