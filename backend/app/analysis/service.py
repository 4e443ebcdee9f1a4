"""Analysis orchestration: prompt → provider → split → decode → AnalysisResult."""

from __future__ import annotations

import logging
import time

from app.llm.client import Completion, complete_analysis
from app.llm.prompts import build_analysis_prompt
from app.models.analysis import AnalysisResult, AnalysisType, TokenUsage
from app.models.requests import ImagePayload
from app.parsing.decoder import decode_annotations
from app.parsing.splitter import split_response

logger = logging.getLogger(__name__)


def result_from_raw(
    raw: str,
    analysis_type_id: str,
    analysis_type_name: str = "",
    provider: str = "",
    model: str = "",
    usage: TokenUsage | None = None,
) -> AnalysisResult:
    """Build an AnalysisResult from an already received completion text."""
    split = split_response(raw)
    decoded = decode_annotations(split.annotations_json)
    return AnalysisResult(
        analysis_type_id=analysis_type_id,
        analysis_type_name=analysis_type_name,
        provider=provider,
        model=model,
        content=split.textual,
        annotations=decoded.annotations,
        usage=usage or TokenUsage(),
        warnings=decoded.warnings,
    )


async def run_analysis(
    analysis_type: AnalysisType,
    provider: str,
    image: ImagePayload,
) -> tuple[AnalysisResult, Completion, float]:
    """Run one analysis; returns the result, the raw completion and the duration in ms."""
    start = time.perf_counter()
    prompt = build_analysis_prompt(analysis_type)
    completion = await complete_analysis(provider, prompt, image)

    result = result_from_raw(
        completion.text,
        analysis_type_id=analysis_type.id,
        analysis_type_name=analysis_type.name,
        provider=provider,
        model=completion.model,
        usage=completion.usage,
    )
    elapsed = (time.perf_counter() - start) * 1000
    logger.info(
        "Analysis %s via %s: %d annotations (%d warnings) in %.0fms",
        analysis_type.name or analysis_type.id,
        provider,
        len(result.annotations),
        len(result.warnings),
        elapsed,
    )
    return result, completion, elapsed
