"""POST /api/analyze: one image analysis through an LLM provider."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from app.analysis.messages import format_analysis_message
from app.analysis.service import run_analysis
from app.llm.client import LLMProviderError
from app.models.requests import AnalyzeRequest
from app.models.responses import AnalyzeResponse
from app.parsing.cache import cached_sections

router = APIRouter()


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(req: AnalyzeRequest) -> AnalyzeResponse:
    if not req.analysis_type.active:
        raise HTTPException(status_code=400, detail=f"Analysis type {req.analysis_type.id!r} is inactive")

    try:
        result, completion, elapsed = await run_analysis(req.analysis_type, req.provider, req.image)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except LLMProviderError as e:
        raise HTTPException(status_code=502, detail=f"Analysis error: {e}") from e

    return AnalyzeResponse(
        result=result,
        message=format_analysis_message(result),
        sections=cached_sections(result.content),
        duration_ms=round(elapsed, 1),
        llm_configured=completion.configured,
    )
