"""POST /api/parse, /api/fields: structured reading of a model response."""

from __future__ import annotations

from fastapi import APIRouter

from app.analysis.service import result_from_raw
from app.models.requests import FieldsRequest, ParseRequest
from app.models.responses import FieldsResponse, ParseResponse
from app.parsing.cache import cached_fields, cached_sections
from app.parsing.splitter import ANNOTATIONS_DELIMITER

router = APIRouter()


@router.post("/parse", response_model=ParseResponse)
async def parse(req: ParseRequest) -> ParseResponse:
    # Split and decode once; the result is only returned when a type is given
    result = result_from_raw(
        req.raw,
        analysis_type_id=req.analysis_type_id or "",
        analysis_type_name=req.analysis_type_name,
        provider=req.provider,
    )

    return ParseResponse(
        content=result.content,
        sections=cached_sections(result.content),
        annotations=result.annotations,
        warnings=result.warnings,
        has_delimiter=req.raw.count(ANNOTATIONS_DELIMITER) == 1,
        result=result if req.analysis_type_id is not None else None,
    )


@router.post("/fields", response_model=FieldsResponse)
async def fields(req: FieldsRequest) -> FieldsResponse:
    return FieldsResponse(fields=cached_fields(req.description))
