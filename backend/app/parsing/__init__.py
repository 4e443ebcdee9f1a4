"""Parsers for structured LLM analysis responses."""

from app.parsing.splitter import ANNOTATIONS_DELIMITER, SplitResponse, split_response
from app.parsing.decoder import decode_annotations
from app.parsing.structured_text import StructuredTextParser, parse_structured_text
from app.parsing.inline_fields import is_code_field, parse_inline_fields
from app.parsing.cache import ParseCache, cached_fields, cached_sections

__all__ = [
    "ANNOTATIONS_DELIMITER",
    "SplitResponse",
    "split_response",
    "decode_annotations",
    "StructuredTextParser",
    "parse_structured_text",
    "is_code_field",
    "parse_inline_fields",
    "ParseCache",
    "cached_fields",
    "cached_sections",
]
