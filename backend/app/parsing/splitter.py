"""Split a raw model response into its prose part and its annotations JSON."""

from __future__ import annotations

import logging
import re

from pydantic import BaseModel

logger = logging.getLogger(__name__)

ANNOTATIONS_DELIMITER = "---ANNOTATIONS---"

# Greedy: first "{" before an "annotations" key through the last "}".
_ANNOTATIONS_JSON_RE = re.compile(r'\{[\s\S]*"annotations"[\s\S]*\}')
_ANNOTATIONS_KEY = '"annotations"'


class SplitResponse(BaseModel):
    textual: str
    annotations_json: str | None = None


def split_response(raw: str) -> SplitResponse:
    """Split ``raw`` on the annotations delimiter.

    Supports:
    1. ``<prose> ---ANNOTATIONS--- <json>`` with exactly one delimiter
    2. No usable delimiter: the whole text is prose, and a JSON object
       mentioning ``"annotations"`` is searched for anywhere in it

    Never raises; a response without annotations is a valid outcome.
    """
    parts = raw.split(ANNOTATIONS_DELIMITER)
    if len(parts) == 2:
        logger.debug("Delimiter found: %d chars of prose", len(parts[0]))
        return SplitResponse(textual=parts[0].strip(), annotations_json=parts[1].strip())

    if len(parts) > 2:
        logger.debug("Delimiter appears %d times, falling back to JSON scan", len(parts) - 1)

    # Skip the quadratic scan when no key can match
    json_match = _ANNOTATIONS_JSON_RE.search(raw) if _ANNOTATIONS_KEY in raw else None
    if json_match:
        logger.debug("Annotations JSON recovered by pattern scan")
        return SplitResponse(textual=raw, annotations_json=json_match.group(0))

    logger.debug("No annotations in response")
    return SplitResponse(textual=raw, annotations_json=None)
