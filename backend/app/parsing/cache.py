"""Content-hash memoization for the pure parsers.

Structured text and descriptions are re-parsed on every render of an
analysis; the parsers are pure functions of their input, so results are
cached under the SHA-256 of the content and reused until evicted.
"""

from __future__ import annotations

import copy
import hashlib
import logging
from collections import OrderedDict
from typing import Callable, Generic, TypeVar

from app.config import settings
from app.models.annotation import LabeledField
from app.models.sections import StructuredNode
from app.parsing.inline_fields import parse_inline_fields
from app.parsing.structured_text import parse_structured_text

logger = logging.getLogger(__name__)

T = TypeVar("T")


def content_hash(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


class ParseCache(Generic[T]):
    """LRU cache of ``parser(text)`` keyed by the hash of ``text``.

    Callers get a deep copy of the stored result, so editing a returned
    section never leaks into later hits.
    """

    def __init__(self, parser: Callable[[str], T], max_entries: int = 256) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._parser = parser
        self._entries: OrderedDict[str, T] = OrderedDict()
        self.max_entries = max_entries
        self.hits = 0
        self.misses = 0

    def get(self, text: str) -> T:
        key = content_hash(text)
        if key in self._entries:
            self._entries.move_to_end(key)
            self.hits += 1
            return copy.deepcopy(self._entries[key])

        self.misses += 1
        result = self._parser(text)
        self._entries[key] = result
        if len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Parse cache evicted %s", evicted[:12])
        return copy.deepcopy(result)

    def invalidate(self, text: str) -> None:
        self._entries.pop(content_hash(text), None)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


# Module-level singletons
_sections_cache: ParseCache[list[StructuredNode]] = ParseCache(parse_structured_text, settings.parse_cache_size)
_fields_cache: ParseCache[list[LabeledField]] = ParseCache(parse_inline_fields, settings.parse_cache_size)


def cached_sections(text: str) -> list[StructuredNode]:
    return _sections_cache.get(text)


def cached_fields(description: str) -> list[LabeledField]:
    return _fields_cache.get(description)


def get_caches() -> tuple[ParseCache[list[StructuredNode]], ParseCache[list[LabeledField]]]:
    return _sections_cache, _fields_cache
