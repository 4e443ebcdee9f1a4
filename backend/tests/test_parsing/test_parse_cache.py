"""Tests for content-hash parse caching."""

from __future__ import annotations

import pytest

from app.parsing.cache import ParseCache, cached_fields, cached_sections, content_hash
from app.parsing.structured_text import parse_structured_text
from tests.conftest import SAMPLE_PROSE


class CountingParser:
    def __init__(self):
        self.calls = 0

    def __call__(self, text):
        self.calls += 1
        return text.upper()


def test_content_hash_is_stable():
    assert content_hash("abc") == content_hash("abc")
    assert content_hash("abc") != content_hash("abd")
    assert len(content_hash("")) == 64


def test_hit_skips_parser():
    parser = CountingParser()
    cache = ParseCache(parser, max_entries=4)
    assert cache.get("a") == "A"
    assert cache.get("a") == "A"
    assert parser.calls == 1
    assert (cache.hits, cache.misses) == (1, 1)


def test_lru_eviction():
    parser = CountingParser()
    cache = ParseCache(parser, max_entries=2)
    cache.get("a")
    cache.get("b")
    cache.get("a")  # "b" is now least recently used
    cache.get("c")
    assert len(cache) == 2
    cache.get("a")
    assert parser.calls == 3
    cache.get("b")
    assert parser.calls == 4


def test_invalidate_and_clear():
    parser = CountingParser()
    cache = ParseCache(parser)
    cache.get("a")
    cache.invalidate("a")
    cache.invalidate("never seen")
    cache.get("a")
    assert parser.calls == 2
    cache.clear()
    assert len(cache) == 0


def test_rejects_empty_capacity():
    with pytest.raises(ValueError):
        ParseCache(str.upper, max_entries=0)


def test_cached_sections_match_parser():
    assert cached_sections(SAMPLE_PROSE) == parse_structured_text(SAMPLE_PROSE)
    first = cached_sections(SAMPLE_PROSE)
    second = cached_sections(SAMPLE_PROSE)
    assert first == second
    assert first is not second


def test_editing_a_result_does_not_change_later_hits():
    expected = parse_structured_text(SAMPLE_PROSE)
    cached_sections(SAMPLE_PROSE)[0].items.clear()
    assert cached_sections(SAMPLE_PROSE) == expected

    fields = cached_fields("Role : nav")
    fields.append(fields[0])
    assert len(cached_fields("Role : nav")) == 1


def test_cached_fields():
    fields = cached_fields("Role : nav | Code : <nav>")
    assert [f.label for f in fields] == ["Role", "Code"]
