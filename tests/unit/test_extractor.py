"""Tests for the structured extractor: prompt building and defensive parsing."""

import json
import logging

import pytest

from blogsummarizer.domain.errors import ExtractionError
from blogsummarizer.services.extractor import (
    PARSE_ATTEMPTS,
    StructuredExtractor,
    build_prompt,
    parse_completion,
    parse_direct,
    parse_embedded_object,
    strip_code_fence,
)
from tests.helpers import FENCED_RESPONSE, FakeCompletionClient

VALID = {
    "title": "T",
    "summary": "S",
    "keyPoints": ["a", "b", "c", "d"],
    "tags": ["x", "y", "z"],
}


class TestBuildPrompt:
    """Tests for build_prompt."""

    def test_includes_content_and_fields(self):
        prompt = build_prompt("Article body here")
        assert "Article body here" in prompt
        for field_name in ('"title"', '"summary"', '"keyPoints"', '"tags"'):
            assert field_name in prompt
        assert prompt.rstrip().endswith("no additional text or formatting.")

    def test_truncates_to_8000_chars(self):
        content = "a" * 8000 + "TAIL"
        prompt = build_prompt(content)
        assert "a" * 8000 in prompt
        assert "TAIL" not in prompt

    def test_custom_limit(self):
        prompt = build_prompt("abcdef", max_chars=3)
        assert "abc" in prompt
        assert "abcd" not in prompt


class TestStripCodeFence:
    """Tests for strip_code_fence."""

    def test_json_fence(self):
        assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_bare_fence(self):
        assert strip_code_fence('```\n{"a": 1}\n```') == '{"a": 1}'

    def test_other_language_tag(self):
        assert strip_code_fence('```javascript\n{"a": 1}\n```') == '{"a": 1}'

    def test_surrounding_whitespace_trimmed(self):
        assert strip_code_fence('  \n```json\n{"a": 1}\n```\n  ') == '{"a": 1}'

    def test_unfenced_text_only_trimmed(self):
        assert strip_code_fence('  {"a": 1}  ') == '{"a": 1}'

    def test_fence_in_middle_left_alone(self):
        text = 'Here you go:\n```json\n{"a": 1}\n```'
        assert strip_code_fence(text) == text


class TestParseAttempts:
    """Tests for the individual parse attempts."""

    def test_order_is_direct_then_embedded(self):
        assert PARSE_ATTEMPTS == (parse_direct, parse_embedded_object)

    def test_direct_success(self):
        result = parse_direct('{"a": 1}')
        assert result.ok
        assert result.value == {"a": 1}

    def test_direct_failure_is_tagged(self):
        result = parse_direct("not json")
        assert not result.ok
        assert result.value is None
        assert result.error.startswith("direct parse failed")

    def test_embedded_finds_object_in_prose(self):
        result = parse_embedded_object('Sure! Here it is: {"a": {"b": 2}} Hope it helps.')
        assert result.ok
        assert result.value == {"a": {"b": 2}}

    def test_embedded_no_braces(self):
        result = parse_embedded_object("no object here")
        assert not result.ok
        assert result.error == "no valid JSON found"

    def test_embedded_greedy_span_invalid(self):
        result = parse_embedded_object('{"a": 1} and then {"b": 2}')
        assert not result.ok
        assert result.error.startswith("invalid AI response format")


class TestParseCompletion:
    """Tests for parse_completion."""

    def test_clean_json(self):
        result = parse_completion(json.dumps(VALID))
        assert result.title == "T"
        assert result.summary == "S"
        assert result.key_points == ["a", "b", "c", "d"]
        assert result.tags == ["x", "y", "z"]

    def test_fenced_equals_clean(self):
        clean = parse_completion(json.dumps(VALID))
        fenced = parse_completion(f"```json\n{json.dumps(VALID)}\n```")
        assert fenced == clean

    def test_spec_example_response(self):
        result = parse_completion(FENCED_RESPONSE)
        assert result.key_points == ["a", "b", "c", "d"]
        assert result.tags == ["x", "y", "z"]

    def test_json_surrounded_by_prose(self, caplog):
        raw = f"Here is the analysis you asked for:\n{json.dumps(VALID)}\nLet me know!"
        with caplog.at_level(logging.WARNING):
            result = parse_completion(raw)
        assert result.title == "T"
        assert "parse_direct" in caplog.text

    def test_no_json_raises(self):
        with pytest.raises(ExtractionError) as exc_info:
            parse_completion("I cannot summarize this content.")
        assert exc_info.value.message == "Failed to generate summary - no valid JSON found"
        assert exc_info.value.status_code == 500

    def test_broken_json_raises(self):
        with pytest.raises(ExtractionError) as exc_info:
            parse_completion('{"title": "T", "summary": }')
        assert "invalid AI response format" in exc_info.value.message

    def test_empty_response_raises(self):
        with pytest.raises(ExtractionError):
            parse_completion("")

    @pytest.mark.parametrize("missing", ["title", "summary", "keyPoints", "tags"])
    def test_missing_field_raises(self, missing):
        data = {k: v for k, v in VALID.items() if k != missing}
        with pytest.raises(ExtractionError) as exc_info:
            parse_completion(json.dumps(data))
        assert exc_info.value.message == "Failed to generate summary - incomplete response"

    def test_empty_title_raises(self):
        with pytest.raises(ExtractionError, match="incomplete response"):
            parse_completion(json.dumps({**VALID, "title": ""}))

    def test_null_tags_raises(self):
        with pytest.raises(ExtractionError, match="incomplete response"):
            parse_completion(json.dumps({**VALID, "tags": None}))

    def test_empty_lists_accepted(self):
        result = parse_completion(json.dumps({**VALID, "keyPoints": [], "tags": []}))
        assert result.key_points == []
        assert result.tags == []

    def test_array_response_raises(self):
        with pytest.raises(ExtractionError, match="incomplete response"):
            parse_completion("[1, 2, 3]")

    def test_extra_fields_ignored(self):
        result = parse_completion(json.dumps({**VALID, "confidence": 0.9}))
        assert result.title == "T"


class TestStructuredExtractor:
    """Tests for StructuredExtractor.extract."""

    @pytest.mark.asyncio
    async def test_extract_sends_prompt_and_parses(self):
        fake = FakeCompletionClient(FENCED_RESPONSE)
        extractor = StructuredExtractor(client=fake)

        result = await extractor.extract("Some article text")

        assert result.title == "T"
        assert len(fake.prompts) == 1
        assert "Some article text" in fake.prompts[0]

    @pytest.mark.asyncio
    async def test_extract_propagates_parse_failure(self):
        extractor = StructuredExtractor(client=FakeCompletionClient("nothing useful"))

        with pytest.raises(ExtractionError):
            await extractor.extract("Some article text")
