"""Tests for classifiers."""

from unittest.mock import AsyncMock, MagicMock

import anthropic
import httpx
import pytest
from anthropic.types import TextBlock

from hermes_ai.classifier import ClaudeClassifier, StaticClassifier
from hermes_ai.classifier.claude import _parse_analysis
from hermes_ai.data import Usage, Verdict
from hermes_ai.errors import ClassificationError


def _make_mock_usage(input_tokens: int = 100, output_tokens: int = 50) -> MagicMock:
    """Create a mock usage object."""
    usage = MagicMock()
    usage.input_tokens = input_tokens
    usage.output_tokens = output_tokens
    usage.cache_creation_input_tokens = 0
    usage.cache_read_input_tokens = 0
    return usage


def _make_response(text: str) -> MagicMock:
    response = MagicMock()
    response.content = [TextBlock(type="text", text=text)]
    response.usage = _make_mock_usage()
    return response


def _classifier(response: MagicMock) -> ClaudeClassifier:
    classifier = ClaudeClassifier(api_key="test-key")
    object.__setattr__(classifier._client.messages, "create", AsyncMock(return_value=response))
    return classifier


@pytest.fixture
def classifier() -> ClaudeClassifier:
    return _classifier(
        _make_response(
            '{"verdict": "misinformation", "confidence": 0.92, "category": "health",'
            ' "explanation": "No study shows this."}'
        )
    )


async def test_analyze_parses_result(classifier: ClaudeClassifier) -> None:
    result, usage = await classifier.analyze("Vaccines cause X")

    assert result.verdict == Verdict.MISINFORMATION
    assert result.is_misinformation is True
    assert result.confidence == 0.92
    assert result.category == "health"
    assert result.explanation == "No study shows this."


async def test_analyze_returns_usage(classifier: ClaudeClassifier) -> None:
    _, usage = await classifier.analyze("Vaccines cause X")

    assert isinstance(usage, Usage)
    assert len(usage.api_calls) == 1
    assert usage.input_tokens == 100
    assert usage.output_tokens == 50
    assert usage.api_calls[0].model == "claude-haiku-4-5-20251001"


async def test_analyze_sends_claim_to_model(classifier: ClaudeClassifier) -> None:
    await classifier.analyze("Vaccines cause X")

    mock_create: AsyncMock = classifier._client.messages.create  # type: ignore[assignment]
    call_kwargs = dict(mock_create.call_args.kwargs)
    assert call_kwargs["max_tokens"] == 1024
    assert "Vaccines cause X" in call_kwargs["messages"][0]["content"]


async def test_analyze_strips_markdown_fences() -> None:
    classifier = _classifier(
        _make_response('```json\n{"verdict": "reliable", "confidence": 0.7}\n```')
    )
    result, _ = await classifier.analyze("Water is wet")

    assert result.verdict == Verdict.RELIABLE
    assert result.category == "general"


async def test_analyze_unknown_verdict_raises() -> None:
    classifier = _classifier(_make_response('{"verdict": "unsure", "confidence": 0.7}'))
    with pytest.raises(ClassificationError):
        await classifier.analyze("claim")


async def test_analyze_invalid_json_raises() -> None:
    classifier = _classifier(_make_response("I think this is false."))
    with pytest.raises(ClassificationError):
        await classifier.analyze("claim")


async def test_analyze_api_error_raises_classification_error() -> None:
    classifier = ClaudeClassifier(api_key="test-key")
    error = anthropic.APIConnectionError(
        request=httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    )
    object.__setattr__(classifier._client.messages, "create", AsyncMock(side_effect=error))

    with pytest.raises(ClassificationError) as exc_info:
        await classifier.analyze("claim")
    assert exc_info.value.retryable is True
    assert exc_info.value.__cause__ is error


class TestParseAnalysis:
    def test_confidence_is_clamped(self) -> None:
        assert _parse_analysis({"verdict": "reliable", "confidence": 1.7}).confidence == 1.0
        assert _parse_analysis({"verdict": "reliable", "confidence": -0.2}).confidence == 0.0

    def test_non_numeric_confidence_is_zero(self) -> None:
        assert _parse_analysis({"verdict": "reliable", "confidence": "high"}).confidence == 0.0
        assert _parse_analysis({"verdict": "reliable", "confidence": True}).confidence == 0.0

    def test_verdict_case_insensitive(self) -> None:
        assert _parse_analysis({"verdict": " Misinformation "}).verdict == Verdict.MISINFORMATION

    def test_blank_category_defaults(self) -> None:
        assert _parse_analysis({"verdict": "reliable", "category": "  "}).category == "general"

    def test_missing_verdict_raises(self) -> None:
        with pytest.raises(ValueError):
            _parse_analysis({"confidence": 0.5})


class TestStaticClassifier:
    async def test_returns_basic_reliable_result(self) -> None:
        result, usage = await StaticClassifier().analyze("anything")

        assert result.verdict == Verdict.RELIABLE
        assert result.confidence == 0.5
        assert result.category == "general"
        assert result.explanation.startswith("Basic verification completed")
        assert usage.api_calls == []

    async def test_confidence_configurable(self) -> None:
        result, _ = await StaticClassifier(confidence=0.3).analyze("anything")
        assert result.confidence == 0.3
