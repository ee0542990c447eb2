"""Tests for data models."""

from datetime import UTC, datetime

import pytest

from hermes_ai.data import (
    DEFAULT_CATEGORY,
    AnalysisResult,
    APICallUsage,
    ClusterIdentity,
    ContentType,
    MisinformationItem,
    SimilarMatch,
    Usage,
    Verdict,
)


def _analysis(verdict: Verdict = Verdict.MISINFORMATION) -> AnalysisResult:
    return AnalysisResult(
        verdict=verdict,
        confidence=0.9,
        category="health",
        explanation="No evidence supports this.",
    )


def _cluster() -> ClusterIdentity:
    return ClusterIdentity(
        cluster_id="cluster_1_abc",
        is_cluster_head=True,
        message_template="Vaccines cause X",
        variations=0,
    )


class TestVerdict:
    def test_values(self) -> None:
        assert Verdict("misinformation") is Verdict.MISINFORMATION
        assert Verdict("reliable") is Verdict.RELIABLE

    def test_unknown_value_raises(self) -> None:
        with pytest.raises(ValueError):
            Verdict("maybe")

    def test_content_type_codes(self) -> None:
        assert {c.value for c in ContentType} == {
            "personal_attack",
            "hate_speech",
            "threat",
            "spam",
            "promotional",
            "cyberbullying",
            "private",
        }


class TestAnalysisResult:
    def test_is_misinformation_derived_from_verdict(self) -> None:
        assert _analysis(Verdict.MISINFORMATION).is_misinformation is True
        assert _analysis(Verdict.RELIABLE).is_misinformation is False

    def test_defaults(self) -> None:
        result = AnalysisResult(verdict=Verdict.RELIABLE, confidence=0.5)
        assert result.category == DEFAULT_CATEGORY
        assert result.explanation == ""


class TestMisinformationItem:
    def test_from_analysis_copies_fields(self) -> None:
        ts = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
        item = MisinformationItem.from_analysis(
            "Vaccines cause X", _analysis(), _cluster(), timestamp=ts
        )

        assert item.id is None
        assert item.text == "Vaccines cause X"
        assert item.verdict == Verdict.MISINFORMATION
        assert item.confidence == 0.9
        assert item.category == "health"
        assert item.cluster_id == "cluster_1_abc"
        assert item.is_cluster_head is True
        assert item.message_template == "Vaccines cause X"
        assert item.variations == 0
        assert item.upvotes == 0
        assert item.timestamp == ts

    def test_default_timestamp_is_utc(self) -> None:
        item = MisinformationItem.from_analysis("claim", _analysis(), _cluster())
        assert item.timestamp.tzinfo is not None

    def test_analysis_and_cluster_views(self) -> None:
        item = MisinformationItem.from_analysis("claim", _analysis(), _cluster())
        assert item.analysis == _analysis()
        assert item.cluster == _cluster()

    def test_with_id_returns_copy(self) -> None:
        item = MisinformationItem.from_analysis("claim", _analysis(), _cluster())
        saved = item.with_id("abc")
        assert saved.id == "abc"
        assert item.id is None
        assert saved.text == item.text

    def test_is_frozen(self) -> None:
        item = MisinformationItem.from_analysis("claim", _analysis(), _cluster())
        with pytest.raises(AttributeError):
            item.upvotes = 5  # type: ignore[misc]

    def test_to_dict(self) -> None:
        ts = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
        item = MisinformationItem.from_analysis(
            "claim", _analysis(), _cluster(), timestamp=ts
        ).with_id("abc")
        data = item.to_dict()

        assert data["id"] == "abc"
        assert data["verdict"] == "misinformation"
        assert data["is_misinformation"] is True
        assert data["timestamp"] == "2026-03-01T12:00:00+00:00"
        assert data["cluster_id"] == "cluster_1_abc"
        assert data["is_cluster_head"] is True
        assert data["variations"] == 0
        assert data["upvotes"] == 0


class TestSimilarMatch:
    def test_cluster_id_optional(self) -> None:
        match = SimilarMatch(id="1", text="claim")
        assert match.cluster_id is None
        assert match.score == 0.0


class TestUsage:
    def test_token_totals(self) -> None:
        usage = Usage(
            api_calls=[
                APICallUsage(model="m", input_tokens=100, output_tokens=50),
                APICallUsage(model="m", input_tokens=20, output_tokens=5),
            ]
        )
        assert usage.input_tokens == 120
        assert usage.output_tokens == 55

    def test_add(self) -> None:
        a = Usage(api_calls=[APICallUsage(model="m", input_tokens=1)], similarity_requests=1)
        b = Usage(api_calls=[APICallUsage(model="m", input_tokens=2)], similarity_requests=2)
        total = a + b
        assert len(total.api_calls) == 2
        assert total.similarity_requests == 3
        # Operands unchanged
        assert len(a.api_calls) == 1

    def test_iadd(self) -> None:
        total = Usage()
        total += Usage(similarity_requests=1)
        total += Usage(api_calls=[APICallUsage(model="m", output_tokens=7)])
        assert total.similarity_requests == 1
        assert total.output_tokens == 7
