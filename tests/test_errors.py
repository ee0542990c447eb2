"""Tests for the error taxonomy."""

from hermes_ai.data import ContentType
from hermes_ai.errors import (
    AnalysisUnavailable,
    ClassificationError,
    ContentPolicyRejection,
    HermesError,
    NotFound,
    PartialClusterWrite,
    SimilarityError,
    StoreUnavailable,
    TemplateError,
    UpstreamError,
    ValidationError,
)


def test_upstream_errors_are_retryable() -> None:
    for cls in (ClassificationError, TemplateError, SimilarityError, StoreUnavailable):
        err = cls("boom")
        assert isinstance(err, UpstreamError)
        assert err.retryable is True


def test_user_errors_are_not_retryable() -> None:
    assert ValidationError("bad").retryable is False
    assert NotFound("x").retryable is False
    assert ContentPolicyRejection(ContentType.SPAM, "spam").retryable is False


def test_kinds_are_distinct() -> None:
    errors: list[HermesError] = [
        ValidationError("x"),
        ContentPolicyRejection(None, "x"),
        ClassificationError("x"),
        TemplateError("x"),
        SimilarityError("x"),
        StoreUnavailable("x"),
        AnalysisUnavailable("classification"),
        PartialClusterWrite("id", "c", ("p",)),
        NotFound("x"),
    ]
    kinds = [e.kind for e in errors]
    assert len(set(kinds)) == len(kinds)


def test_analysis_unavailable_message_is_generic() -> None:
    err = AnalysisUnavailable("similarity")
    assert err.stage == "similarity"
    assert err.retryable is True
    assert str(err) == "Unable to analyze due to API errors. Please try again later."


def test_partial_cluster_write_carries_repair_info() -> None:
    err = PartialClusterWrite("new", "cluster_1", failed_ids=("b",), updated_ids=("a",))
    assert err.item_id == "new"
    assert err.cluster_id == "cluster_1"
    assert err.failed_ids == ("b",)
    assert err.updated_ids == ("a",)
    assert "new" in str(err)


def test_content_policy_rejection_fields() -> None:
    err = ContentPolicyRejection(ContentType.THREAT, "No threats")
    assert err.content_type is ContentType.THREAT
    assert err.message == "No threats"
    assert str(err) == "No threats"


def test_not_found_carries_id() -> None:
    err = NotFound("abc")
    assert err.item_id == "abc"
    assert "abc" in str(err)
