from hermes_ai.data.models import (
    DEFAULT_CATEGORY,
    MAX_TEXT_LENGTH,
    MIN_TEXT_LENGTH,
    AnalysisResult,
    APICallUsage,
    ClusterIdentity,
    ContentType,
    MisinformationItem,
    SimilarMatch,
    Submission,
    Usage,
    ValidationResult,
    Verdict,
)

__all__ = [
    "APICallUsage",
    "AnalysisResult",
    "ClusterIdentity",
    "ContentType",
    "DEFAULT_CATEGORY",
    "MAX_TEXT_LENGTH",
    "MIN_TEXT_LENGTH",
    "MisinformationItem",
    "SimilarMatch",
    "Submission",
    "Usage",
    "ValidationResult",
    "Verdict",
]
