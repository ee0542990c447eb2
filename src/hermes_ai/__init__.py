"""Hermes: crowd-sourced misinformation reporting with claim clustering."""

from hermes_ai.classifier import Classifier, ClaudeClassifier, StaticClassifier
from hermes_ai.clustering import ClusterDecision, ClusterManager, new_cluster_id
from hermes_ai.config import HermesConfig, create_from_config, load_config
from hermes_ai.data import (
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
from hermes_ai.pipeline import StageTimeouts, SubmissionPipeline, upvote
from hermes_ai.policy import AllowAllValidator, ClaudeContentValidator, ContentValidator
from hermes_ai.run_logger import RunLogger
from hermes_ai.service import HermesService
from hermes_ai.similarity import (
    EmbeddingSimilarityOracle,
    HttpSimilarityOracle,
    LexicalSimilarityOracle,
    SimilarityOracle,
)
from hermes_ai.store import InMemoryStore, ItemStore, SqlStore, StoreHandle
from hermes_ai.template import (
    ClaudeTemplateGenerator,
    ShortestTextTemplateGenerator,
    TemplateGenerator,
)
from hermes_ai.views import DashboardView, TrendingView, dashboard, export_csv, trending

__all__ = [
    # Data
    "APICallUsage",
    "AnalysisResult",
    "ClusterIdentity",
    "ContentType",
    "MisinformationItem",
    "SimilarMatch",
    "Submission",
    "Usage",
    "ValidationResult",
    "Verdict",
    # Errors
    "AnalysisUnavailable",
    "ClassificationError",
    "ContentPolicyRejection",
    "HermesError",
    "NotFound",
    "PartialClusterWrite",
    "SimilarityError",
    "StoreUnavailable",
    "TemplateError",
    "UpstreamError",
    "ValidationError",
    # Components
    "AllowAllValidator",
    "Classifier",
    "ClaudeClassifier",
    "ClaudeContentValidator",
    "ClaudeTemplateGenerator",
    "ClusterDecision",
    "ClusterManager",
    "ContentValidator",
    "EmbeddingSimilarityOracle",
    "HttpSimilarityOracle",
    "InMemoryStore",
    "ItemStore",
    "LexicalSimilarityOracle",
    "ShortestTextTemplateGenerator",
    "SimilarityOracle",
    "SqlStore",
    "StaticClassifier",
    "StoreHandle",
    "TemplateGenerator",
    "new_cluster_id",
    # Pipeline and views
    "DashboardView",
    "HermesService",
    "RunLogger",
    "StageTimeouts",
    "SubmissionPipeline",
    "TrendingView",
    "dashboard",
    "export_csv",
    "trending",
    "upvote",
    # Config
    "HermesConfig",
    "create_from_config",
    "load_config",
]
