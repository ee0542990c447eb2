"""Core data models for Hermes."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

MIN_TEXT_LENGTH = 1
MAX_TEXT_LENGTH = 5000
DEFAULT_CATEGORY = "general"


class Verdict(StrEnum):
    """Classifier verdict for a submission."""

    RELIABLE = "reliable"
    MISINFORMATION = "misinformation"


class ContentType(StrEnum):
    """Reason codes for content that is not suitable for fact-checking."""

    PERSONAL_ATTACK = "personal_attack"
    HATE_SPEECH = "hate_speech"
    THREAT = "threat"
    SPAM = "spam"
    PROMOTIONAL = "promotional"
    CYBERBULLYING = "cyberbullying"
    PRIVATE = "private"


@dataclass(frozen=True)
class Submission:
    """Raw text received for verification. Never persisted on its own."""

    text: str
    received_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of the content-policy check."""

    is_valid: bool
    content_type: ContentType | None = None
    reason: str = ""


@dataclass(frozen=True)
class AnalysisResult:
    """Classifier output for one submission."""

    verdict: Verdict
    confidence: float
    category: str = DEFAULT_CATEGORY
    explanation: str = ""

    @property
    def is_misinformation(self) -> bool:
        return self.verdict == Verdict.MISINFORMATION


@dataclass(frozen=True)
class ClusterIdentity:
    """Cluster metadata carried by every persisted item."""

    cluster_id: str
    is_cluster_head: bool
    message_template: str
    variations: int = 0


@dataclass(frozen=True)
class MisinformationItem:
    """The persisted unit: a submission, its analysis and its cluster metadata.

    ``id`` is ``None`` until the store assigns one on create. Text, analysis
    fields and ``timestamp`` never change after creation; cluster fields are
    rewritten by later clustering decisions and ``upvotes`` only grows.
    """

    text: str
    verdict: Verdict
    confidence: float
    cluster_id: str
    is_cluster_head: bool
    message_template: str
    category: str = DEFAULT_CATEGORY
    explanation: str = ""
    variations: int = 0
    upvotes: int = 0
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
    id: str | None = None

    @classmethod
    def from_analysis(
        cls,
        text: str,
        analysis: AnalysisResult,
        cluster: ClusterIdentity,
        *,
        timestamp: datetime | None = None,
    ) -> "MisinformationItem":
        """Build an unsaved item from a classifier result and a cluster decision."""
        return cls(
            text=text,
            verdict=analysis.verdict,
            confidence=analysis.confidence,
            category=analysis.category,
            explanation=analysis.explanation,
            cluster_id=cluster.cluster_id,
            is_cluster_head=cluster.is_cluster_head,
            message_template=cluster.message_template,
            variations=cluster.variations,
            timestamp=timestamp or datetime.now(tz=UTC),
        )

    @property
    def is_misinformation(self) -> bool:
        return self.verdict == Verdict.MISINFORMATION

    @property
    def analysis(self) -> AnalysisResult:
        return AnalysisResult(
            verdict=self.verdict,
            confidence=self.confidence,
            category=self.category,
            explanation=self.explanation,
        )

    @property
    def cluster(self) -> ClusterIdentity:
        return ClusterIdentity(
            cluster_id=self.cluster_id,
            is_cluster_head=self.is_cluster_head,
            message_template=self.message_template,
            variations=self.variations,
        )

    def with_id(self, item_id: str) -> "MisinformationItem":
        return replace(self, id=item_id)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted record shape (plus the derived flag)."""
        return {
            "id": self.id,
            "text": self.text,
            "verdict": self.verdict.value,
            "is_misinformation": self.is_misinformation,
            "confidence": self.confidence,
            "category": self.category,
            "explanation": self.explanation,
            "timestamp": self.timestamp.isoformat(),
            "upvotes": self.upvotes,
            "cluster_id": self.cluster_id,
            "is_cluster_head": self.is_cluster_head,
            "message_template": self.message_template,
            "variations": self.variations,
        }


@dataclass(frozen=True)
class SimilarMatch:
    """A prior record the similarity oracle judged to be a near-duplicate.

    ``cluster_id`` reflects the record as it was at query time and may be
    stale by the time the clustering decision is written.
    """

    id: str
    text: str
    cluster_id: str | None = None
    score: float = 0.0


@dataclass(frozen=True)
class APICallUsage:
    """Usage from a single model API call."""

    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    cache_creation_input_tokens: int = 0
    cache_read_input_tokens: int = 0


@dataclass
class Usage:
    """Accumulated external usage across one submission."""

    api_calls: list[APICallUsage] = field(default_factory=list)
    similarity_requests: int = 0

    @property
    def input_tokens(self) -> int:
        return sum(c.input_tokens for c in self.api_calls)

    @property
    def output_tokens(self) -> int:
        return sum(c.output_tokens for c in self.api_calls)

    def __add__(self, other: "Usage") -> "Usage":
        return Usage(
            api_calls=self.api_calls + other.api_calls,
            similarity_requests=self.similarity_requests + other.similarity_requests,
        )

    def __iadd__(self, other: "Usage") -> "Usage":
        self.api_calls.extend(other.api_calls)
        self.similarity_requests += other.similarity_requests
        return self
