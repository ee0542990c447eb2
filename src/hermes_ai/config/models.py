"""Pydantic configuration models for Hermes components."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from hermes_ai.llm import DEFAULT_MODEL

# ============================================================
# Content Validator Configs
# ============================================================


class ClaudeValidatorConfig(BaseModel):
    """Configuration for ClaudeContentValidator."""

    type: Literal["claude"] = "claude"
    model: str = DEFAULT_MODEL

    model_config = {"frozen": True}


class AllowAllValidatorConfig(BaseModel):
    """Accept every submission."""

    type: Literal["allow_all"] = "allow_all"

    model_config = {"frozen": True}


ValidatorConfig = Annotated[
    ClaudeValidatorConfig | AllowAllValidatorConfig,
    Field(discriminator="type"),
]


# ============================================================
# Classifier Configs
# ============================================================


class ClaudeClassifierConfig(BaseModel):
    """Configuration for ClaudeClassifier.

    With ``fallback_to_static`` set, a missing CLAUDE_API_KEY selects the
    StaticClassifier instead of failing every submission.
    """

    type: Literal["claude"] = "claude"
    model: str = DEFAULT_MODEL
    max_tokens: int = 1024
    fallback_to_static: bool = True

    model_config = {"frozen": True}


class StaticClassifierConfig(BaseModel):
    """Configuration for StaticClassifier."""

    type: Literal["static"] = "static"
    confidence: float = Field(default=0.5, ge=0.0, le=1.0)

    model_config = {"frozen": True}


ClassifierConfig = Annotated[
    ClaudeClassifierConfig | StaticClassifierConfig,
    Field(discriminator="type"),
]


# ============================================================
# Similarity Oracle Configs
# ============================================================


class LexicalSimilarityConfig(BaseModel):
    """Configuration for LexicalSimilarityOracle."""

    type: Literal["lexical"] = "lexical"
    threshold: float = Field(default=0.6, ge=0.0, le=1.0)
    max_matches: int = Field(default=10, ge=1)
    candidate_limit: int = Field(default=500, ge=1)

    model_config = {"frozen": True}


class EmbeddingSimilarityConfig(BaseModel):
    """Configuration for EmbeddingSimilarityOracle."""

    type: Literal["embedding"] = "embedding"
    sentence_transformer_model: str = "all-MiniLM-L6-v2"
    threshold: float = Field(default=0.85, ge=-1.0, le=1.0)
    max_matches: int = Field(default=10, ge=1)
    candidate_limit: int = Field(default=500, ge=1)

    model_config = {"frozen": True}


class HttpSimilarityConfig(BaseModel):
    """Configuration for HttpSimilarityOracle."""

    type: Literal["http"] = "http"
    url: str
    limit: int = Field(default=10, ge=1)

    model_config = {"frozen": True}


SimilarityConfig = Annotated[
    LexicalSimilarityConfig | EmbeddingSimilarityConfig | HttpSimilarityConfig,
    Field(discriminator="type"),
]


# ============================================================
# Template Generator Configs
# ============================================================


class ClaudeTemplateConfig(BaseModel):
    """Configuration for ClaudeTemplateGenerator."""

    type: Literal["claude"] = "claude"
    model: str = DEFAULT_MODEL
    max_texts: int = Field(default=20, ge=1)

    model_config = {"frozen": True}


class ShortestTemplateConfig(BaseModel):
    """Use the shortest member text as the template."""

    type: Literal["shortest"] = "shortest"

    model_config = {"frozen": True}


TemplateConfig = Annotated[
    ClaudeTemplateConfig | ShortestTemplateConfig,
    Field(discriminator="type"),
]


# ============================================================
# Store Configs
# ============================================================


class MemoryStoreConfig(BaseModel):
    """In-process store; contents are lost on exit."""

    type: Literal["memory"] = "memory"

    model_config = {"frozen": True}


class SqlStoreConfig(BaseModel):
    """SQLAlchemy store. ``url`` falls back to HERMES_DATABASE_URL, then a local SQLite file."""

    type: Literal["sql"] = "sql"
    url: str | None = None
    echo: bool = False

    model_config = {"frozen": True}


StoreConfig = Annotated[
    MemoryStoreConfig | SqlStoreConfig,
    Field(discriminator="type"),
]


# ============================================================
# Timeouts, Views, Logging
# ============================================================


class TimeoutConfig(BaseModel):
    """Per-stage timeouts in seconds."""

    validation: float = Field(default=15.0, gt=0)
    classification: float = Field(default=30.0, gt=0)
    similarity: float = Field(default=10.0, gt=0)
    template: float = Field(default=30.0, gt=0)
    store: float = Field(default=10.0, gt=0)

    model_config = {"frozen": True}


class TrendingPresetConfig(BaseModel):
    """Defaults for one trending call site."""

    default_period: Literal["24h", "7d", "30d", "all"] = "24h"
    limit: int = Field(default=20, ge=1)

    model_config = {"frozen": True}


def _default_presets() -> dict[str, TrendingPresetConfig]:
    return {
        "app": TrendingPresetConfig(default_period="24h", limit=20),
        "standalone": TrendingPresetConfig(default_period="7d", limit=50),
    }


class ViewsConfig(BaseModel):
    """Read-view settings."""

    dashboard_limit: int = Field(default=50, ge=1)
    trending_presets: dict[str, TrendingPresetConfig] = Field(default_factory=_default_presets)

    model_config = {"frozen": True}


class LoggingConfig(BaseModel):
    """Configuration for per-submission run logging."""

    enabled: bool = False
    log_dir: str = "logs"

    model_config = {"frozen": True}


# ============================================================
# Root Config
# ============================================================


class HermesConfig(BaseModel):
    """Root configuration for Hermes."""

    validator: ClaudeValidatorConfig | AllowAllValidatorConfig = Field(
        default_factory=AllowAllValidatorConfig, discriminator="type"
    )
    classifier: ClaudeClassifierConfig | StaticClassifierConfig = Field(
        default_factory=StaticClassifierConfig, discriminator="type"
    )
    similarity: LexicalSimilarityConfig | EmbeddingSimilarityConfig | HttpSimilarityConfig = (
        Field(default_factory=LexicalSimilarityConfig, discriminator="type")
    )
    template: ClaudeTemplateConfig | ShortestTemplateConfig = Field(
        default_factory=ShortestTemplateConfig, discriminator="type"
    )
    store: MemoryStoreConfig | SqlStoreConfig = Field(
        default_factory=MemoryStoreConfig, discriminator="type"
    )
    timeouts: TimeoutConfig = Field(default_factory=TimeoutConfig)
    views: ViewsConfig = Field(default_factory=ViewsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}
