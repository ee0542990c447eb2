"""Factory functions to create components from configuration."""

import logging
import os
from pathlib import Path

from hermes_ai.classifier import Classifier, ClaudeClassifier, StaticClassifier
from hermes_ai.clustering import ClusterManager
from hermes_ai.config.models import (
    AllowAllValidatorConfig,
    ClassifierConfig,
    ClaudeClassifierConfig,
    ClaudeTemplateConfig,
    ClaudeValidatorConfig,
    EmbeddingSimilarityConfig,
    HermesConfig,
    HttpSimilarityConfig,
    LexicalSimilarityConfig,
    MemoryStoreConfig,
    ShortestTemplateConfig,
    SimilarityConfig,
    SqlStoreConfig,
    StaticClassifierConfig,
    StoreConfig,
    TemplateConfig,
    TimeoutConfig,
    ValidatorConfig,
)
from hermes_ai.pipeline import StageTimeouts, SubmissionPipeline
from hermes_ai.policy import AllowAllValidator, ClaudeContentValidator, ContentValidator
from hermes_ai.run_logger import RunLogger
from hermes_ai.service import HermesService
from hermes_ai.similarity import (
    EmbeddingSimilarityOracle,
    HttpSimilarityOracle,
    LexicalSimilarityOracle,
    SimilarityOracle,
)
from hermes_ai.store import DEFAULT_DATABASE_URL, InMemoryStore, SqlStore, StoreHandle
from hermes_ai.template import (
    ClaudeTemplateGenerator,
    ShortestTextTemplateGenerator,
    TemplateGenerator,
)
from hermes_ai.views import TrendingPreset

logger = logging.getLogger(__name__)


def _has_api_key() -> bool:
    return bool(os.environ.get("CLAUDE_API_KEY"))


def create_validator(config: ValidatorConfig) -> ContentValidator:
    """Create a content validator from config."""
    if isinstance(config, ClaudeValidatorConfig):
        return ClaudeContentValidator(model=config.model)
    if isinstance(config, AllowAllValidatorConfig):
        return AllowAllValidator()
    msg = f"Unknown validator config type: {type(config)}"
    raise ValueError(msg)


def create_classifier(config: ClassifierConfig) -> Classifier:
    """Create a classifier from config.

    A Claude classifier without CLAUDE_API_KEY falls back to the static
    classifier when ``fallback_to_static`` is set.
    """
    if isinstance(config, ClaudeClassifierConfig):
        if config.fallback_to_static and not _has_api_key():
            logger.warning("CLAUDE_API_KEY not set, using static classifier")
            return StaticClassifier()
        return ClaudeClassifier(model=config.model, max_tokens=config.max_tokens)
    if isinstance(config, StaticClassifierConfig):
        return StaticClassifier(confidence=config.confidence)
    msg = f"Unknown classifier config type: {type(config)}"
    raise ValueError(msg)


def create_template_generator(config: TemplateConfig) -> TemplateGenerator:
    """Create a template generator from config."""
    if isinstance(config, ClaudeTemplateConfig):
        return ClaudeTemplateGenerator(model=config.model, max_texts=config.max_texts)
    if isinstance(config, ShortestTemplateConfig):
        return ShortestTextTemplateGenerator()
    msg = f"Unknown template config type: {type(config)}"
    raise ValueError(msg)


def create_store_handle(config: StoreConfig) -> StoreHandle:
    """Create an unopened store handle from config."""
    if isinstance(config, MemoryStoreConfig):
        store = InMemoryStore()

        async def open_memory() -> InMemoryStore:
            return store

        return StoreHandle(open_memory)
    if isinstance(config, SqlStoreConfig):
        url = config.url or os.environ.get("HERMES_DATABASE_URL") or DEFAULT_DATABASE_URL
        echo = config.echo

        async def open_sql() -> SqlStore:
            return await SqlStore.connect(url, echo=echo)

        return StoreHandle(open_sql)
    msg = f"Unknown store config type: {type(config)}"
    raise ValueError(msg)


def create_oracle(
    config: SimilarityConfig,
    store: StoreHandle,
    timeouts: TimeoutConfig | None = None,
) -> SimilarityOracle:
    """Create a similarity oracle from config."""
    if isinstance(config, LexicalSimilarityConfig):
        return LexicalSimilarityOracle(
            store,
            threshold=config.threshold,
            max_matches=config.max_matches,
            candidate_limit=config.candidate_limit,
        )
    if isinstance(config, EmbeddingSimilarityConfig):
        return EmbeddingSimilarityOracle(
            store,
            sentence_transformer_model=config.sentence_transformer_model,
            threshold=config.threshold,
            max_matches=config.max_matches,
            candidate_limit=config.candidate_limit,
        )
    if isinstance(config, HttpSimilarityConfig):
        return HttpSimilarityOracle(
            config.url,
            limit=config.limit,
            timeout=(timeouts or TimeoutConfig()).similarity,
        )
    msg = f"Unknown similarity config type: {type(config)}"
    raise ValueError(msg)


def create_pipeline(
    config: HermesConfig,
    store: StoreHandle,
    run_logger: RunLogger | None = None,
) -> SubmissionPipeline:
    """Create the submission pipeline sharing ``store``."""
    t = config.timeouts
    return SubmissionPipeline(
        validator=create_validator(config.validator),
        classifier=create_classifier(config.classifier),
        oracle=create_oracle(config.similarity, store, t),
        cluster_manager=ClusterManager(create_template_generator(config.template)),
        store=store,
        timeouts=StageTimeouts(
            validation=t.validation,
            classification=t.classification,
            similarity=t.similarity,
            template=t.template,
            store=t.store,
        ),
        run_logger=run_logger,
    )


def create_from_config(
    config: HermesConfig,
    *,
    log_override: bool | None = None,
    log_dir_override: str | None = None,
) -> tuple[HermesService, RunLogger | None]:
    """Create a complete service from root config.

    Args:
        config: Root configuration.
        log_override: Override the config's logging.enabled setting.
        log_dir_override: Override the config's logging.log_dir setting.

    Returns:
        Tuple of (service, run_logger).
        run_logger is None if logging is disabled.
    """
    log_enabled = log_override if log_override is not None else config.logging.enabled
    log_dir = Path(log_dir_override if log_dir_override is not None else config.logging.log_dir)

    run_logger: RunLogger | None = None
    if log_enabled:
        run_logger = RunLogger(log_dir=log_dir, enabled=True)

    store = create_store_handle(config.store)
    presets = {
        name: TrendingPreset(default_period=preset.default_period, limit=preset.limit)
        for name, preset in config.views.trending_presets.items()
    }
    service = HermesService(
        create_pipeline(config, store, run_logger),
        store,
        dashboard_limit=config.views.dashboard_limit,
        presets=presets,
        store_timeout=config.timeouts.store,
    )
    return (service, run_logger)
