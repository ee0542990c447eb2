"""Configuration module for Hermes."""

from hermes_ai.config.factory import create_from_config, create_store_handle
from hermes_ai.config.loader import get_default_config_path, load_config
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
    LoggingConfig,
    MemoryStoreConfig,
    ShortestTemplateConfig,
    SimilarityConfig,
    SqlStoreConfig,
    StaticClassifierConfig,
    StoreConfig,
    TemplateConfig,
    TimeoutConfig,
    TrendingPresetConfig,
    ValidatorConfig,
    ViewsConfig,
)

__all__ = [
    "AllowAllValidatorConfig",
    "ClassifierConfig",
    "ClaudeClassifierConfig",
    "ClaudeTemplateConfig",
    "ClaudeValidatorConfig",
    "EmbeddingSimilarityConfig",
    "HermesConfig",
    "HttpSimilarityConfig",
    "LexicalSimilarityConfig",
    "LoggingConfig",
    "MemoryStoreConfig",
    "ShortestTemplateConfig",
    "SimilarityConfig",
    "SqlStoreConfig",
    "StaticClassifierConfig",
    "StoreConfig",
    "TemplateConfig",
    "TimeoutConfig",
    "TrendingPresetConfig",
    "ValidatorConfig",
    "ViewsConfig",
    "create_from_config",
    "create_store_handle",
    "get_default_config_path",
    "load_config",
]
