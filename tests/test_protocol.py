"""Tests for protocol compliance."""

import pytest

from hermes_ai.classifier import Classifier, ClaudeClassifier, StaticClassifier
from hermes_ai.data import SimilarMatch, Usage
from hermes_ai.policy import AllowAllValidator, ClaudeContentValidator, ContentValidator
from hermes_ai.similarity import HttpSimilarityOracle, LexicalSimilarityOracle, SimilarityOracle
from hermes_ai.store import InMemoryStore, ItemStore, StoreHandle
from hermes_ai.template import (
    ClaudeTemplateGenerator,
    ShortestTextTemplateGenerator,
    TemplateGenerator,
)


def test_classifiers_match_protocol() -> None:
    """Both classifiers structurally match the Classifier protocol."""
    for classifier in (ClaudeClassifier(api_key="test"), StaticClassifier()):
        assert hasattr(classifier, "analyze")
        assert callable(classifier.analyze)


def test_validators_match_protocol() -> None:
    for validator in (ClaudeContentValidator(api_key="test"), AllowAllValidator()):
        assert callable(validator.validate)


def test_template_generators_match_protocol() -> None:
    for generator in (ClaudeTemplateGenerator(api_key="test"), ShortestTextTemplateGenerator()):
        assert callable(generator.generate)


def test_oracles_match_protocol() -> None:
    store = InMemoryStore()

    async def opener() -> InMemoryStore:
        return store

    handle = StoreHandle(opener)
    for oracle in (LexicalSimilarityOracle(handle), HttpSimilarityOracle("https://sim.example")):
        assert callable(oracle.find_similar)


def test_in_memory_store_matches_item_store_protocol() -> None:
    store = InMemoryStore()
    names = ("create", "get", "batch_update", "increment_field", "find", "aggregate", "close")
    for name in names:
        assert callable(getattr(store, name))


class FixedOracle:
    """A minimal oracle to verify protocol requirements."""

    def __init__(self, matches: list[SimilarMatch]) -> None:
        self._matches = matches

    async def find_similar(self, text: str) -> tuple[list[SimilarMatch], Usage]:
        return (self._matches, Usage(similarity_requests=1))


async def test_custom_oracle_satisfies_protocol() -> None:
    """Any class with the right method signature satisfies the protocol."""
    oracle = FixedOracle([SimilarMatch(id="a", text="claim", cluster_id="cluster_1")])
    matches, usage = await oracle.find_similar("claim")

    assert matches[0].cluster_id == "cluster_1"
    assert usage.similarity_requests == 1


@pytest.mark.parametrize(
    "component", [Classifier, ContentValidator, SimilarityOracle, TemplateGenerator, ItemStore]
)
def test_protocols_are_not_instantiable(component: type) -> None:
    with pytest.raises(TypeError):
        component()
