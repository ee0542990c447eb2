"""Tests for similarity oracles."""

from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import httpx
import numpy as np
import pytest

from hermes_ai.data import MisinformationItem, Verdict
from hermes_ai.errors import SimilarityError, StoreUnavailable
from hermes_ai.similarity import (
    EmbeddingSimilarityOracle,
    HttpSimilarityOracle,
    LexicalSimilarityOracle,
    jaccard_similarity,
    normalize_text,
    significant_words,
)
from hermes_ai.store import InMemoryStore, StoreHandle

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def _item(
    text: str, cluster_id: str = "cluster_1_aaaaaaaaa", age_hours: int = 1
) -> MisinformationItem:
    return MisinformationItem(
        text=text,
        verdict=Verdict.MISINFORMATION,
        confidence=0.8,
        cluster_id=cluster_id,
        is_cluster_head=True,
        message_template=text,
        timestamp=NOW - timedelta(hours=age_hours),
    )


def _handle(store: InMemoryStore) -> StoreHandle:
    async def opener() -> InMemoryStore:
        return store

    return StoreHandle(opener)


class TestTextNormalisation:
    def test_normalize_text(self) -> None:
        assert normalize_text("  Vaccines CAUSE,   X!! ") == "vaccines cause x"
        assert normalize_text("") == ""

    def test_significant_words_drop_stopwords_and_short_words(self) -> None:
        assert significant_words("The vaccine is in it") == frozenset({"vaccine"})

    def test_plural_forms_compare_equal(self) -> None:
        assert significant_words("Vaccines cause X") == significant_words("Vaccine causes X")

    def test_double_s_kept(self) -> None:
        assert "glass" in significant_words("glass")

    def test_exact_normalised_match_scores_one(self) -> None:
        assert jaccard_similarity("Is it on?", "is it on") == 1.0

    def test_disjoint_texts_score_zero(self) -> None:
        assert jaccard_similarity("moon landing faked", "vaccines cause autism") == 0.0

    def test_only_stopwords_scores_zero(self) -> None:
        assert jaccard_similarity("the and", "of in") == 0.0

    def test_partial_overlap(self) -> None:
        # {moon, landing, faked} vs {moon, landing, real}
        assert jaccard_similarity("moon landing faked", "moon landing real") == pytest.approx(0.5)


class TestLexicalSimilarityOracle:
    async def test_no_candidates(self) -> None:
        oracle = LexicalSimilarityOracle(_handle(InMemoryStore()))
        matches, usage = await oracle.find_similar("Vaccines cause X")

        assert matches == []
        assert usage.similarity_requests == 1

    async def test_finds_near_duplicate(self) -> None:
        store = InMemoryStore()
        prior = await store.create(_item("Vaccines cause X", cluster_id="cluster_9_abc"))
        await store.create(_item("The moon landing was staged"))

        oracle = LexicalSimilarityOracle(_handle(store))
        matches, _ = await oracle.find_similar("Vaccine causes X")

        assert len(matches) == 1
        assert matches[0].id == prior.id
        assert matches[0].cluster_id == "cluster_9_abc"
        assert matches[0].score == 1.0

    async def test_sorted_by_score_then_newest(self) -> None:
        store = InMemoryStore()
        older_exact = await store.create(_item("moon landing faked nasa", age_hours=5))
        newer_exact = await store.create(_item("moon landing faked nasa", age_hours=1))
        partial = await store.create(_item("moon landing faked studio nasa", age_hours=0))

        oracle = LexicalSimilarityOracle(_handle(store), threshold=0.5)
        matches, _ = await oracle.find_similar("Moon landing faked NASA")

        assert [m.id for m in matches] == [newer_exact.id, older_exact.id, partial.id]

    async def test_threshold_and_max_matches(self) -> None:
        store = InMemoryStore()
        for i in range(5):
            await store.create(_item("moon landing faked", age_hours=i))
        await store.create(_item("moon rocks"))

        oracle = LexicalSimilarityOracle(_handle(store), max_matches=3)
        matches, _ = await oracle.find_similar("moon landing faked")

        assert len(matches) == 3
        assert all(m.text == "moon landing faked" for m in matches)

    async def test_store_unavailable_propagates(self) -> None:
        store = InMemoryStore()
        store.available = False
        oracle = LexicalSimilarityOracle(_handle(store))

        with pytest.raises(StoreUnavailable):
            await oracle.find_similar("claim")


class TestEmbeddingSimilarityOracle:
    @pytest.fixture
    def mock_embedder(self) -> MagicMock:
        """Embedder mapping known texts to fixed unit vectors."""
        vectors = {
            "query": [1.0, 0.0, 0.0],
            "close": [0.95, 0.3122, 0.0],
            "same": [1.0, 0.0, 0.0],
            "far": [0.0, 1.0, 0.0],
        }
        embedder = MagicMock()
        embedder.embed = MagicMock(
            side_effect=lambda texts: np.array([vectors[t] for t in texts], dtype=np.float32)
        )
        return embedder

    async def test_returns_matches_above_threshold(self, mock_embedder: MagicMock) -> None:
        store = InMemoryStore()
        same = await store.create(_item("same", age_hours=3))
        close = await store.create(_item("close", age_hours=2))
        await store.create(_item("far", age_hours=1))

        oracle = EmbeddingSimilarityOracle(_handle(store), embedder=mock_embedder, threshold=0.9)
        matches, usage = await oracle.find_similar("query")

        assert [m.id for m in matches] == [same.id, close.id]
        assert matches[0].score == pytest.approx(1.0, abs=1e-5)
        assert usage.similarity_requests == 1

    async def test_embeds_query_with_candidates_in_one_batch(
        self, mock_embedder: MagicMock
    ) -> None:
        store = InMemoryStore()
        await store.create(_item("far"))

        oracle = EmbeddingSimilarityOracle(_handle(store), embedder=mock_embedder)
        await oracle.find_similar("query")

        mock_embedder.embed.assert_called_once_with(["query", "far"])

    async def test_empty_store_skips_embedding(self, mock_embedder: MagicMock) -> None:
        oracle = EmbeddingSimilarityOracle(_handle(InMemoryStore()), embedder=mock_embedder)
        matches, _ = await oracle.find_similar("query")

        assert matches == []
        mock_embedder.embed.assert_not_called()

    async def test_embedder_failure_raises_similarity_error(self) -> None:
        store = InMemoryStore()
        await store.create(_item("far"))
        embedder = MagicMock()
        embedder.embed = MagicMock(side_effect=RuntimeError("CUDA out of memory"))

        oracle = EmbeddingSimilarityOracle(_handle(store), embedder=embedder)
        with pytest.raises(SimilarityError):
            await oracle.find_similar("query")

    async def test_short_embedding_batch_raises_similarity_error(self) -> None:
        store = InMemoryStore()
        await store.create(_item("far"))
        embedder = MagicMock()
        embedder.embed = MagicMock(return_value=np.zeros((1, 3), dtype=np.float32))

        oracle = EmbeddingSimilarityOracle(_handle(store), embedder=embedder)
        with pytest.raises(SimilarityError):
            await oracle.find_similar("query")


class TestHttpSimilarityOracle:
    def _response(self, data: object) -> MagicMock:
        response = MagicMock()
        response.json.return_value = data
        response.raise_for_status = MagicMock()
        return response

    async def test_parses_matches(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[dict] = []
        response = self._response(
            {
                "matches": [
                    {
                        "id": "a",
                        "text": "Vaccines cause X",
                        "clusterId": "cluster_1_x",
                        "score": 0.9,
                    },
                    {"_id": "b", "text": "Vaccine causes X"},
                ]
            }
        )

        async def mock_post(self: httpx.AsyncClient, url: str, **kwargs: object) -> MagicMock:
            calls.append({"url": url, **kwargs})
            return response

        monkeypatch.setattr(httpx.AsyncClient, "post", mock_post)

        oracle = HttpSimilarityOracle("https://sim.example/api", api_key="k", limit=5)
        matches, usage = await oracle.find_similar("Vaccines cause X")

        assert [m.id for m in matches] == ["a", "b"]
        assert matches[0].cluster_id == "cluster_1_x"
        assert matches[0].score == 0.9
        assert matches[1].cluster_id is None
        assert usage.similarity_requests == 1
        assert calls[0]["url"] == "https://sim.example/api"
        assert calls[0]["json"] == {"text": "Vaccines cause X", "limit": 5}
        assert calls[0]["headers"] == {"Authorization": "Bearer k"}

    async def test_skips_malformed_matches(self, monkeypatch: pytest.MonkeyPatch) -> None:
        response = self._response(
            {"matches": [{"text": "no id"}, "junk", {"id": "a", "text": "ok"}]}
        )

        async def mock_post(*args: object, **kwargs: object) -> MagicMock:
            return response

        monkeypatch.setattr(httpx.AsyncClient, "post", mock_post)

        matches, _ = await HttpSimilarityOracle("https://sim.example/api").find_similar("x")
        assert [m.id for m in matches] == ["a"]

    async def test_http_error_raises_similarity_error(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        async def mock_post(*args: object, **kwargs: object) -> MagicMock:
            raise httpx.ConnectError("refused")

        monkeypatch.setattr(httpx.AsyncClient, "post", mock_post)

        with pytest.raises(SimilarityError):
            await HttpSimilarityOracle("https://sim.example/api").find_similar("x")

    async def test_null_matches_means_no_matches(self, monkeypatch: pytest.MonkeyPatch) -> None:
        response = self._response({"matches": None})

        async def mock_post(*args: object, **kwargs: object) -> MagicMock:
            return response

        monkeypatch.setattr(httpx.AsyncClient, "post", mock_post)

        matches, usage = await HttpSimilarityOracle("https://sim.example/api").find_similar("x")
        assert matches == []
        assert usage.similarity_requests == 1

    async def test_non_list_matches_raises_similarity_error(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        response = self._response({"matches": {"id": "a"}})

        async def mock_post(*args: object, **kwargs: object) -> MagicMock:
            return response

        monkeypatch.setattr(httpx.AsyncClient, "post", mock_post)

        with pytest.raises(SimilarityError):
            await HttpSimilarityOracle("https://sim.example/api").find_similar("x")

    def test_api_key_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HERMES_SIMILARITY_API_KEY", "env-key")
        oracle = HttpSimilarityOracle("https://sim.example/api")
        assert oracle._api_key == "env-key"
