"""Embedding-based similarity over recently stored items."""

import asyncio
from typing import Protocol

import numpy as np
from numpy.typing import NDArray
from sentence_transformers import SentenceTransformer

from hermes_ai.data import SimilarMatch, Usage
from hermes_ai.errors import SimilarityError
from hermes_ai.store import DESCENDING, StoreHandle


class TextEmbedder(Protocol):
    """Interface for text embedding models."""

    def embed(self, texts: list[str]) -> NDArray[np.float32]:
        """Embed a batch of texts.

        Args:
            texts: List of strings to embed.

        Returns:
            Array of shape (len(texts), embedding_dim).
        """
        ...


class SentenceTransformerEmbedder:
    """Embedder using sentence-transformers library."""

    def __init__(self, model_name: str = "all-MiniLM-L6-v2") -> None:
        self._model: SentenceTransformer = SentenceTransformer(model_name)

    def embed(self, texts: list[str]) -> NDArray[np.float32]:
        """Embed texts using sentence-transformers."""
        embeddings: NDArray[np.float32] = self._model.encode(texts, convert_to_numpy=True).astype(
            np.float32
        )
        return embeddings


class EmbeddingSimilarityOracle:
    """Match submissions against recent items by embedding cosine similarity.

    The new text and all candidates are embedded in one batch off the event
    loop; candidates at or above ``threshold`` are returned most similar first.

    Args:
        store: Handle to the item store.
        embedder: Embedding model (defaults to a SentenceTransformerEmbedder).
        threshold: Minimum cosine similarity for a match.
        max_matches: Cap on returned matches.
        candidate_limit: How many recent items to compare against.
    """

    def __init__(
        self,
        store: StoreHandle,
        *,
        embedder: TextEmbedder | None = None,
        sentence_transformer_model: str = "all-MiniLM-L6-v2",
        threshold: float = 0.85,
        max_matches: int = 10,
        candidate_limit: int = 500,
    ) -> None:
        self._store = store
        self._embedder = embedder or SentenceTransformerEmbedder(sentence_transformer_model)
        self._threshold = threshold
        self._max_matches = max_matches
        self._candidate_limit = candidate_limit

    async def find_similar(self, text: str) -> tuple[list[SimilarMatch], Usage]:
        store = await self._store.get()
        candidates = await store.find(
            sort=[("timestamp", DESCENDING)],
            limit=self._candidate_limit,
        )
        if not candidates:
            return ([], Usage(similarity_requests=1))

        texts = [text] + [item.text for item in candidates]
        try:
            embeddings = await asyncio.to_thread(self._embedder.embed, texts)
        except Exception as e:
            raise SimilarityError("Embedding failed") from e
        if len(embeddings) != len(texts):
            raise SimilarityError("Embedder returned the wrong number of vectors")

        query, others = embeddings[0], embeddings[1:]
        norms = np.linalg.norm(others, axis=1) * float(np.linalg.norm(query))
        similarities = others @ query / (norms + 1e-10)

        # Stable sort keeps newest-first order among equal scores
        order = np.argsort(-similarities, kind="stable")
        matches: list[SimilarMatch] = []
        for idx_np in order:
            idx = int(idx_np)
            score = float(similarities[idx])
            if score < self._threshold or len(matches) >= self._max_matches:
                break
            item = candidates[idx]
            matches.append(
                SimilarMatch(
                    id=item.id or "",
                    text=item.text,
                    cluster_id=item.cluster_id,
                    score=score,
                )
            )
        return (matches, Usage(similarity_requests=1))
