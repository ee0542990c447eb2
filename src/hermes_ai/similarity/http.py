"""Similarity lookup delegated to an external HTTP service."""

import logging
import os
from typing import Any

import httpx

from hermes_ai.data import SimilarMatch, Usage
from hermes_ai.errors import SimilarityError

logger = logging.getLogger(__name__)


def _parse_match(raw: dict[str, Any]) -> SimilarMatch | None:
    """Parse one match, accepting ``cluster_id`` or ``clusterId``."""
    item_id = raw.get("id") or raw.get("_id")
    text = raw.get("text")
    if not item_id or not isinstance(text, str):
        return None
    cluster_id = raw.get("cluster_id", raw.get("clusterId"))
    score = raw.get("score", 0.0)
    return SimilarMatch(
        id=str(item_id),
        text=text,
        cluster_id=str(cluster_id) if cluster_id else None,
        score=float(score) if isinstance(score, (int, float)) else 0.0,
    )


class HttpSimilarityOracle:
    """Ask a similarity service for near-duplicates.

    Sends ``POST {url}`` with ``{"text": ..., "limit": ...}`` and expects
    ``{"matches": [{"id", "text", "cluster_id"?, "score"?}, ...]}`` ordered
    most similar first. The service's order is kept as is.

    Args:
        url: Endpoint URL.
        api_key: Bearer token (defaults to HERMES_SIMILARITY_API_KEY env var).
        limit: Max matches requested.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        url: str,
        *,
        api_key: str | None = None,
        limit: int = 10,
        timeout: float = 10.0,
    ) -> None:
        self._url = url
        self._api_key = api_key or os.environ.get("HERMES_SIMILARITY_API_KEY")
        self._limit = limit
        self._timeout = timeout

    async def find_similar(self, text: str) -> tuple[list[SimilarMatch], Usage]:
        headers = {"Authorization": f"Bearer {self._api_key}"} if self._api_key else {}
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            try:
                response = await client.post(
                    self._url,
                    json={"text": text, "limit": self._limit},
                    headers=headers,
                )
                response.raise_for_status()
                data = response.json()
            except (httpx.HTTPError, ValueError) as e:
                raise SimilarityError("Similarity service request failed") from e

        raw_matches = (data.get("matches") if isinstance(data, dict) else None) or []
        if not isinstance(raw_matches, list):
            raise SimilarityError("Similarity service returned malformed matches")
        matches: list[SimilarMatch] = []
        for raw in raw_matches:
            match = _parse_match(raw) if isinstance(raw, dict) else None
            if match is None:
                logger.warning("Skipping malformed similarity match: %r", raw)
                continue
            matches.append(match)
        return (matches[: self._limit], Usage(similarity_requests=1))
