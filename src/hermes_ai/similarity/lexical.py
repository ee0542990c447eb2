"""Word-overlap similarity over recently stored items."""

import re

from hermes_ai.data import MisinformationItem, SimilarMatch, Usage
from hermes_ai.store import DESCENDING, StoreHandle

DEFAULT_THRESHOLD = 0.6

# Common English stopwords ignored when comparing claims
STOPWORDS = frozenset(
    "a an the and or but in on at to for of is it by with from as be was were are this that"
    " have has had do does did will would could should may might can shall not no its his her"
    " their our your my been being".split()
)


def normalize_text(text: str) -> str:
    """Lowercase, drop punctuation and collapse whitespace."""
    if not text:
        return ""
    text = text.lower().strip()
    text = re.sub(r"[^\w\s]", "", text)
    text = re.sub(r"\s+", " ", text)
    return text


def _stem(word: str) -> str:
    # Plural/third-person "s" only, so "vaccines" and "vaccine" compare equal
    if len(word) > 3 and word.endswith("s") and not word.endswith("ss"):
        return word[:-1]
    return word


def significant_words(text: str) -> frozenset[str]:
    """Extract non-stopword words longer than two characters, lightly stemmed."""
    norm = normalize_text(text)
    return frozenset(_stem(w) for w in norm.split() if w not in STOPWORDS and len(w) > 2)


def jaccard_similarity(a: str, b: str) -> float:
    """Similarity in [0, 1]; identical normalized texts always score 1.0."""
    norm_a, norm_b = normalize_text(a), normalize_text(b)
    if norm_a and norm_a == norm_b:
        return 1.0
    words_a, words_b = significant_words(a), significant_words(b)
    union_size = len(words_a | words_b)
    if union_size == 0:
        return 0.0
    return len(words_a & words_b) / union_size


class LexicalSimilarityOracle:
    """Match submissions against recent items by significant-word Jaccard similarity.

    Candidates are the ``candidate_limit`` most recent items in the store.
    Matches at or above ``threshold`` are returned most similar first, newer
    items first on equal scores.

    Args:
        store: Handle to the item store.
        threshold: Minimum similarity for a match.
        max_matches: Cap on returned matches.
        candidate_limit: How many recent items to compare against.
    """

    def __init__(
        self,
        store: StoreHandle,
        *,
        threshold: float = DEFAULT_THRESHOLD,
        max_matches: int = 10,
        candidate_limit: int = 500,
    ) -> None:
        self._store = store
        self._threshold = threshold
        self._max_matches = max_matches
        self._candidate_limit = candidate_limit

    async def find_similar(self, text: str) -> tuple[list[SimilarMatch], Usage]:
        store = await self._store.get()
        candidates = await store.find(
            sort=[("timestamp", DESCENDING)],
            limit=self._candidate_limit,
        )

        scored: list[tuple[float, MisinformationItem]] = []
        for item in candidates:
            score = jaccard_similarity(text, item.text)
            if score >= self._threshold:
                scored.append((score, item))

        # Stable: equal scores keep the newest-first candidate order
        scored.sort(key=lambda pair: pair[0], reverse=True)

        matches = [
            SimilarMatch(id=item.id or "", text=item.text, cluster_id=item.cluster_id, score=score)
            for score, item in scored[: self._max_matches]
        ]
        return (matches, Usage(similarity_requests=1))
