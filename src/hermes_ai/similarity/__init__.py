from hermes_ai.similarity.base import SimilarityOracle
from hermes_ai.similarity.embeddings import (
    EmbeddingSimilarityOracle,
    SentenceTransformerEmbedder,
    TextEmbedder,
)
from hermes_ai.similarity.http import HttpSimilarityOracle
from hermes_ai.similarity.lexical import (
    LexicalSimilarityOracle,
    jaccard_similarity,
    normalize_text,
    significant_words,
)

__all__ = [
    "EmbeddingSimilarityOracle",
    "HttpSimilarityOracle",
    "LexicalSimilarityOracle",
    "SentenceTransformerEmbedder",
    "SimilarityOracle",
    "TextEmbedder",
    "jaccard_similarity",
    "normalize_text",
    "significant_words",
]
