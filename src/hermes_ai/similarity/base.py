"""Protocol for near-duplicate lookup."""

from typing import Protocol

from hermes_ai.data import SimilarMatch, Usage


class SimilarityOracle(Protocol):
    """Interface for finding prior records that retell the same claim."""

    async def find_similar(self, text: str) -> tuple[list[SimilarMatch], Usage]:
        """Find prior records similar to ``text``.

        Args:
            text: The new submission.

        Returns:
            Tuple of (matches ordered most similar first, usage). An empty
            list means no match and is not an error.

        Raises:
            SimilarityError: If the oracle backend fails.
            StoreUnavailable: If candidate records cannot be read.
        """
        ...
