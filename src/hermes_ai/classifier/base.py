"""Protocol for misinformation classification."""

from typing import Protocol

from hermes_ai.data import AnalysisResult, Usage


class Classifier(Protocol):
    """Interface for judging whether a text is misinformation."""

    async def analyze(self, text: str) -> tuple[AnalysisResult, Usage]:
        """Classify a submission.

        Args:
            text: Submission text, already length-checked.

        Returns:
            Tuple of (analysis result, usage).

        Raises:
            ClassificationError: If the provider fails or answers unusably.
        """
        ...
