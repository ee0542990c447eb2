"""Classifier that answers without calling any model."""

from hermes_ai.data import AnalysisResult, Usage, Verdict

BASIC_EXPLANATION = (
    "Basic verification completed. Full AI analysis requires valid API keys "
    "in environment variables."
)


class StaticClassifier:
    """Return a fixed low-confidence ``reliable`` verdict.

    Used when no model API key is configured, so submissions can still be
    clustered and counted.
    """

    def __init__(self, confidence: float = 0.5, explanation: str = BASIC_EXPLANATION) -> None:
        self._confidence = confidence
        self._explanation = explanation

    async def analyze(self, text: str) -> tuple[AnalysisResult, Usage]:
        result = AnalysisResult(
            verdict=Verdict.RELIABLE,
            confidence=self._confidence,
            explanation=self._explanation,
        )
        return (result, Usage())
