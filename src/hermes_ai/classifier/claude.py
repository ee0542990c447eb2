"""Claude-based misinformation classifier using structured JSON output."""

import logging

import anthropic

from hermes_ai.data import DEFAULT_CATEGORY, AnalysisResult, Usage, Verdict
from hermes_ai.errors import ClassificationError
from hermes_ai.llm import (
    DEFAULT_MODEL,
    create_client,
    parse_json_object,
    response_text,
    usage_from_response,
)

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are a fact-checking assistant. Judge whether the claim submitted by the \
user is misinformation. Respond ONLY with a JSON object (no markdown fences, \
no commentary) with these fields:
- "verdict": "misinformation" if the claim is false, misleading or \
unsupported by reliable evidence; otherwise "reliable"
- "confidence": float 0.0-1.0, how confident you are in the verdict
- "category": short lowercase topic label (e.g. "health", "politics", \
"science", "finance"); use "general" if none fits
- "explanation": 1-3 sentences explaining the verdict for a general audience\
"""


def _parse_analysis(raw: dict[str, object]) -> AnalysisResult:
    """Parse the classifier JSON object.

    Raises:
        ValueError: If the verdict is missing or not recognised.
    """
    verdict = Verdict(str(raw.get("verdict", "")).strip().lower())

    confidence = 0.0
    raw_confidence = raw.get("confidence", 0.0)
    if isinstance(raw_confidence, (int, float)) and not isinstance(raw_confidence, bool):
        confidence = max(0.0, min(1.0, float(raw_confidence)))

    category = str(raw.get("category") or DEFAULT_CATEGORY).strip() or DEFAULT_CATEGORY

    return AnalysisResult(
        verdict=verdict,
        confidence=confidence,
        category=category,
        explanation=str(raw.get("explanation", "")),
    )


class ClaudeClassifier:
    """Classify submissions as misinformation or reliable using Claude.

    Args:
        model: Anthropic model to use.
        api_key: API key (defaults to CLAUDE_API_KEY env var).
        max_tokens: Response token budget.
    """

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        api_key: str | None = None,
        max_tokens: int = 1024,
    ) -> None:
        self._client = create_client(api_key)
        self._model = model
        self._max_tokens = max_tokens

    async def analyze(self, text: str) -> tuple[AnalysisResult, Usage]:
        """Classify a submission.

        Args:
            text: Submission text.

        Returns:
            Tuple of (analysis result, usage).

        Raises:
            ClassificationError: On API failure or an unparseable answer.
        """
        try:
            response = await self._client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": f"Claim to verify:\n\n{text}"}],
            )
        except anthropic.APIError as e:
            raise ClassificationError("Classifier request failed") from e

        usage = usage_from_response(self._model, response)

        try:
            analysis = _parse_analysis(parse_json_object(response_text(response)))
        except ValueError as e:
            logger.warning("Unparseable classifier response: %s", e)
            raise ClassificationError("Classifier returned an unusable answer") from e

        return (analysis, usage)
