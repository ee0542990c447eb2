"""Claude-based content-policy validator."""

import logging

import anthropic

from hermes_ai.data import ContentType, Usage, ValidationResult
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
You screen submissions to a public fact-checking service. Decide whether the \
text is a news item or factual claim that can be fact-checked. Respond ONLY \
with a JSON object (no markdown fences, no commentary) with these fields:
- "is_valid": true if the text is a news item or factual claim, else false
- "content_type": when is_valid is false, one of: personal_attack, \
hate_speech, threat, spam, promotional, cyberbullying, private; when \
is_valid is true, "news"
- "reason": one short sentence explaining the decision\
"""


def _parse_validation(raw: dict[str, object]) -> ValidationResult:
    """Parse the validator JSON object.

    A missing ``is_valid`` counts as valid; an unknown rejection code is kept
    as ``None`` so the caller falls back to the free-text reason.
    """
    is_valid = raw.get("is_valid", True)
    if not isinstance(is_valid, bool):
        is_valid = str(is_valid).strip().lower() not in ("false", "0", "no")

    reason = str(raw.get("reason", ""))
    if is_valid:
        return ValidationResult(is_valid=True, reason=reason)

    try:
        content_type: ContentType | None = ContentType(str(raw.get("content_type", "")))
    except ValueError:
        content_type = None
    return ValidationResult(is_valid=False, content_type=content_type, reason=reason)


class ClaudeContentValidator:
    """Reject personal attacks, hate speech, spam and similar content using Claude.

    Args:
        model: Anthropic model to use.
        api_key: API key (defaults to CLAUDE_API_KEY env var).
    """

    def __init__(self, model: str = DEFAULT_MODEL, api_key: str | None = None) -> None:
        self._client = create_client(api_key)
        self._model = model

    async def validate(self, text: str) -> tuple[ValidationResult, Usage]:
        try:
            response = await self._client.messages.create(
                model=self._model,
                max_tokens=256,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": text}],
            )
        except anthropic.APIError as e:
            raise ClassificationError("Content validation request failed") from e

        usage = usage_from_response(self._model, response)

        try:
            result = _parse_validation(parse_json_object(response_text(response)))
        except ValueError as e:
            logger.warning("Unparseable validation response: %s", e)
            raise ClassificationError("Content validation returned an unusable answer") from e

        return (result, usage)
