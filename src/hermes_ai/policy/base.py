"""Protocol for content-policy validation."""

from typing import Protocol

from hermes_ai.data import ContentType, Usage, ValidationResult

REJECTION_MESSAGES: dict[ContentType, str] = {
    ContentType.PERSONAL_ATTACK: (
        "This content appears to be a personal attack or insult. "
        "We only analyze news and factual claims."
    ),
    ContentType.HATE_SPEECH: (
        "This content contains hate speech or discriminatory language. "
        "We only verify news and public information."
    ),
    ContentType.THREAT: (
        "This content contains threatening language. "
        "Please only submit news or factual claims for verification."
    ),
    ContentType.SPAM: (
        "This content appears to be spam or promotional. "
        "We focus on verifying news and factual information."
    ),
    ContentType.PROMOTIONAL: (
        "This content is promotional. We only fact-check news and informational claims."
    ),
    ContentType.CYBERBULLYING: (
        "This content appears to be cyberbullying. We only analyze news and factual claims."
    ),
    ContentType.PRIVATE: (
        "This appears to be private communication. "
        "We only verify public news and factual claims."
    ),
}

DEFAULT_REJECTION_MESSAGE = "Content not suitable for fact-checking"


def rejection_message(result: ValidationResult) -> str:
    """User-facing message for a rejected submission."""
    if result.content_type is not None:
        return REJECTION_MESSAGES[result.content_type]
    return result.reason or DEFAULT_REJECTION_MESSAGE


class ContentValidator(Protocol):
    """Interface for screening out content that is not a checkable claim."""

    async def validate(self, text: str) -> tuple[ValidationResult, Usage]:
        """Decide whether a text is suitable for fact-checking.

        Args:
            text: Submission text, already length-checked.

        Returns:
            Tuple of (validation result, usage).

        Raises:
            ClassificationError: If the provider fails.
        """
        ...
