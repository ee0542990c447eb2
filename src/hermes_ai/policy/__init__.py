from hermes_ai.policy.allow_all import AllowAllValidator
from hermes_ai.policy.base import (
    DEFAULT_REJECTION_MESSAGE,
    REJECTION_MESSAGES,
    ContentValidator,
    rejection_message,
)
from hermes_ai.policy.claude import ClaudeContentValidator

__all__ = [
    "AllowAllValidator",
    "ClaudeContentValidator",
    "ContentValidator",
    "DEFAULT_REJECTION_MESSAGE",
    "REJECTION_MESSAGES",
    "rejection_message",
]
