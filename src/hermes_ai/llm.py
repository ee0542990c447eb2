"""Helpers shared by the Claude-backed components."""

import json
import os
from typing import Any

import anthropic

from hermes_ai.data import APICallUsage, Usage

DEFAULT_MODEL = "claude-haiku-4-5-20251001"


def create_client(api_key: str | None = None) -> anthropic.AsyncAnthropic:
    """Create an async Anthropic client (key defaults to CLAUDE_API_KEY env var)."""
    resolved_key = api_key or os.environ.get("CLAUDE_API_KEY")
    return anthropic.AsyncAnthropic(api_key=resolved_key)


def usage_from_response(model: str, response: Any) -> Usage:
    """Extract token usage from a messages API response."""
    return Usage(
        api_calls=[
            APICallUsage(
                model=model,
                input_tokens=response.usage.input_tokens,
                output_tokens=response.usage.output_tokens,
                cache_creation_input_tokens=getattr(
                    response.usage, "cache_creation_input_tokens", 0
                )
                or 0,
                cache_read_input_tokens=getattr(response.usage, "cache_read_input_tokens", 0)
                or 0,
            ),
        ],
    )


def response_text(response: Any) -> str:
    """Concatenate all text blocks of a messages API response."""
    text = ""
    for block in response.content:
        if hasattr(block, "text"):
            text += block.text
    return text


def parse_json_object(text: str) -> dict[str, Any]:
    """Parse a JSON object from model output, stripping markdown fences.

    Raises:
        ValueError: If the text is not a JSON object.
    """
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = [line for line in cleaned.split("\n") if not line.strip().startswith("```")]
        cleaned = "\n".join(lines)

    parsed = json.loads(cleaned)
    if not isinstance(parsed, dict):
        raise ValueError(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed
