"""Claude-based cluster template generator."""

import anthropic

from hermes_ai.data import Usage
from hermes_ai.errors import TemplateError
from hermes_ai.llm import DEFAULT_MODEL, create_client, response_text, usage_from_response

SYSTEM_PROMPT = """\
You are given several user-submitted retellings of the same claim. Write ONE \
neutral sentence that states the shared claim, keeping its key entities and \
numbers. Do not judge whether the claim is true. Respond with the sentence \
only, no quotes and no commentary.\
"""


class ClaudeTemplateGenerator:
    """Generate a canonical cluster text with Claude.

    Args:
        model: Anthropic model to use.
        api_key: API key (defaults to CLAUDE_API_KEY env var).
        max_texts: Cap on how many member texts are sent in one prompt.
    """

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        api_key: str | None = None,
        max_texts: int = 20,
    ) -> None:
        self._client = create_client(api_key)
        self._model = model
        self._max_texts = max_texts

    async def generate(self, texts: list[str]) -> tuple[str, Usage]:
        if not texts:
            raise TemplateError("No text to build a template from")

        numbered = [f"{i + 1}. {t}" for i, t in enumerate(texts[: self._max_texts])]
        try:
            response = await self._client.messages.create(
                model=self._model,
                max_tokens=512,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": "\n".join(numbered)}],
            )
        except anthropic.APIError as e:
            raise TemplateError("Template request failed") from e

        template = response_text(response).strip().strip('"').strip()
        if not template:
            raise TemplateError("Template generator returned empty text")
        return (template, usage_from_response(self._model, response))
