"""Template generator that picks an existing text."""

from hermes_ai.data import Usage
from hermes_ai.errors import TemplateError


class ShortestTextTemplateGenerator:
    """Use the shortest member text as the template.

    No API calls are made. Ties go to the earliest text in the input, so the
    newest submission wins a tie.
    """

    async def generate(self, texts: list[str]) -> tuple[str, Usage]:
        candidates = [t.strip() for t in texts if t.strip()]
        if not candidates:
            raise TemplateError("No text to build a template from")
        return (min(candidates, key=len), Usage())
