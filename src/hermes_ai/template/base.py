"""Protocol for cluster template generation."""

from typing import Protocol

from hermes_ai.data import Usage


class TemplateGenerator(Protocol):
    """Interface for producing the canonical text of a cluster."""

    async def generate(self, texts: list[str]) -> tuple[str, Usage]:
        """Produce one representative text for a set of retellings.

        Args:
            texts: Non-empty list of member texts, the newest submission first.

        Returns:
            Tuple of (template text, usage).

        Raises:
            TemplateError: If the provider is unavailable.
        """
        ...
