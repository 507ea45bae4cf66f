from abc import ABC, abstractmethod

from pagequiz.quizgen.models import SamplingParams


class BaseCompletionClient(ABC):
    """Contract for provider-specific completion clients."""

    @abstractmethod
    async def complete(
        self,
        *,
        model: str,
        prompt: str,
        params: SamplingParams,
    ) -> str:
        """Return the first completion candidate as plain text."""
