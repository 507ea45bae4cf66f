from abc import ABC, abstractmethod


class BaseTestGenerator(ABC):
    """Contract for all quiz generation adapters."""

    @abstractmethod
    async def generate(self, text: str) -> str:
        """Produce quiz text from the aggregated page text.

        Args:
            text: Valid OCR texts joined with the pipeline separator.

        Returns:
            Generated quiz text, returned verbatim.

        Raises:
            GenerationError: on any failure.
        """
