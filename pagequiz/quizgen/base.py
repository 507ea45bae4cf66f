from abc import ABC, abstractmethod


class BaseQuizGenerator(ABC):
    """Contract for the server-side quiz generator."""

    @abstractmethod
    async def generate(self, text: str) -> str:
        """Turn extracted page text into quiz questions with answers.

        Raises:
            CompletionError: on any failure.
        """
