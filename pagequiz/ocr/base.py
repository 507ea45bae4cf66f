from abc import ABC, abstractmethod

from pagequiz.images.models import ImageArtifact
from pagequiz.ocr.models import ExtractionResult


class BaseTextExtractor(ABC):
    """Contract for all OCR adapters."""

    @abstractmethod
    async def extract(self, image: ImageArtifact) -> ExtractionResult:
        """Recognize the text in one image.

        Args:
            image: Captured or uploaded image.

        Returns:
            ExtractionResult tagged OK with whitespace-normalized text, or
            tagged NO_TEXT / READ_ERROR with a fallback message.

        Never raises: adapter failures become READ_ERROR results.
        """
