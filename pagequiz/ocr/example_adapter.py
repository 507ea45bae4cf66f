"""Example OCR adapter.

Returns fixed text without running OCR. Useful for local development and
for wiring tests that should not depend on a Tesseract install.
"""

from typing import ClassVar

from pagequiz.images.models import ImageArtifact
from pagequiz.ocr.base import BaseTextExtractor
from pagequiz.ocr.models import ExtractionResult


class ExampleTextExtractor(BaseTextExtractor):
    DEFAULT_TEXT: ClassVar[str] = (
        "Photosynthesis is the process by which green plants use sunlight, "
        "water and carbon dioxide to produce glucose and oxygen."
    )

    def __init__(self, text: str | None = None) -> None:
        self._text = text if text is not None else self.DEFAULT_TEXT

    async def extract(self, image: ImageArtifact) -> ExtractionResult:
        _ = image
        return ExtractionResult.success(self._text)
