from pagequiz.config.settings import Settings
from pagequiz.ocr.base import BaseTextExtractor
from pagequiz.ocr.example_adapter import ExampleTextExtractor
from pagequiz.ocr.tesseract_adapter import TesseractTextExtractor


class TextExtractorFactory:
    """Creates the correct OCR adapter based on settings."""

    ENGINES: tuple[str, ...] = ("tesseract", "example")

    @classmethod
    def create(cls, settings: Settings) -> BaseTextExtractor:
        engine = settings.ocr_engine.lower()
        if engine == "tesseract":
            return TesseractTextExtractor(
                languages=settings.ocr_languages,
                tesseract_cmd=settings.tesseract_cmd,
            )
        if engine == "example":
            return ExampleTextExtractor()
        raise ValueError(f"Unknown OCR engine '{engine}'. Choose from: {list(cls.ENGINES)}")
