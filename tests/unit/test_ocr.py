from unittest.mock import patch

import pytesseract
import pytest

from pagequiz.config.settings import Settings
from pagequiz.images.models import ImageArtifact
from pagequiz.ocr.example_adapter import ExampleTextExtractor
from pagequiz.ocr.factory import TextExtractorFactory
from pagequiz.ocr.models import (
    NO_TEXT_MESSAGE,
    READ_ERROR_MESSAGE,
    ExtractionResult,
    ExtractionStatus,
    is_valid_text,
    normalize_text,
)
from pagequiz.ocr.tesseract_adapter import TesseractTextExtractor

pytestmark = pytest.mark.anyio

IMAGE_TO_STRING = "pagequiz.ocr.tesseract_adapter.pytesseract.image_to_string"


class TestNormalizeText:
    def test_collapses_whitespace(self) -> None:
        assert normalize_text("  Paris   is\n\nthe\tcapital  ") == "Paris is the capital"

    def test_empty(self) -> None:
        assert normalize_text(" \n\t ") == ""


class TestIsValidText:
    def test_length_must_exceed_minimum(self) -> None:
        assert is_valid_text("abcdef")
        assert not is_valid_text("abcde")

    def test_whitespace_does_not_count(self) -> None:
        assert not is_valid_text("  ab   c  ")


class TestExtractionResult:
    def test_fallbacks_are_not_ok(self) -> None:
        assert ExtractionResult.no_text().text == NO_TEXT_MESSAGE
        assert ExtractionResult.read_error().status is ExtractionStatus.READ_ERROR
        assert not ExtractionResult.read_error().ok

    def test_success_is_ok(self) -> None:
        assert ExtractionResult.success("hello world").ok


class TestTesseractTextExtractor:
    async def test_returns_normalized_text(self, make_artifact) -> None:
        with patch(IMAGE_TO_STRING, return_value="Paris is\nthe capital\n\n") as ocr:
            result = await TesseractTextExtractor(languages="eng").extract(make_artifact())
        assert result == ExtractionResult.success("Paris is the capital")
        assert ocr.call_args.kwargs["lang"] == "eng"

    async def test_blank_page_is_no_text(self, make_artifact) -> None:
        with patch(IMAGE_TO_STRING, return_value=" \n "):
            result = await TesseractTextExtractor().extract(make_artifact())
        assert result.status is ExtractionStatus.NO_TEXT
        assert result.text == NO_TEXT_MESSAGE

    async def test_tesseract_error_is_read_error(self, make_artifact) -> None:
        with patch(IMAGE_TO_STRING, side_effect=pytesseract.TesseractError(1, "boom")):
            result = await TesseractTextExtractor().extract(make_artifact())
        assert result.status is ExtractionStatus.READ_ERROR
        assert result.text == READ_ERROR_MESSAGE

    async def test_undecodable_image_is_read_error(self) -> None:
        artifact = ImageArtifact.from_bytes(b"not an image", "image/png", "broken.png")
        with patch(IMAGE_TO_STRING) as ocr:
            result = await TesseractTextExtractor().extract(artifact)
        assert result.status is ExtractionStatus.READ_ERROR
        ocr.assert_not_called()

    async def test_missing_binary_is_read_error(self, make_artifact) -> None:
        with patch(IMAGE_TO_STRING, side_effect=pytesseract.TesseractNotFoundError()):
            result = await TesseractTextExtractor().extract(make_artifact())
        assert result.status is ExtractionStatus.READ_ERROR


class TestExampleTextExtractor:
    async def test_returns_fixed_text(self, make_artifact) -> None:
        result = await ExampleTextExtractor("Light speed is 3x10^8 m/s.").extract(make_artifact())
        assert result.text == "Light speed is 3x10^8 m/s."
        assert result.ok


class TestTextExtractorFactory:
    def test_creates_tesseract(self) -> None:
        assert isinstance(TextExtractorFactory.create(Settings()), TesseractTextExtractor)

    def test_creates_example(self) -> None:
        extractor = TextExtractorFactory.create(Settings(ocr_engine="example"))
        assert isinstance(extractor, ExampleTextExtractor)

    def test_unknown_engine_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown OCR engine"):
            TextExtractorFactory.create(Settings(ocr_engine="easyocr"))
