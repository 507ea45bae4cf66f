import asyncio
import io

import pytesseract
from PIL import Image, ImageOps, UnidentifiedImageError

from pagequiz.images.models import ImageArtifact
from pagequiz.logging.logger import Log
from pagequiz.ocr.base import BaseTextExtractor
from pagequiz.ocr.exceptions import TextExtractionError
from pagequiz.ocr.models import ExtractionResult, normalize_text

MIN_RECOGNIZED_LENGTH = 3


class TesseractTextExtractor(BaseTextExtractor):
    """Extracts text from images with Tesseract via pytesseract."""

    def __init__(self, *, languages: str = "eng+uzb+rus", tesseract_cmd: str = "") -> None:
        self._languages = languages
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    async def extract(self, image: ImageArtifact) -> ExtractionResult:
        Log.info(f"OCR started for {image.filename} ({image.size_bytes} bytes)")
        try:
            raw = await asyncio.to_thread(self._recognize, image.data)
        except TextExtractionError as exc:
            Log.error(f"OCR failed for {image.filename}: {exc}")
            return ExtractionResult.read_error()

        text = normalize_text(raw)
        Log.info(f"OCR finished for {image.filename}: {len(text)} chars")
        if len(text) < MIN_RECOGNIZED_LENGTH:
            Log.warning(f"No usable text found in {image.filename}")
            return ExtractionResult.no_text()
        return ExtractionResult.success(text)

    def _recognize(self, data: bytes) -> str:
        try:
            with Image.open(io.BytesIO(data)) as img:
                prepared = ImageOps.exif_transpose(img).convert("L")
            return pytesseract.image_to_string(prepared, lang=self._languages)
        except (UnidentifiedImageError, OSError) as exc:
            raise TextExtractionError(f"cannot decode image: {exc}") from exc
        except pytesseract.TesseractError as exc:
            raise TextExtractionError(f"tesseract failed: {exc}") from exc
        except Exception as exc:
            raise TextExtractionError(f"tesseract extraction failed: {exc}") from exc
