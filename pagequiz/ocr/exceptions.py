class TextExtractionError(Exception):
    """Raised inside OCR adapters when an image cannot be read."""
