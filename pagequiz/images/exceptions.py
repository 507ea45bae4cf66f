class ImageValidationError(Exception):
    """Base exception for rejected image input."""


class TooManyImagesError(ImageValidationError):
    """Raised when an addition would push the image set past its capacity."""

    def __init__(self, max_images: int) -> None:
        super().__init__(f"You can upload at most {max_images} images")
        self.max_images = max_images


class UnsupportedImageTypeError(ImageValidationError):
    """Raised when a selected file is not an image."""

    def __init__(self, filename: str, mime_type: str) -> None:
        super().__init__(f"{filename} is not an image ({mime_type or 'unknown type'})")
        self.filename = filename
        self.mime_type = mime_type


class ImageTooLargeError(ImageValidationError):
    """Raised when a selected file exceeds the per-file size cap."""

    def __init__(self, filename: str, max_bytes: int) -> None:
        max_mb = max_bytes // (1024 * 1024)
        super().__init__(f"{filename} is too large (max {max_mb}MB)")
        self.filename = filename
        self.max_bytes = max_bytes
