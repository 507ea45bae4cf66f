import io

import pytest
from PIL import Image

from pagequiz.images.models import ImageArtifact, UploadedFile


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"


def _png(width: int = 8, height: int = 8, color: str = "white") -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color=color).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def png_bytes() -> bytes:
    """A tiny valid PNG image."""
    return _png()


@pytest.fixture()
def make_upload():
    """Build UploadedFile objects with sensible defaults."""

    def _make(
        name: str = "page.png",
        content_type: str = "image/png",
        data: bytes | None = None,
    ) -> UploadedFile:
        return UploadedFile(name=name, content_type=content_type, data=data or _png())

    return _make


@pytest.fixture()
def make_artifact():
    """Build ImageArtifact objects with sensible defaults."""

    def _make(name: str = "page.png", data: bytes | None = None) -> ImageArtifact:
        return ImageArtifact.from_bytes(data or _png(), "image/png", name)

    return _make
