import time
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from pagequiz.images.exceptions import TooManyImagesError

DEFAULT_MAX_IMAGES = 3


def timestamp_filename(prefix: str = "camera", extension: str = "jpg") -> str:
    """Build a synthetic filename from the current epoch milliseconds."""
    return f"{prefix}-{int(time.time() * 1000)}.{extension}"


@dataclass(frozen=True)
class ImageArtifact:
    """Binary image payload handed from capture/upload to the pipeline."""

    data: bytes = field(repr=False)
    mime_type: str
    size_bytes: int
    filename: str

    @classmethod
    def from_bytes(cls, data: bytes, mime_type: str, filename: str) -> "ImageArtifact":
        return cls(data=data, mime_type=mime_type, size_bytes=len(data), filename=filename)


@dataclass(frozen=True)
class UploadedFile:
    """A user-selected file before validation."""

    name: str
    content_type: str
    data: bytes = field(repr=False)

    @property
    def size_bytes(self) -> int:
        return len(self.data)

    def to_artifact(self) -> ImageArtifact:
        return ImageArtifact.from_bytes(self.data, self.content_type, self.name)


class ImageSet:
    """Ordered, capacity-bounded sequence of images.

    Insertion order is the display order. The size never exceeds
    ``max_images``: a batch that would overflow is rejected as a whole.
    """

    def __init__(self, max_images: int = DEFAULT_MAX_IMAGES) -> None:
        if max_images < 1:
            raise ValueError("max_images must be at least 1")
        self._max_images = max_images
        self._items: list[ImageArtifact] = []

    @property
    def max_images(self) -> int:
        return self._max_images

    @property
    def remaining(self) -> int:
        return self._max_images - len(self._items)

    def can_add(self, count: int) -> bool:
        return len(self._items) + count <= self._max_images

    def add(self, artifacts: Iterable[ImageArtifact]) -> None:
        batch = list(artifacts)
        if not self.can_add(len(batch)):
            raise TooManyImagesError(self._max_images)
        self._items.extend(batch)

    def remove(self, index: int) -> ImageArtifact | None:
        """Remove the image at ``index``; out-of-range indices are ignored."""
        if not 0 <= index < len(self._items):
            return None
        return self._items.pop(index)

    def clear(self) -> None:
        self._items.clear()

    def snapshot(self) -> tuple[ImageArtifact, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ImageArtifact]:
        return iter(tuple(self._items))

    def __getitem__(self, index: int) -> ImageArtifact:
        return self._items[index]
