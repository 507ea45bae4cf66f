import asyncio
import base64
from collections.abc import Sequence
from dataclasses import dataclass, field

from pagequiz.images.exceptions import (
    ImageTooLargeError,
    ImageValidationError,
    TooManyImagesError,
    UnsupportedImageTypeError,
)
from pagequiz.images.models import DEFAULT_MAX_IMAGES, ImageArtifact, ImageSet, UploadedFile
from pagequiz.logging.logger import Log

DEFAULT_MAX_IMAGE_BYTES = 10 * 1024 * 1024


def to_data_url(artifact: ImageArtifact) -> str:
    """Encode an image as a base64 data URL for previews."""
    encoded = base64.b64encode(artifact.data).decode("ascii")
    return f"data:{artifact.mime_type};base64,{encoded}"


@dataclass
class AddFilesResult:
    """Outcome of one batch addition."""

    accepted: list[ImageArtifact] = field(default_factory=list)
    rejected: list[ImageValidationError] = field(default_factory=list)

    @property
    def messages(self) -> list[str]:
        return [str(error) for error in self.rejected]


class ImageSource:
    """Collects uploaded and captured images together with their previews.

    ``images`` and ``previews`` always have the same length and the preview
    at index ``i`` belongs to the image at index ``i``.
    """

    def __init__(
        self,
        max_images: int = DEFAULT_MAX_IMAGES,
        max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES,
    ) -> None:
        self._images = ImageSet(max_images)
        self._previews: list[str] = []
        self._max_image_bytes = max_image_bytes
        self._clear_epoch = 0

    @property
    def images(self) -> tuple[ImageArtifact, ...]:
        return self._images.snapshot()

    @property
    def previews(self) -> tuple[str, ...]:
        return tuple(self._previews)

    @property
    def max_images(self) -> int:
        return self._images.max_images

    @property
    def remaining_slots(self) -> int:
        return self._images.remaining

    @property
    def is_full(self) -> bool:
        return self._images.remaining == 0

    def __len__(self) -> int:
        return len(self._images)

    async def add_files(self, files: Sequence[UploadedFile]) -> AddFilesResult:
        """Validate and append a batch of user-selected files.

        Raises:
            TooManyImagesError: if the batch would exceed capacity. Nothing
                is added in that case.
        """
        if not self._images.can_add(len(files)):
            Log.warning(
                f"Rejected batch of {len(files)} files: "
                f"{len(self._images)}/{self.max_images} slots used"
            )
            raise TooManyImagesError(self.max_images)

        result = AddFilesResult()
        for uploaded in files:
            try:
                self._validate(uploaded)
            except ImageValidationError as exc:
                Log.warning(f"Rejected file: {exc}")
                result.rejected.append(exc)
                continue
            result.accepted.append(uploaded.to_artifact())

        if result.accepted:
            if not await self._append(result.accepted):
                result.accepted = []
                return result
            Log.info(f"Added {len(result.accepted)} images ({len(self._images)}/{self.max_images})")
        return result

    async def add_capture(self, artifact: ImageArtifact) -> None:
        """Append a camera capture.

        Raises:
            TooManyImagesError: if the set is already full.
        """
        if not self._images.can_add(1):
            raise TooManyImagesError(self.max_images)
        if not await self._append([artifact]):
            return
        Log.info(f"Added capture {artifact.filename} ({len(self._images)}/{self.max_images})")

    def remove(self, index: int) -> bool:
        removed = self._images.remove(index)
        if removed is None:
            return False
        del self._previews[index]
        Log.info(f"Removed image {index + 1}, {len(self._images)} left")
        return True

    def clear(self) -> None:
        """Drop every image, including batches still being added."""
        self._clear_epoch += 1
        self._images.clear()
        self._previews.clear()

    def _validate(self, uploaded: UploadedFile) -> None:
        if not uploaded.content_type.startswith("image/"):
            raise UnsupportedImageTypeError(uploaded.name, uploaded.content_type)
        if uploaded.size_bytes > self._max_image_bytes:
            raise ImageTooLargeError(uploaded.name, self._max_image_bytes)

    async def _append(self, artifacts: list[ImageArtifact]) -> bool:
        """Append artifacts with their previews. False if a clear() intervened."""
        epoch = self._clear_epoch
        previews = await asyncio.gather(
            *(asyncio.to_thread(to_data_url, artifact) for artifact in artifacts)
        )
        if epoch != self._clear_epoch:
            Log.info(f"Dropped {len(artifacts)} pending images after the set was cleared")
            return False
        # Capacity may have changed while previews were being encoded.
        self._images.add(artifacts)
        self._previews.extend(previews)
        return True
