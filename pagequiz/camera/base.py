from abc import ABC, abstractmethod
from collections.abc import Sequence

import numpy as np

from pagequiz.camera.models import VideoConstraints


class BaseMediaTrack(ABC):
    """A single track of a live media stream."""

    @abstractmethod
    def stop(self) -> None:
        """Release the underlying device. Must be safe to call repeatedly."""


class BaseMediaStream(ABC):
    """Contract for a live video stream returned by a media-devices adapter."""

    @property
    @abstractmethod
    def tracks(self) -> Sequence[BaseMediaTrack]:
        """All tracks held by the stream."""

    @property
    @abstractmethod
    def width(self) -> int:
        """Native frame width of the live video."""

    @property
    @abstractmethod
    def height(self) -> int:
        """Native frame height of the live video."""

    @abstractmethod
    async def read_frame(self) -> np.ndarray:
        """Return the current frame as an RGB array of shape (height, width, 3).

        Raises:
            CameraError: if no frame can be read.
        """

    async def take_photo(self, quality: float) -> bytes:
        """Optional capture accelerator returning encoded JPEG bytes.

        Adapters without an accelerator keep this default.
        """
        raise NotImplementedError("Stream has no photo accelerator")


class BaseMediaDevices(ABC):
    """Contract for all camera access adapters."""

    @abstractmethod
    async def get_user_media(self, constraints: VideoConstraints) -> BaseMediaStream:
        """Acquire a video stream matching the constraints.

        Raises:
            MediaDeviceError: tagged with the failure category.
        """


class BasePreview(ABC):
    """Live preview surface a stream can be bound to."""

    @abstractmethod
    def attach(self, stream: BaseMediaStream) -> None:
        """Start rendering the stream."""

    @abstractmethod
    def detach(self) -> None:
        """Stop rendering. Must be safe to call when nothing is attached."""
