from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from pagequiz.config.settings import Settings

if TYPE_CHECKING:
    from pagequiz.camera.base import BaseMediaStream
    from pagequiz.camera.exceptions import MediaDeviceError


class CameraState(Enum):
    IDLE = "idle"
    REQUESTING = "requesting"
    ACTIVE = "active"
    ERROR = "error"


class FacingMode(Enum):
    ENVIRONMENT = "environment"
    USER = "user"


class CameraErrorKind(Enum):
    PERMISSION_DENIED = "permission-denied"
    DEVICE_NOT_FOUND = "device-not-found"
    DEVICE_BUSY = "device-busy"
    CONSTRAINTS_NOT_SATISFIABLE = "constraints-not-satisfiable"
    INSECURE_CONTEXT = "insecure-context"
    GENERIC = "generic"


CAMERA_ERROR_MESSAGES: dict[CameraErrorKind, str] = {
    CameraErrorKind.PERMISSION_DENIED: (
        "Camera access was denied. Allow camera access in your browser or system settings."
    ),
    CameraErrorKind.DEVICE_NOT_FOUND: "No camera was found on this device.",
    CameraErrorKind.DEVICE_BUSY: (
        "The camera is in use by another application. Close it and try again."
    ),
    CameraErrorKind.CONSTRAINTS_NOT_SATISFIABLE: (
        "The camera does not support the required resolution."
    ),
    CameraErrorKind.INSECURE_CONTEXT: "The camera is only available over a secure connection.",
    CameraErrorKind.GENERIC: "The camera could not be started. Please try again.",
}


@dataclass(frozen=True)
class VideoConstraints:
    """Requested video properties for one acquisition attempt.

    ``facing_mode=None`` with no resolution bounds means "any video device".
    """

    facing_mode: FacingMode | None = None
    ideal_width: int | None = None
    ideal_height: int | None = None
    min_width: int | None = None
    min_height: int | None = None

    @property
    def is_unconstrained(self) -> bool:
        return (
            self.facing_mode is None
            and self.ideal_width is None
            and self.ideal_height is None
            and self.min_width is None
            and self.min_height is None
        )

    def describe(self) -> str:
        if self.is_unconstrained:
            return "any camera"
        facing = self.facing_mode.value if self.facing_mode else "any"
        return (
            f"{facing} camera {self.ideal_width}x{self.ideal_height} "
            f"(min {self.min_width}x{self.min_height})"
        )


@dataclass(frozen=True)
class AcquisitionAttempt:
    """Tagged outcome of one get_user_media call."""

    constraints: VideoConstraints
    stream: "BaseMediaStream | None" = None
    error: "MediaDeviceError | None" = None

    @property
    def succeeded(self) -> bool:
        return self.stream is not None


def build_fallback_chain(settings: Settings | None = None) -> list[VideoConstraints]:
    """Rear camera, then front camera, then any camera."""
    settings = settings or Settings()
    bounds = {
        "ideal_width": settings.camera_ideal_width,
        "ideal_height": settings.camera_ideal_height,
        "min_width": settings.camera_min_width,
        "min_height": settings.camera_min_height,
    }
    return [
        VideoConstraints(facing_mode=FacingMode.ENVIRONMENT, **bounds),
        VideoConstraints(facing_mode=FacingMode.USER, **bounds),
        VideoConstraints(),
    ]
