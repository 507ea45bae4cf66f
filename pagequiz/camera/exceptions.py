from pagequiz.camera.models import CAMERA_ERROR_MESSAGES, CameraErrorKind


class CameraError(Exception):
    """Base exception for all camera-related errors."""


class CameraNotReadyError(CameraError):
    """Raised when a frame is requested while no stream is active."""

    def __init__(self) -> None:
        super().__init__("Camera is not ready")


class MediaDeviceError(CameraError):
    """Raised by a media-devices adapter when an acquisition attempt fails."""

    kind: CameraErrorKind = CameraErrorKind.GENERIC

    @property
    def user_message(self) -> str:
        return CAMERA_ERROR_MESSAGES[self.kind]


class PermissionDeniedError(MediaDeviceError):
    kind = CameraErrorKind.PERMISSION_DENIED


class DeviceNotFoundError(MediaDeviceError):
    kind = CameraErrorKind.DEVICE_NOT_FOUND


class DeviceBusyError(MediaDeviceError):
    kind = CameraErrorKind.DEVICE_BUSY


class ConstraintsNotSatisfiedError(MediaDeviceError):
    kind = CameraErrorKind.CONSTRAINTS_NOT_SATISFIABLE


class InsecureContextError(MediaDeviceError):
    kind = CameraErrorKind.INSECURE_CONTEXT
