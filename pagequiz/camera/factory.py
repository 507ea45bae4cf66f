from pagequiz.camera.base import BaseMediaDevices, BasePreview
from pagequiz.camera.models import build_fallback_chain
from pagequiz.camera.opencv_adapter import OpenCVMediaDevices
from pagequiz.camera.session import CameraSession
from pagequiz.config.settings import Settings


class MediaDevicesFactory:
    """Creates the configured camera backend."""

    BACKENDS: tuple[str, ...] = ("opencv",)

    @classmethod
    def create(cls, settings: Settings) -> BaseMediaDevices:
        backend = settings.camera_backend.lower()
        if backend == "opencv":
            return OpenCVMediaDevices(
                environment_device=settings.camera_environment_device,
                user_device=settings.camera_user_device,
                default_device=settings.camera_default_device,
            )
        raise ValueError(f"Unknown camera backend '{backend}'. Choose from: {list(cls.BACKENDS)}")


def build_camera_session(
    settings: Settings,
    preview: BasePreview | None = None,
) -> CameraSession:
    """Build a CameraSession for the configured backend."""
    return CameraSession(
        MediaDevicesFactory.create(settings),
        preview=preview,
        jpeg_quality=settings.camera_jpeg_quality,
        fallback_chain=build_fallback_chain(settings),
    )
