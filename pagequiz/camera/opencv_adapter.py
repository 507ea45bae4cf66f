import asyncio
import os
import sys
import threading
from collections.abc import Sequence

import cv2
import numpy as np

from pagequiz.camera.base import BaseMediaDevices, BaseMediaStream, BaseMediaTrack
from pagequiz.camera.exceptions import (
    CameraError,
    ConstraintsNotSatisfiedError,
    DeviceBusyError,
    DeviceNotFoundError,
    MediaDeviceError,
    PermissionDeniedError,
)
from pagequiz.camera.models import FacingMode, VideoConstraints


class OpenCVVideoTrack(BaseMediaTrack):
    """Owns one cv2.VideoCapture handle."""

    def __init__(self, capture: cv2.VideoCapture) -> None:
        self._capture = capture
        self._lock = threading.Lock()
        self._stopped = False

    @property
    def stopped(self) -> bool:
        return self._stopped

    def read(self) -> np.ndarray:
        with self._lock:
            if self._stopped:
                raise CameraError("Camera track is stopped")
            ok, frame = self._capture.read()
        if not ok or frame is None:
            raise CameraError("Camera returned no frame")
        return frame

    def stop(self) -> None:
        with self._lock:
            if self._stopped:
                return
            self._stopped = True
            self._capture.release()


class OpenCVMediaStream(BaseMediaStream):
    """Video stream backed by a local capture device."""

    def __init__(self, track: OpenCVVideoTrack, width: int, height: int) -> None:
        self._track = track
        self._width = width
        self._height = height

    @property
    def tracks(self) -> Sequence[BaseMediaTrack]:
        return (self._track,)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    async def read_frame(self) -> np.ndarray:
        frame = await asyncio.to_thread(self._track.read)
        return cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)

    async def take_photo(self, quality: float) -> bytes:
        frame = await asyncio.to_thread(self._track.read)
        ok, buffer = cv2.imencode(".jpg", frame, [cv2.IMWRITE_JPEG_QUALITY, round(quality * 100)])
        if not ok:
            raise CameraError("cv2.imencode failed")
        return buffer.tobytes()


class OpenCVMediaDevices(BaseMediaDevices):
    """Opens local cameras through OpenCV.

    Facing modes are mapped to device indices because OpenCV has no notion
    of front or rear cameras.
    """

    def __init__(
        self,
        *,
        environment_device: int = 1,
        user_device: int = 0,
        default_device: int = 0,
    ) -> None:
        self._devices = {
            FacingMode.ENVIRONMENT: environment_device,
            FacingMode.USER: user_device,
        }
        self._default_device = default_device

    async def get_user_media(self, constraints: VideoConstraints) -> BaseMediaStream:
        index = self._resolve_index(constraints)
        try:
            return await asyncio.to_thread(self._open, index, constraints)
        except MediaDeviceError:
            raise
        except cv2.error as exc:
            raise MediaDeviceError(f"OpenCV failed to open camera {index}: {exc}") from exc

    def _resolve_index(self, constraints: VideoConstraints) -> int:
        if constraints.facing_mode is None:
            return self._default_device
        return self._devices[constraints.facing_mode]

    def _open(self, index: int, constraints: VideoConstraints) -> OpenCVMediaStream:
        self._check_permission(index)
        capture = cv2.VideoCapture(index)
        if not capture.isOpened():
            capture.release()
            raise DeviceNotFoundError(f"Camera {index} could not be opened")

        if constraints.ideal_width is not None:
            capture.set(cv2.CAP_PROP_FRAME_WIDTH, constraints.ideal_width)
        if constraints.ideal_height is not None:
            capture.set(cv2.CAP_PROP_FRAME_HEIGHT, constraints.ideal_height)

        track = OpenCVVideoTrack(capture)
        try:
            frame = track.read()
        except CameraError as exc:
            track.stop()
            raise DeviceBusyError(f"Camera {index} opened but delivers no frames") from exc

        height, width = frame.shape[:2]
        if (constraints.min_width is not None and width < constraints.min_width) or (
            constraints.min_height is not None and height < constraints.min_height
        ):
            track.stop()
            raise ConstraintsNotSatisfiedError(
                f"Camera {index} resolution {width}x{height} is below "
                f"{constraints.min_width}x{constraints.min_height}"
            )
        return OpenCVMediaStream(track, width, height)

    @staticmethod
    def _check_permission(index: int) -> None:
        if not sys.platform.startswith("linux"):
            return
        device_path = f"/dev/video{index}"
        if os.path.exists(device_path) and not os.access(device_path, os.R_OK | os.W_OK):
            raise PermissionDeniedError(f"No permission to access {device_path}")
