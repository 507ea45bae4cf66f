"""Live camera lifecycle: acquisition with fallback, teardown and capture.

State machine::

    IDLE --start--> REQUESTING --ok--> ACTIVE --stop--> IDLE
                             \\--fail--> ERROR --start--> REQUESTING

Only this class starts or stops the device stream. ``stop()`` is idempotent
and is called on every exit path of ``async with``.
"""

from types import TracebackType

from pagequiz.camera.base import BaseMediaDevices, BaseMediaStream, BasePreview
from pagequiz.camera.exceptions import CameraNotReadyError, MediaDeviceError
from pagequiz.camera.frame_encoder import clamp_quality, encode_frame_jpeg
from pagequiz.camera.models import (
    CAMERA_ERROR_MESSAGES,
    AcquisitionAttempt,
    CameraErrorKind,
    CameraState,
    VideoConstraints,
    build_fallback_chain,
)
from pagequiz.images.models import ImageArtifact, timestamp_filename
from pagequiz.logging.logger import Log


class CameraSession:
    def __init__(
        self,
        devices: BaseMediaDevices,
        *,
        preview: BasePreview | None = None,
        jpeg_quality: float = 0.92,
        fallback_chain: list[VideoConstraints] | None = None,
    ) -> None:
        self._devices = devices
        self._preview = preview
        self._jpeg_quality = clamp_quality(jpeg_quality)
        self._fallback_chain = fallback_chain or build_fallback_chain()
        self._stream: BaseMediaStream | None = None
        self._state = CameraState.IDLE
        self._error_kind: CameraErrorKind | None = None
        self._error_message = ""
        self._epoch = 0

    @property
    def state(self) -> CameraState:
        return self._state

    @property
    def error_kind(self) -> CameraErrorKind | None:
        return self._error_kind

    @property
    def error_message(self) -> str:
        return self._error_message

    @property
    def stream(self) -> BaseMediaStream | None:
        return self._stream

    async def start(self) -> CameraState:
        """Acquire a stream, walking the fallback chain in order.

        Device failures do not raise: the session ends in ERROR with a
        message chosen by the category of the last failed attempt.

        Only the latest call may activate a stream. A stream granted to a
        call superseded by ``stop()`` or another ``start()`` is released
        immediately.
        """
        if self._state is CameraState.ACTIVE:
            Log.info("Camera already active, restarting stream")
            self.stop()

        self._epoch += 1
        epoch = self._epoch
        self._state = CameraState.REQUESTING
        self._error_kind = None
        self._error_message = ""

        last_attempt: AcquisitionAttempt | None = None
        for constraints in self._fallback_chain:
            attempt = await self._attempt(constraints)
            if epoch != self._epoch:
                if attempt.stream is not None:
                    Log.info("Camera granted after the request was superseded, releasing it")
                    self._release(attempt.stream)
                return self._state
            if attempt.succeeded:
                self._activate(attempt)
                return self._state
            last_attempt = attempt

        self._fail(last_attempt)
        return self._state

    def stop(self) -> None:
        """Release every track of the held stream and cancel a pending start."""
        self._epoch += 1
        stream = self._stream
        self._stream = None
        if stream is not None:
            self._release(stream)
            Log.info("Camera stream released")
        if self._preview is not None:
            self._preview.detach()
        self._state = CameraState.IDLE

    async def capture_frame(self) -> ImageArtifact:
        """Snapshot the live video as a JPEG image.

        Raises:
            CameraNotReadyError: if the session is not ACTIVE.
        """
        stream = self._stream
        if self._state is not CameraState.ACTIVE or stream is None:
            raise CameraNotReadyError()

        data = await self._try_accelerated_capture(stream)
        if data is None:
            frame = await stream.read_frame()
            data = encode_frame_jpeg(frame, stream.width, stream.height, self._jpeg_quality)

        artifact = ImageArtifact.from_bytes(data, "image/jpeg", timestamp_filename("camera", "jpg"))
        Log.info(f"Captured frame {artifact.filename} ({artifact.size_bytes} bytes)")
        return artifact

    async def __aenter__(self) -> "CameraSession":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()

    async def _attempt(self, constraints: VideoConstraints) -> AcquisitionAttempt:
        try:
            stream = await self._devices.get_user_media(constraints)
        except MediaDeviceError as exc:
            Log.warning(f"Camera attempt failed for {constraints.describe()}: {exc.kind.value}")
            return AcquisitionAttempt(constraints=constraints, error=exc)
        return AcquisitionAttempt(constraints=constraints, stream=stream)

    def _activate(self, attempt: AcquisitionAttempt) -> None:
        stream = attempt.stream
        if stream is None:
            raise ValueError("Cannot activate a failed acquisition attempt")
        if self._stream is not None and self._stream is not stream:
            self._release(self._stream)
        self._stream = stream
        if self._preview is not None:
            self._preview.attach(stream)
        self._state = CameraState.ACTIVE
        Log.info(
            f"Camera active: {attempt.constraints.describe()} "
            f"at {stream.width}x{stream.height}"
        )

    @staticmethod
    def _release(stream: BaseMediaStream) -> None:
        for track in stream.tracks:
            try:
                track.stop()
            except Exception as exc:
                Log.warning(f"Failed to stop camera track: {exc}")

    def _fail(self, attempt: AcquisitionAttempt | None) -> None:
        error = attempt.error if attempt is not None else None
        kind = error.kind if error is not None else CameraErrorKind.GENERIC
        self._state = CameraState.ERROR
        self._error_kind = kind
        self._error_message = CAMERA_ERROR_MESSAGES[kind]
        Log.error(f"Camera unavailable ({kind.value}): {error}")

    async def _try_accelerated_capture(self, stream: BaseMediaStream) -> bytes | None:
        try:
            data = await stream.take_photo(self._jpeg_quality)
        except Exception as exc:
            Log.debug(f"Photo accelerator unavailable, using frame encoder: {exc}")
            return None
        return data or None
