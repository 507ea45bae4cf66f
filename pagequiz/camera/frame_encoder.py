import io

import numpy as np
from PIL import Image

from pagequiz.camera.exceptions import CameraError

MIN_JPEG_QUALITY = 0.9
MAX_JPEG_QUALITY = 0.95


def clamp_quality(quality: float) -> float:
    return max(MIN_JPEG_QUALITY, min(MAX_JPEG_QUALITY, quality))


def encode_frame_jpeg(frame: np.ndarray, width: int, height: int, quality: float) -> bytes:
    """Render an RGB frame onto a surface of the stream's native size and encode it.

    The frame is resized only when its shape disagrees with the reported
    native resolution.
    """
    if frame.ndim != 3 or frame.shape[2] != 3:
        raise CameraError(f"Unexpected frame shape {frame.shape}")
    image = Image.fromarray(frame.astype(np.uint8))
    if image.size != (width, height) and width > 0 and height > 0:
        image = image.resize((width, height))
    buffer = io.BytesIO()
    image.save(buffer, format="JPEG", quality=round(clamp_quality(quality) * 100))
    return buffer.getvalue()
