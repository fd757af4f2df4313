import base64
import binascii
import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, Optional

from fitflow import config

logger = logging.getLogger(__name__)


class DeviceUnavailableError(RuntimeError):
    """Camera is missing, busy or access was denied. Fall back to upload."""


class CaptureDevice(ABC):
    """A video input that can hand out single frames as encoded image bytes."""

    @abstractmethod
    def open(self):
        ...

    @abstractmethod
    def read_frame(self) -> bytes:
        ...

    @abstractmethod
    def close(self):
        ...


@contextmanager
def camera_session(device: CaptureDevice) -> Iterator[CaptureDevice]:
    """Acquire the device for the duration of the block; it is always released."""
    try:
        device.open()
    except Exception as e:
        raise DeviceUnavailableError(f"Could not access camera: {e}") from e

    try:
        yield device
    finally:
        try:
            device.close()
        except Exception as e:
            logger.warning(f"[Capture] Failed to release camera: {e}")


def capture_image(device: CaptureDevice) -> bytes:
    with camera_session(device) as camera:
        try:
            frame = camera.read_frame()
        except Exception as e:
            raise DeviceUnavailableError(f"Could not read from camera: {e}") from e

    if not frame:
        raise DeviceUnavailableError("Camera returned an empty frame")
    logger.info(f"[Capture] Captured frame ({len(frame)} bytes)")
    return frame


def decode_image_upload(payload: str, max_bytes: Optional[int] = None) -> bytes:
    """
    Turn an uploaded image into raw bytes. Accepts a data URL
    ("data:image/png;base64,....") or plain base64, up to `max_bytes`
    once decoded (MAX_IMAGE_BYTES by default).
    """
    if max_bytes is None:
        max_bytes = config.MAX_IMAGE_BYTES
    if not payload or not payload.strip():
        raise ValueError("Image payload is empty")

    data = payload.strip()
    if data.startswith("data:"):
        header, sep, data = data.partition(",")
        if not sep or ";base64" not in header:
            raise ValueError("Only base64 data URLs are supported")

    # 4 base64 characters per 3 bytes; reject before decoding
    if len(data) // 4 * 3 > max_bytes + 2:
        raise ValueError(f"Image is larger than {max_bytes} bytes")

    try:
        image = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError("Image payload is not valid base64") from e

    if not image:
        raise ValueError("Image payload is empty")
    if len(image) > max_bytes:
        raise ValueError(f"Image is larger than {max_bytes} bytes")
    return image
