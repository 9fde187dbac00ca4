from __future__ import annotations

import base64
import binascii
import io
import logging
from dataclasses import dataclass

import cv2
from PIL import Image, UnidentifiedImageError

from ..core.constants import DEFAULT_JPEG_QUALITY
from ..core.exceptions import SourceNotReady, ValidationError
from .camera import CameraStream

logger = logging.getLogger(__name__)

JPEG_CONTENT_TYPE = "image/jpeg"


@dataclass(frozen=True)
class CapturedImage:
    """An encoded still, held in memory until it is uploaded or discarded."""

    data: bytes
    width: int
    height: int
    content_type: str = JPEG_CONTENT_TYPE

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_data_url(cls, value: str, *, quality: int = DEFAULT_JPEG_QUALITY) -> "CapturedImage":
        """Decode a canvas ``toDataURL`` payload.

        JPEG input is kept as is; other formats are flattened to RGB and
        re-encoded as JPEG.
        """
        if not isinstance(value, str):
            raise ValidationError("Photo must be an image data URL")

        header, sep, encoded = value.partition(",")
        if not sep or not header.startswith("data:image/") or ";base64" not in header:
            raise ValidationError("Photo must be an image data URL")

        try:
            raw = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError):
            raise ValidationError("Photo data is not valid base64")

        try:
            with Image.open(io.BytesIO(raw)) as img:
                img.load()
                width, height = img.size
                if img.format == "JPEG":
                    return cls(data=raw, width=width, height=height)

                buf = io.BytesIO()
                img.convert("RGB").save(buf, format="JPEG", quality=int(quality))
                return cls(data=buf.getvalue(), width=width, height=height)
        except Image.DecompressionBombError:
            raise ValidationError("Photo resolution is too large")
        except (UnidentifiedImageError, OSError):
            raise ValidationError("Invalid image data")

    def to_data_url(self) -> str:
        return f"data:{self.content_type};base64,{base64.b64encode(self.data).decode('ascii')}"


def take_snapshot(stream: CameraStream, *, quality: int = DEFAULT_JPEG_QUALITY) -> CapturedImage:
    """Freeze one frame at native resolution and JPEG-encode it.

    The stream is stopped once the still is taken. If no frame has decoded yet
    the stream is left running and ``SourceNotReady`` is raised.
    """
    frame = stream.read()
    if frame is None or frame.ndim < 2 or frame.shape[0] == 0 or frame.shape[1] == 0:
        raise SourceNotReady()

    # JPEG has no alpha channel
    if frame.ndim == 3 and frame.shape[2] == 4:
        frame = cv2.cvtColor(frame, cv2.COLOR_BGRA2BGR)

    height, width = frame.shape[:2]
    ok, buffer = cv2.imencode(".jpg", frame, [int(cv2.IMWRITE_JPEG_QUALITY), int(quality)])
    if not ok:
        raise SourceNotReady("Could not encode the camera frame. Please try again.")

    stream.stop()
    logger.debug("snapshot %dx%d, %d bytes", width, height, len(buffer))
    return CapturedImage(data=buffer.tobytes(), width=int(width), height=int(height))
