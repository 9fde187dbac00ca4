from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..capture.camera import CameraAdapter, CameraConstraints, CameraStream
from ..capture.snapshot import CapturedImage, take_snapshot
from ..core.constants import DEFAULT_JPEG_QUALITY
from ..core.exceptions import SourceNotReady
from .pipeline import CheckInPipeline

logger = logging.getLogger(__name__)


class KioskCheckInFlow:
    """Server-side capture flow: camera -> snapshot -> pipeline.

    Use as a context manager; the camera is released on exit no matter how the
    block ends.
    """

    def __init__(self, camera: CameraAdapter, pipeline: CheckInPipeline, *, jpeg_quality: int = DEFAULT_JPEG_QUALITY):
        self._camera = camera
        self.pipeline = pipeline
        self._jpeg_quality = int(jpeg_quality)
        self.stream: Optional[CameraStream] = None

    @property
    def camera_active(self) -> bool:
        return self.stream is not None and self.stream.active

    def start_camera(self, constraints: CameraConstraints = CameraConstraints()) -> CameraStream:
        if self.camera_active:
            return self.stream
        self.stream = self._camera.start(constraints)
        return self.stream

    def cancel(self) -> None:
        if self.stream is not None:
            self.stream.stop()
            self.stream = None

    def capture(self) -> CapturedImage:
        if not self.camera_active:
            raise SourceNotReady("Camera is not running. Start the camera first.")
        image = take_snapshot(self.stream, quality=self._jpeg_quality)
        self.stream = None
        self.pipeline.capture(image)
        return image

    def retake(self, constraints: CameraConstraints = CameraConstraints()) -> CameraStream:
        self.pipeline.retake()
        return self.start_camera(constraints)

    def submit(self, user_id: str, *, now: Optional[datetime] = None) -> AttendanceRecord:
        return self.pipeline.submit(user_id, now=now)

    def __enter__(self) -> "KioskCheckInFlow":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cancel()
