"""Camera capture adapter for kiosk hosts.

Wraps OpenCV ``VideoCapture``. ``start()`` hands back an explicitly owned
``CameraStream``; whoever holds it is responsible for ``stop()``, and
``camera_session`` guarantees that on every exit path.
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterator, Optional, Protocol

import cv2
import numpy as np

from ..core.constants import CAMERA_IDEAL_HEIGHT, CAMERA_IDEAL_WIDTH
from ..core.enums import CameraState
from ..core.exceptions import DeviceUnavailable, PermissionDenied

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CameraConstraints:
    """Video only, user-facing device, ideal resolution hint."""

    device_index: int = 0
    width: int = CAMERA_IDEAL_WIDTH
    height: int = CAMERA_IDEAL_HEIGHT


class CameraStream:
    """A live capture handle. ``stop()`` may be called any number of times."""

    def __init__(self, capture: Any, constraints: CameraConstraints):
        self._capture = capture
        self.constraints = constraints
        self.state = CameraState.ACTIVE

    @property
    def active(self) -> bool:
        return self.state == CameraState.ACTIVE

    def read(self) -> Optional[np.ndarray]:
        """Return the current frame, or None when nothing has decoded yet."""
        if not self.active:
            return None
        ok, frame = self._capture.read()
        if not ok or frame is None:
            return None
        return frame

    def frames(self) -> Iterator[np.ndarray]:
        """Live preview: yield frames until the stream stops or the device stops delivering."""
        while self.active:
            frame = self.read()
            if frame is None:
                break
            yield frame

    def stop(self) -> None:
        if self._capture is not None:
            self._capture.release()
            self._capture = None
            logger.debug("camera %s released", self.constraints.device_index)
        self.state = CameraState.IDLE

    def __enter__(self) -> "CameraStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()


class CameraAdapter(Protocol):
    def start(self, constraints: CameraConstraints = CameraConstraints()) -> CameraStream:
        raise NotImplementedError


class OpenCVCameraAdapter(CameraAdapter):
    def __init__(
        self,
        *,
        capture_factory: Callable[[int], Any] = cv2.VideoCapture,
        device_root: str | Path = "/dev",
        can_read: Callable[[Path], bool] = lambda path: os.access(path, os.R_OK),
    ):
        self._capture_factory = capture_factory
        self._device_root = Path(device_root)
        self._can_read = can_read

    def start(self, constraints: CameraConstraints = CameraConstraints()) -> CameraStream:
        node = self._device_root / f"video{constraints.device_index}"
        if node.exists() and not self._can_read(node):
            logger.warning("camera %s: no read permission on %s", constraints.device_index, node)
            raise PermissionDenied()

        capture = self._capture_factory(constraints.device_index)
        if capture is None or not capture.isOpened():
            if capture is not None:
                capture.release()
            logger.warning("camera %s could not be opened", constraints.device_index)
            raise DeviceUnavailable()

        capture.set(cv2.CAP_PROP_FRAME_WIDTH, constraints.width)
        capture.set(cv2.CAP_PROP_FRAME_HEIGHT, constraints.height)
        logger.debug("camera %s active", constraints.device_index)
        return CameraStream(capture, constraints)


@contextmanager
def camera_session(adapter: CameraAdapter, constraints: CameraConstraints = CameraConstraints()) -> Iterator[CameraStream]:
    stream = adapter.start(constraints)
    try:
        yield stream
    finally:
        stream.stop()
