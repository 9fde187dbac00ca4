from __future__ import annotations

from enum import Enum


class AppRole(str, Enum):
    """Permission label attached to an identity."""

    ADMIN = "admin"
    USER = "user"

    def flipped(self) -> "AppRole":
        return AppRole.USER if self == AppRole.ADMIN else AppRole.ADMIN


class CameraState(str, Enum):
    IDLE = "idle"
    ACTIVE = "active"


class PipelineState(str, Enum):
    """States of the capture-and-check-in pipeline."""

    IDLE = "idle"
    CAPTURED = "captured"
    UPLOADING = "uploading"
    RECORD_WRITING = "record_writing"
    DONE = "done"
    FAILED = "failed"
