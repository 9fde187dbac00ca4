from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..attendance.service import AttendanceService
from ..capture.snapshot import CapturedImage
from ..common.validators import optional_note
from ..core.constants import DEFAULT_CHECKIN_STATUS, DEFAULT_JPEG_QUALITY
from ..core.exceptions import QueryFailed
from ..storage.base import ObjectStorage
from .pipeline import CheckInPipeline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckInResult:
    record: AttendanceRecord
    history: Optional[Sequence[AttendanceRecord]]


class CheckInService:
    """Use case: submit a check-in and return the refreshed personal history."""

    def __init__(
        self,
        storage: ObjectStorage,
        attendance: AttendanceRepository,
        history: AttendanceService,
        *,
        status: str = DEFAULT_CHECKIN_STATUS,
        jpeg_quality: int = DEFAULT_JPEG_QUALITY,
    ):
        self._storage = storage
        self._attendance = attendance
        self._history = history
        self._status = status
        self._jpeg_quality = int(jpeg_quality)

    def new_pipeline(self) -> CheckInPipeline:
        return CheckInPipeline(self._storage, self._attendance, status=self._status)

    def submit(self, pipeline: CheckInPipeline, user_id: str, *, now: Optional[datetime] = None) -> CheckInResult:
        record = pipeline.submit(user_id, now=now)
        try:
            history = self._history.personal_history(user_id)
        except QueryFailed as e:
            # The check-in itself succeeded; the client re-fetches history later.
            logger.warning("history refresh after check-in %s failed: %s", record.id, e)
            history = None
        return CheckInResult(record=record, history=history)

    def submit_data_url(
        self,
        user_id: str,
        data_url: Optional[str],
        *,
        note: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> CheckInResult:
        """Browser flow: the client already took the still and sends it as a data URL."""
        note = optional_note(note)
        pipeline = self.new_pipeline()
        if data_url:
            pipeline.capture(CapturedImage.from_data_url(data_url, quality=self._jpeg_quality))
        pipeline.note = note or ""
        return self.submit(pipeline, user_id, now=now)
