from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..capture.snapshot import CapturedImage
from ..common.datetime_utils import epoch_millis, now_local
from ..common.validators import optional_note
from ..core.constants import DEFAULT_CHECKIN_STATUS
from ..core.enums import PipelineState
from ..core.exceptions import BackendError, MissingPhoto, RecordWriteFailed, UploadFailed
from ..storage.base import ObjectStorage

logger = logging.getLogger(__name__)


def photo_key(user_id: str, moment: datetime) -> str:
    return f"{user_id}/{epoch_millis(moment)}.jpg"


class CheckInPipeline:
    """Capture -> upload -> record, one check-in at a time.

    IDLE -> CAPTURED -> UPLOADING -> RECORD_WRITING -> DONE, with FAILED reachable
    from UPLOADING and RECORD_WRITING. A failed submission keeps the captured
    image so it can be submitted again without re-capturing.
    """

    def __init__(
        self,
        storage: ObjectStorage,
        attendance: AttendanceRepository,
        *,
        status: str = DEFAULT_CHECKIN_STATUS,
        clock: Callable[[], datetime] = now_local,
    ):
        self._storage = storage
        self._attendance = attendance
        self._status = status
        self._clock = clock

        self.state = PipelineState.IDLE
        self.image: Optional[CapturedImage] = None
        self.note: str = ""
        self.last_error: Optional[str] = None

    def _set_state(self, state: PipelineState) -> None:
        logger.debug("pipeline %s -> %s", self.state.value, state.value)
        self.state = state

    def capture(self, image: CapturedImage) -> None:
        self.image = image
        self.last_error = None
        self._set_state(PipelineState.CAPTURED)

    def retake(self) -> None:
        self.image = None
        self.last_error = None
        self._set_state(PipelineState.IDLE)

    def submit(self, user_id: str, *, now: Optional[datetime] = None) -> AttendanceRecord:
        if self.image is None:
            raise MissingPhoto()

        notes = optional_note(self.note)
        now = now or self._clock()
        key = photo_key(user_id, now)

        self._set_state(PipelineState.UPLOADING)
        try:
            self._storage.upload(key, self.image.data, content_type=self.image.content_type)
            photo_url = self._storage.get_public_url(key)
        except BackendError as e:
            self._fail(str(e))
            logger.warning("upload of %s failed: %s", key, e)
            raise UploadFailed(str(e)) from e
        except Exception as e:
            self._fail(str(e))
            raise

        self._set_state(PipelineState.RECORD_WRITING)
        try:
            record = self._attendance.create_record(
                user_id=user_id,
                check_in_time=now,
                photo_url=photo_url,
                notes=notes,
                status=self._status,
            )
        except BackendError as e:
            self._fail(str(e))
            # No cleanup: the uploaded object stays in the bucket.
            logger.warning("record write failed, orphaned object %s/%s: %s", self._storage.bucket, key, e)
            raise RecordWriteFailed(str(e)) from e
        except Exception as e:
            self._fail(str(e))
            logger.warning("record write aborted, orphaned object %s/%s", self._storage.bucket, key)
            raise

        self.image = None
        self.note = ""
        self.last_error = None
        self._set_state(PipelineState.DONE)
        logger.info("check-in %s recorded for user %s", record.id, user_id)
        return record

    def _fail(self, message: str) -> None:
        self.last_error = message
        self._set_state(PipelineState.FAILED)
