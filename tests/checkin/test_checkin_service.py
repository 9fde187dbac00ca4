from __future__ import annotations

import base64
import io

import pytest
from PIL import Image

from photo_attendance.capture.snapshot import CapturedImage
from photo_attendance.core.enums import PipelineState
from photo_attendance.core.exceptions import (
    BackendError,
    MissingPhoto,
    RecordWriteFailed,
    UploadFailed,
    ValidationError,
)


def _jpeg_data_url(size=(16, 12)) -> str:
    buf = io.BytesIO()
    Image.new("RGB", size, color=(120, 80, 40)).save(buf, format="JPEG")
    return "data:image/jpeg;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


def test_submit_returns_record_and_refreshed_history(container, seeded, storage, fixed_now):
    _, b = seeded

    result = container.checkin_service.submit_data_url(b.id, _jpeg_data_url(), note="gate 2", now=fixed_now.replace(hour=9))

    assert result.record.notes == "gate 2"
    assert result.history[0] == result.record
    assert len(result.history) == 4
    assert list(storage.objects) == [result.record.photo_url.rsplit("/storage/attendance-photos/", 1)[1]]


def test_submit_without_image_makes_no_backend_calls(container, storage, attendance):
    with pytest.raises(MissingPhoto):
        container.checkin_service.submit_data_url("user-1", None)

    assert storage.calls == 0
    assert attendance.calls == 0


def test_invalid_image_is_rejected_before_upload(container, storage):
    with pytest.raises(ValidationError):
        container.checkin_service.submit_data_url("user-1", "data:image/jpeg;base64,bm9wZQ==")

    assert storage.calls == 0


def test_upload_failure_surfaces_backend_message(container, storage, attendance):
    storage.fail_with = "Payload too large"

    with pytest.raises(UploadFailed) as exc:
        container.checkin_service.submit_data_url("user-1", _jpeg_data_url())

    assert exc.value.message == "Payload too large"
    assert attendance.records == []


def test_record_failure_surfaces_backend_message(container, storage, attendance):
    attendance.fail_with = "permission denied for table attendance_records"

    with pytest.raises(RecordWriteFailed):
        container.checkin_service.submit_data_url("user-1", _jpeg_data_url())

    assert len(storage.objects) == 1


def test_history_failure_after_success_still_returns_record(container, attendance, fixed_now):
    def broken(user_id, limit):
        raise BackendError("connection reset")

    attendance.list_for_user = broken
    pipeline = container.checkin_service.new_pipeline()
    pipeline.capture(CapturedImage.from_data_url(_jpeg_data_url()))

    result = container.checkin_service.submit(pipeline, "user-1", now=fixed_now)

    assert pipeline.state == PipelineState.DONE
    assert result.record in attendance.records
    assert result.history is None
