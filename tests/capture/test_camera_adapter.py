from __future__ import annotations

import cv2
import pytest

from photo_attendance.capture.camera import CameraConstraints, OpenCVCameraAdapter, camera_session
from photo_attendance.core.enums import CameraState
from photo_attendance.core.exceptions import DeviceUnavailable, PermissionDenied


def test_start_returns_active_stream_with_resolution_hint(tmp_path, make_capture, make_frame):
    capture = make_capture([make_frame()])
    adapter = OpenCVCameraAdapter(capture_factory=lambda index: capture, device_root=tmp_path)

    stream = adapter.start(CameraConstraints(device_index=0, width=1280, height=720))

    assert stream.state == CameraState.ACTIVE
    assert capture.props[cv2.CAP_PROP_FRAME_WIDTH] == 1280
    assert capture.props[cv2.CAP_PROP_FRAME_HEIGHT] == 720


def test_stop_is_idempotent(tmp_path, make_capture):
    capture = make_capture([])
    stream = OpenCVCameraAdapter(capture_factory=lambda index: capture, device_root=tmp_path).start()

    stream.stop()
    stream.stop()

    assert stream.state == CameraState.IDLE
    assert capture.released == 1
    assert stream.read() is None


def test_missing_device_raises_device_unavailable(tmp_path, make_capture):
    capture = make_capture(opened=False)
    adapter = OpenCVCameraAdapter(capture_factory=lambda index: capture, device_root=tmp_path)

    with pytest.raises(DeviceUnavailable):
        adapter.start()

    assert capture.released == 1


def test_unreadable_device_node_raises_permission_denied(tmp_path, make_capture):
    (tmp_path / "video0").write_bytes(b"")
    opened = []

    def factory(index):
        opened.append(index)
        return make_capture([])

    adapter = OpenCVCameraAdapter(capture_factory=factory, device_root=tmp_path, can_read=lambda path: False)

    with pytest.raises(PermissionDenied) as exc:
        adapter.start()

    assert "permission" in exc.value.message.lower()
    assert opened == []


def test_camera_errors_have_distinct_messages():
    assert PermissionDenied().message != DeviceUnavailable().message


def test_camera_session_releases_on_error(tmp_path, make_capture, make_frame):
    capture = make_capture([make_frame()])
    adapter = OpenCVCameraAdapter(capture_factory=lambda index: capture, device_root=tmp_path)

    with pytest.raises(RuntimeError):
        with camera_session(adapter) as stream:
            assert stream.active
            raise RuntimeError("teardown")

    assert capture.released == 1
    assert stream.state == CameraState.IDLE


def test_frames_yield_live_preview_until_device_stops(tmp_path, make_capture, make_frame):
    capture = make_capture([make_frame(), make_frame(), make_frame()])
    adapter = OpenCVCameraAdapter(capture_factory=lambda index: capture, device_root=tmp_path)

    with camera_session(adapter) as stream:
        seen = sum(1 for _ in stream.frames())

    assert seen == 3
