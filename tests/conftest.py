from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

import numpy as np
import pytest
from werkzeug.security import generate_password_hash

from photo_attendance.attendance.model import AttendanceRecord, AttendanceRecordWithProfile
from photo_attendance.capture.camera import CameraConstraints, CameraStream
from photo_attendance.core.enums import AppRole
from photo_attendance.core.exceptions import BackendError, DeviceUnavailable, StorageError
from photo_attendance.roles.model import RoleAssignment
from photo_attendance.users.model import Profile


class InMemoryProfiles:
    def __init__(self):
        self._by_id: dict[str, Profile] = {}
        self._hashes: dict[str, str] = {}
        self._id = 0
        self.fail_with: Optional[str] = None

    def _check(self):
        if self.fail_with:
            raise BackendError(self.fail_with)

    def add(self, email: str, *, full_name: str | None = None, password: str = "secret123", created_at=None) -> Profile:
        self._id += 1
        ts = created_at or datetime(2026, 1, 1, 9, 0, 0)
        p = Profile(
            id=f"user-{self._id}",
            email=email,
            full_name=full_name,
            avatar_url=None,
            created_at=ts,
            updated_at=ts,
        )
        self._by_id[p.id] = p
        self._hashes[p.id] = generate_password_hash(password)
        return p

    def get_by_id(self, user_id: str) -> Optional[Profile]:
        self._check()
        return self._by_id.get(user_id)

    def get_by_email(self, email: str) -> Optional[Profile]:
        self._check()
        return next((p for p in self._by_id.values() if p.email == email), None)

    def get_password_hash(self, user_id: str) -> Optional[str]:
        self._check()
        return self._hashes.get(user_id)

    def create_profile(self, *, email: str, full_name: Optional[str], password_hash: str) -> Profile:
        self._check()
        p = self.add(email, full_name=full_name)
        self._hashes[p.id] = password_hash
        return p

    def list_all(self):
        self._check()
        return list(self._by_id.values())

    def count_all(self) -> int:
        self._check()
        return len(self._by_id)


class InMemoryRoles:
    def __init__(self):
        self._items: list[RoleAssignment] = []
        self._id = 0
        self.fail_with: Optional[str] = None
        self.updates: list[tuple[str, AppRole]] = []

    def _check(self):
        if self.fail_with:
            raise BackendError(self.fail_with)

    def list_for_user(self, user_id: str):
        self._check()
        return [a for a in self._items if a.user_id == user_id]

    def list_all(self):
        self._check()
        return list(self._items)

    def create_assignment(self, *, user_id: str, role: AppRole) -> RoleAssignment:
        self._check()
        self._id += 1
        a = RoleAssignment(id=f"role-{self._id}", user_id=user_id, role=role, created_at=datetime(2026, 1, 1, 9, 0, 0))
        self._items.append(a)
        return a

    def update_role(self, *, user_id: str, role: AppRole) -> int:
        self._check()
        self.updates.append((user_id, role))
        touched = 0
        for i, a in enumerate(self._items):
            if a.user_id == user_id:
                self._items[i] = RoleAssignment(id=a.id, user_id=a.user_id, role=role, created_at=a.created_at)
                touched += 1
        return touched


class InMemoryAttendance:
    def __init__(self, profiles: InMemoryProfiles | None = None):
        self._profiles = profiles
        self.records: list[AttendanceRecord] = []
        self._id = 0
        self.fail_with: Optional[str] = None
        self.calls = 0

    def _check(self):
        self.calls += 1
        if self.fail_with:
            raise BackendError(self.fail_with)

    def _sorted(self):
        return sorted(self.records, key=lambda r: r.check_in_time, reverse=True)

    def list_for_user(self, user_id: str, limit: int):
        self._check()
        return [r for r in self._sorted() if r.user_id == user_id][:limit]

    def list_recent_with_profiles(self, limit: int):
        self._check()
        out = []
        for r in self._sorted()[:limit]:
            profile = self._profiles.get_by_id(r.user_id) if self._profiles else None
            out.append(AttendanceRecordWithProfile(record=r, profile=profile))
        return out

    def create_record(self, *, user_id, check_in_time, photo_url, status, notes=None, location=None):
        self._check()
        self._id += 1
        rec = AttendanceRecord(
            id=f"rec-{self._id}",
            user_id=user_id,
            check_in_time=check_in_time,
            photo_url=photo_url,
            status=status,
            created_at=check_in_time,
            notes=notes,
            location=location,
        )
        self.records.append(rec)
        return rec

    def count_all(self) -> int:
        self._check()
        return len(self.records)

    def count_since(self, since: datetime) -> int:
        self._check()
        return sum(1 for r in self.records if r.check_in_time >= since)


class InMemoryStorage:
    def __init__(self, bucket: str = "attendance-photos"):
        self.bucket = bucket
        self.objects: dict[str, bytes] = {}
        self.fail_with: Optional[str] = None
        self.calls = 0

    def upload(self, key: str, data: bytes, *, content_type: str) -> None:
        self.calls += 1
        if self.fail_with:
            raise StorageError(self.fail_with)
        if key in self.objects:
            raise StorageError("The resource already exists")
        self.objects[key] = data

    def get_public_url(self, key: str) -> str:
        return f"https://cdn.example.test/storage/{self.bucket}/{key}"


class FakeCapture:
    """Stands in for cv2.VideoCapture."""

    def __init__(self, frames=None, *, opened: bool = True):
        self._frames = list(frames or [])
        self.opened = opened
        self.released = 0
        self.props: dict[int, float] = {}

    def isOpened(self) -> bool:
        return self.opened

    def set(self, prop: int, value) -> bool:
        self.props[prop] = value
        return True

    def read(self):
        if not self._frames:
            return False, None
        frame = self._frames.pop(0)
        return frame is not None, frame

    def release(self) -> None:
        self.released += 1
        self.opened = False


class FakeCameraAdapter:
    def __init__(self, frames=None, *, error: Exception | None = None):
        self.frames = frames
        self.error = error
        self.captures: list[FakeCapture] = []

    def start(self, constraints: CameraConstraints = CameraConstraints()) -> CameraStream:
        if self.error:
            raise self.error
        capture = FakeCapture(self.frames if self.frames is not None else [frame(), frame()])
        self.captures.append(capture)
        return CameraStream(capture, constraints)


def frame(width: int = 64, height: int = 48, channels: int = 3):
    img = np.zeros((height, width, channels), dtype=np.uint8)
    img[:, : width // 2] = 200
    return img


@pytest.fixture
def fixed_now():
    return datetime(2026, 2, 2, 8, 15, 0)


@pytest.fixture
def profiles():
    return InMemoryProfiles()


@pytest.fixture
def roles():
    return InMemoryRoles()


@pytest.fixture
def attendance(profiles):
    return InMemoryAttendance(profiles)


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def camera():
    return FakeCameraAdapter()


@pytest.fixture
def make_frame():
    return frame


@pytest.fixture
def make_capture():
    return FakeCapture


@pytest.fixture
def make_camera():
    return FakeCameraAdapter


@pytest.fixture
def unavailable_camera():
    return FakeCameraAdapter(error=DeviceUnavailable())


@pytest.fixture
def seeded(profiles, roles, attendance, fixed_now):
    """Two profiles (A admin, B user); three check-ins by B, two today and one yesterday."""
    a = profiles.add("a@example.com", full_name="Admin A")
    b = profiles.add("b@example.com", full_name="User B")
    roles.create_assignment(user_id=a.id, role=AppRole.ADMIN)
    roles.create_assignment(user_id=b.id, role=AppRole.USER)

    yesterday = fixed_now - timedelta(days=1)
    attendance.create_record(user_id=b.id, check_in_time=yesterday.replace(hour=17), photo_url="u/1.jpg", status="present")
    attendance.create_record(user_id=b.id, check_in_time=fixed_now.replace(hour=7, minute=55), photo_url="u/2.jpg", status="present")
    attendance.create_record(user_id=b.id, check_in_time=fixed_now, photo_url="u/3.jpg", status="present", notes="on site")
    attendance.calls = 0
    return a, b


@pytest.fixture
def container(profiles, roles, attendance, storage, camera):
    from photo_attendance.container import wire_container

    return wire_container(
        profiles_repo=profiles,
        roles_repo=roles,
        attendance_repo=attendance,
        storage=storage,
        camera=camera,
    )


@pytest.fixture
def app(container):
    from photo_attendance.main import create_app

    app = create_app(container=container, settings_module="photo_attendance.config.testing")
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login_as(client):
    def _login(profile: Profile, role: AppRole = AppRole.USER):
        with client.session_transaction() as sess:
            sess["user_id"] = profile.id
            sess["email"] = profile.email
            sess["role"] = role.value
        return client

    return _login
