from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import ModuleType

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .capture.camera import CameraAdapter, OpenCVCameraAdapter
from .checkin.service import CheckInService
from .core.constants import DEFAULT_JPEG_QUALITY, DEFAULT_PHOTO_BUCKET
from .database.connection import DBConfig, DatabaseConnection
from .roles.mysql_role_repository import MySQLRoleRepository
from .roles.repository import RoleRepository
from .roles.service import RoleService
from .storage.base import ObjectStorage
from .storage.local_storage import LocalObjectStorage
from .users.mysql_profile_repository import MySQLProfileRepository
from .users.repository import ProfileRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    profiles_repo: ProfileRepository
    roles_repo: RoleRepository
    attendance_repo: AttendanceRepository
    storage: ObjectStorage
    camera: CameraAdapter

    auth_service: AuthService
    role_service: RoleService
    attendance_service: AttendanceService
    checkin_service: CheckInService

    camera_device: int = 0
    jpeg_quality: int = DEFAULT_JPEG_QUALITY


def wire_container(
    *,
    profiles_repo: ProfileRepository,
    roles_repo: RoleRepository,
    attendance_repo: AttendanceRepository,
    storage: ObjectStorage,
    camera: CameraAdapter,
    camera_device: int = 0,
    jpeg_quality: int = DEFAULT_JPEG_QUALITY,
) -> Container:
    attendance_service = AttendanceService(attendance_repo, profiles_repo)
    return Container(
        profiles_repo=profiles_repo,
        roles_repo=roles_repo,
        attendance_repo=attendance_repo,
        storage=storage,
        camera=camera,
        auth_service=AuthService(profiles_repo, roles_repo),
        role_service=RoleService(roles_repo, profiles_repo),
        attendance_service=attendance_service,
        checkin_service=CheckInService(storage, attendance_repo, attendance_service, jpeg_quality=jpeg_quality),
        camera_device=int(camera_device),
        jpeg_quality=int(jpeg_quality),
    )


def build_container(settings: ModuleType) -> Container:
    """Production wiring: MySQL repositories, local bucket storage, OpenCV camera."""
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))

    storage = LocalObjectStorage(
        Path(getattr(settings, "STORAGE_DIR")),
        getattr(settings, "STORAGE_BUCKET", DEFAULT_PHOTO_BUCKET),
        public_base_url=getattr(settings, "PUBLIC_BASE_URL", ""),
    )

    return wire_container(
        profiles_repo=MySQLProfileRepository(conn),
        roles_repo=MySQLRoleRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        storage=storage,
        camera=OpenCVCameraAdapter(),
        camera_device=int(getattr(settings, "CAMERA_DEVICE", 0)),
        jpeg_quality=int(getattr(settings, "JPEG_QUALITY", DEFAULT_JPEG_QUALITY)),
    )
