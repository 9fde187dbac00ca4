import os
import tempfile
from pathlib import Path

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "photo_attendance_test"),
}

STORAGE_DIR = Path(os.getenv("STORAGE_DIR", Path(tempfile.gettempdir()) / "photo-attendance-test"))
STORAGE_BUCKET = "attendance-photos"
PUBLIC_BASE_URL = "http://testserver"

CAMERA_DEVICE = 0
JPEG_QUALITY = 92
MAX_UPLOAD_BYTES = 1024 * 1024

LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True
