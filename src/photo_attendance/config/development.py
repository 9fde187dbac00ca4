import os
from pathlib import Path

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "photo_attendance"),
}

# Object storage (local bucket directory served under /storage/<bucket>/...)
STORAGE_DIR = Path(os.getenv("STORAGE_DIR", Path.cwd() / "storage"))
STORAGE_BUCKET = os.getenv("STORAGE_BUCKET", "attendance-photos")
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "http://localhost:5000")

# Kiosk camera
CAMERA_DEVICE = int(os.getenv("CAMERA_DEVICE", "0"))
JPEG_QUALITY = int(os.getenv("JPEG_QUALITY", "92"))
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEBUG = True
