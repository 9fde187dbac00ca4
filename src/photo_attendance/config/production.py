import os
from pathlib import Path

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

# No credential defaults: /api/status reports setup_required until these are set.
DB_CONFIG = {
    "host": os.getenv("DB_HOST", ""),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", ""),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", ""),
}

STORAGE_DIR = Path(os.getenv("STORAGE_DIR", "/var/lib/photo-attendance/storage"))
STORAGE_BUCKET = os.getenv("STORAGE_BUCKET", "attendance-photos")
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", "")

CAMERA_DEVICE = int(os.getenv("CAMERA_DEVICE", "0"))
JPEG_QUALITY = int(os.getenv("JPEG_QUALITY", "92"))
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEBUG = False
