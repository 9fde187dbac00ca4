"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

PERSONAL_HISTORY_LIMIT = 10
ADMIN_RECORDS_LIMIT = 50

DEFAULT_PHOTO_BUCKET = "attendance-photos"
DEFAULT_CHECKIN_STATUS = "present"
DEFAULT_JPEG_QUALITY = 92

CAMERA_IDEAL_WIDTH = 1280
CAMERA_IDEAL_HEIGHT = 720

MIN_PASSWORD_LENGTH = 6
SESSION_DAYS = 7

# Request body cap for check-in uploads (base64 data URL inside JSON)
MAX_UPLOAD_BYTES = 10 * 1024 * 1024
