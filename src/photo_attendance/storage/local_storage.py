from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import quote

from werkzeug.utils import safe_join

from ..core.exceptions import StorageError
from .base import ObjectStorage

logger = logging.getLogger(__name__)


class LocalObjectStorage(ObjectStorage):
    """Bucket stored as a directory tree; objects are public at ``/storage/<bucket>/<key>``.

    Uploads never overwrite an existing object.
    """

    def __init__(self, root: str | Path, bucket: str, *, public_base_url: str = ""):
        self.bucket = bucket
        self._root = Path(root)
        self._public_base_url = public_base_url.rstrip("/")

    @property
    def bucket_dir(self) -> Path:
        return self._root / self.bucket

    def path_for(self, key: str) -> Path:
        joined = safe_join(str(self.bucket_dir), key)
        if joined is None or not key or key.endswith("/"):
            raise StorageError(f"Invalid object key: {key!r}")
        return Path(joined)

    def upload(self, key: str, data: bytes, *, content_type: str) -> None:
        if not data:
            raise StorageError("Empty object payload")

        path = self.path_for(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "xb") as out_file:
                out_file.write(data)
        except FileExistsError as e:
            raise StorageError("The resource already exists") from e
        except OSError as e:
            raise StorageError(e.strerror or str(e)) from e

        logger.debug("stored %s/%s (%d bytes, %s)", self.bucket, key, len(data), content_type)

    def get_public_url(self, key: str) -> str:
        return f"{self._public_base_url}/storage/{quote(self.bucket)}/{quote(key)}"

    def exists(self, key: str) -> bool:
        try:
            return self.path_for(key).is_file()
        except StorageError:
            return False
