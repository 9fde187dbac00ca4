from __future__ import annotations

from typing import Protocol


class ObjectStorage(Protocol):
    """Binary blob storage scoped to one bucket.

    ``upload`` raises ``StorageError`` with the backing message on failure.
    """

    bucket: str

    def upload(self, key: str, data: bytes, *, content_type: str) -> None:
        raise NotImplementedError

    def get_public_url(self, key: str) -> str:
        raise NotImplementedError
