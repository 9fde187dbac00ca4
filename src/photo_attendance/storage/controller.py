from __future__ import annotations

from flask import Flask, abort, send_from_directory

from ..container import Container
from .local_storage import LocalObjectStorage


def register(app: Flask, container: Container) -> None:
    storage = container.storage
    if not isinstance(storage, LocalObjectStorage):
        # Remote storage serves its own public URLs.
        return

    @app.route("/storage/<bucket>/<path:key>", methods=["GET"], endpoint="storage_object")
    def storage_object(bucket: str, key: str):
        if bucket != storage.bucket or not storage.exists(key):
            abort(404)
        return send_from_directory(storage.bucket_dir, key)
