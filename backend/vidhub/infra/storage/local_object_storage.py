# vidhub/infra/storage/local_object_storage.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from uuid import uuid4

from werkzeug.utils import secure_filename

from vidhub.services._shared.errors import InternalError, ValidationError
from vidhub.services._shared.ports.object_storage import StoredObject, UploadedFile

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LocalObjectStorage:
    """
    Object storage adapter writing blobs below a local directory.

    Files are stored as ``<root>/<folder>/<uuid>-<secure name>`` and exposed
    as ``<base_url>/<folder>/<uuid>-<secure name>``. Suitable for
    development and tests; production deployments can swap in a remote
    adapter implementing the same port.
    """

    root: str
    base_url: str

    def _path_for(self, url: str) -> str | None:
        prefix = self.base_url.rstrip("/") + "/"
        if not url.startswith(prefix):
            return None
        relative = url[len(prefix) :]
        path = os.path.abspath(os.path.join(self.root, relative))
        if not path.startswith(os.path.abspath(self.root) + os.sep):
            return None
        return path

    def upload(self, file: UploadedFile, *, folder: str) -> StoredObject:
        name = secure_filename(file.filename or "")
        if not name:
            raise ValidationError("Uploaded file needs a file name")
        stored_name = f"{uuid4().hex}-{name}"
        directory = os.path.join(self.root, secure_filename(folder))
        try:
            os.makedirs(directory, exist_ok=True)
            path = os.path.join(directory, stored_name)
            file.save(path)
            size = os.path.getsize(path)
        except OSError as exc:
            logger.error("Object upload failed", extra={"resource": folder}, exc_info=True)
            raise InternalError("Error while uploading file") from exc
        url = f"{self.base_url.rstrip('/')}/{secure_filename(folder)}/{stored_name}"
        logger.info("Object stored", extra={"resource": folder, "size": size})
        return StoredObject(url=url, size=size)

    def delete(self, url: str) -> bool:
        path = self._path_for(url)
        if path is None or not os.path.exists(path):
            return False
        try:
            os.remove(path)
        except OSError:
            logger.warning("Object delete failed", extra={"resource": url}, exc_info=True)
            return False
        return True
