from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Protocol


@dataclass(frozen=True, slots=True)
class StoredObject:
    """
    Result of an upload.

    :ivar url: Public URL of the stored blob.
    :ivar size: Size in bytes.
    """

    url: str
    size: int


class UploadedFile(Protocol):
    """Minimal surface of an uploaded file (werkzeug ``FileStorage`` fits)."""

    filename: str | None
    stream: BinaryIO

    def save(self, dst: str) -> None: ...


class ObjectStorage(Protocol):
    """Opaque blob storage. The core never inspects blob contents."""

    def upload(self, file: UploadedFile, *, folder: str) -> StoredObject: ...

    def delete(self, url: str) -> bool: ...
