"""
vidhub.services._shared.ports
=============================

Collection of *ports* (hexagonal interfaces) that define the contracts
for token signing, access-token revocation and blob storage.

Modules
-------
- :mod:`token_provider`:
    Defines :class:`~.TokenProvider` and the tagged claim types
    :class:`~.AccessClaims` / :class:`~.RefreshClaims`.

- :mod:`denylist_store`:
    Defines :class:`~.TokenDenylistStore` and its in-memory implementation.

- :mod:`object_storage`:
    Defines :class:`~.ObjectStorage` used for avatars, covers, videos and
    thumbnails.

Concrete adapters (Redis, flask-jwt-extended, local filesystem) live under
``vidhub.infra``.
"""

from __future__ import annotations

from .denylist_store import InMemoryDenylistStore, TokenDenylistStore
from .object_storage import ObjectStorage, StoredObject, UploadedFile
from .token_provider import (
    AccessClaims,
    Claims,
    RefreshClaims,
    TokenKind,
    TokenProvider,
    TokenSubject,
)

__all__ = [
    "AccessClaims",
    "Claims",
    "InMemoryDenylistStore",
    "ObjectStorage",
    "RefreshClaims",
    "StoredObject",
    "TokenDenylistStore",
    "TokenKind",
    "TokenProvider",
    "TokenSubject",
    "UploadedFile",
]
