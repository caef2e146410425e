"""Ownership guard shared by every mutating operation on owned resources."""

from __future__ import annotations

import logging
from typing import Protocol, TypeVar

from vidhub.services._shared.errors import AuthorizationError, NotFoundError

logger = logging.getLogger(__name__)


class OwnedResource(Protocol):
    """Any resource exposing the id of the identity that owns it."""

    @property
    def owner_id(self) -> int: ...


R = TypeVar("R", bound=OwnedResource)


def is_owner(*, actor_id: int | None, owner_id: int | None) -> bool:
    """Return True if the actor owns the resource."""
    return actor_id is not None and owner_id is not None and int(actor_id) == int(owner_id)


def require_ownership(
    resource: R | None,
    actor_id: int | None,
    *,
    entity: str,
    key: int | str,
    msg: str | None = None,
) -> R:
    """
    Ensure ``actor_id`` owns ``resource`` before it is mutated.

    Existence is checked strictly before ownership: a missing resource is a
    :class:`NotFoundError` even for callers who would not own it.

    :param resource: Loaded resource or ``None`` when the lookup missed.
    :param actor_id: Identity id taken from the verified access token.
    :param entity: Entity name used in error messages ("Video", ...).
    :param key: Lookup key used in the ``NotFoundError``.
    :param msg: Optional custom forbidden message.
    :returns: The resource, narrowed to non-``None``.
    :raises NotFoundError: If ``resource`` is ``None``.
    :raises AuthorizationError: If the actor is not the owner.
    """
    if resource is None:
        raise NotFoundError(entity, key)
    if not is_owner(actor_id=actor_id, owner_id=resource.owner_id):
        logger.warning(
            "Ownership check failed",
            extra={"actor_id": actor_id, "resource": entity, "resource_id": key},
        )
        raise AuthorizationError(
            msg or f"You do not have permission to modify this {entity.lower()}"
        )
    return resource
