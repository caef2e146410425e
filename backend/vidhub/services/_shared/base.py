# vidhub/services/_shared/base.py
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TypeVar

from vidhub.repositories.base import Pagination
from vidhub.services._shared.dto import PaginationIn, UserSummaryOut
from vidhub.services._shared.policies.ownership import OwnedResource, require_ownership
from vidhub.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)

R = TypeVar("R", bound=OwnedResource)


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data (auth, request ids).

    :param actor_id: Authenticated user identifier, taken from the access token.
    :param request_id: Correlation id for logging/tracing.
    """

    actor_id: int | None = None
    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Offer shared validation helpers (pagination/sorting).
    * Route ownership checks through the single ownership guard.
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Services must never touch the global session; always use a Unit of Work.
    - Services return DTOs; ORM instances never leave a unit of work.
    """

    DEFAULT_READ_ISOLATION = "READ COMMITTED"

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        """
        Initialize the base service.

        :param ctx: Optional request-scoped context (auth, tracing).
        :type ctx: ServiceContext | None
        """
        self.ctx = ctx or ServiceContext()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    def ro_uow(
        self, *, isolation: str | None = None, enforce_db_readonly: bool = True
    ) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :param isolation: Transaction isolation level (e.g. "READ COMMITTED").
        :type isolation: str | None
        :param enforce_db_readonly: Apply `SET TRANSACTION READ ONLY` when supported.
        :type enforce_db_readonly: bool
        :returns: Read-only UoW instance.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork(
            isolation_level=isolation or self.DEFAULT_READ_ISOLATION,
            enforce_db_readonly=enforce_db_readonly,
        )

    # ----------------------- Validation utilities ---------------------------

    def ensure_pagination(
        self, *, page: int, limit: int, sort: Iterable[str] | None = None
    ) -> Pagination:
        """
        Build a Pagination value object with basic clamping.

        :param page: 1-based page number.
        :param limit: Page size.
        :param sort: Sort tokens like ["-created_at", "title"].
        :returns: Pagination instance.
        :rtype: Pagination
        """
        page = max(1, int(page))
        limit = max(1, int(limit))
        return Pagination(page=page, limit=limit, sort=list(sort or []))

    def pagination_from(self, dto: PaginationIn) -> Pagination:
        return self.ensure_pagination(page=dto.page, limit=dto.limit, sort=dto.sort)

    # --------------------------- AuthZ --------------------------------

    def require_actor(self) -> int:
        """
        Return the authenticated actor id.

        :raises AuthenticationError: When the service runs without an actor.
        """
        from vidhub.services._shared.errors import AuthenticationError

        if self.ctx.actor_id is None:
            raise AuthenticationError()
        return self.ctx.actor_id

    def ensure_owner(
        self,
        resource: R | None,
        *,
        entity: str,
        key: int | str,
        msg: str | None = None,
    ) -> R:
        """
        Ensure the current actor owns ``resource``.

        :param resource: Loaded resource or ``None``.
        :param entity: Entity name for error messages.
        :param key: Lookup key for the ``NotFoundError``.
        :param msg: Optional custom error message.
        :returns: The owned resource.
        :raises NotFoundError: If the resource is missing.
        :raises AuthorizationError: If actor is not the owner.
        """
        return require_ownership(resource, self.ctx.actor_id, entity=entity, key=key, msg=msg)

    # --------------------------- Converters ---------------------------

    @staticmethod
    def user_summary(user) -> UserSummaryOut:
        return UserSummaryOut(
            id=user.id,
            username=user.username,
            full_name=user.full_name,
            avatar_url=user.avatar_url,
        )
