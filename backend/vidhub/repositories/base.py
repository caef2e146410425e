"""Generic repository base and query helpers (SQLAlchemy 2.x).

Repositories here are persistence-only:

- they never commit or roll back; services own the unit of work,
- sorting and filtering go through per-repository whitelists,
- pagination is deterministic (primary key appended as tiebreaker),
- updates are limited to an explicit ``_updatable_fields`` set.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, and_, func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from vidhub.core.extensions import db

E = TypeVar("E")


@dataclass(slots=True)
class Pagination:
    """Page request: 1-based ``page``, ``limit`` rows, public ``sort`` tokens."""

    page: int
    limit: int
    sort: list[str]


@dataclass(slots=True)
class Page(Generic[E]):
    """One page of rows plus the total row count of the unpaged query."""

    items: Sequence[E]
    total: int
    page: int
    limit: int


def parse_sort_tokens(raw: Iterable[str]) -> list[tuple[str, bool]]:
    """Turn ``["-created_at", "title"]`` into ``[("created_at", True), ("title", False)]``."""
    parsed: list[tuple[str, bool]] = []
    for token in raw:
        is_desc = token.startswith("-")
        name = (token[1:] if is_desc else token).strip()
        if name:
            parsed.append((name, is_desc))
    return parsed


def apply_sorting(
    stmt: Select[Any],
    sortable: Mapping[str, InstrumentedAttribute[Any]],
    tokens: Iterable[str],
    *,
    pk_attr: InstrumentedAttribute[Any] | None,
) -> Select[Any]:
    """
    Add ``ORDER BY`` clauses for whitelisted tokens.

    Unknown tokens are ignored. The primary key is always appended so that
    offsets stay stable between pages.
    """
    orders: list[Any] = []
    for name, is_desc in parse_sort_tokens(tokens):
        col = sortable.get(name)
        if isinstance(col, InstrumentedAttribute):
            orders.append(col.desc() if is_desc else col.asc())
    if orders:
        stmt = stmt.order_by(*orders)
    if pk_attr is not None:
        stmt = stmt.order_by(pk_attr.asc())
    return stmt


def paginate_select(
    session: Session,
    stmt: Select[Any],
    *,
    page: int,
    limit: int,
    with_total: bool = True,
) -> tuple[list[Any], int]:
    """
    Run ``stmt`` with ``LIMIT``/``OFFSET`` and optionally count all rows.

    :returns: ``(items, total)``; ``total`` is 0 when ``with_total`` is False.
    """
    page = max(int(page), 1)
    limit = max(int(limit), 1)

    total = 0
    if with_total:
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        total = int(session.execute(count_stmt).scalar_one())

    rows = session.execute(stmt.limit(limit).offset((page - 1) * limit)).scalars().all()
    return list(rows), total


class BaseRepository(Generic[E]):
    """
    Thin repository over a single mapped class.

    Subclasses set ``model`` and may override the whitelist hooks
    (``_sortable_fields``, ``_filterable_fields``, ``_updatable_fields``)
    and ``_default_eagerload``.
    """

    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        """Injected session, or the Flask-scoped one when none was given."""
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # ------------------------------ Hooks ------------------------------------

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        return stmt

    def _pk_attr(self) -> InstrumentedAttribute[Any] | None:
        return getattr(self.model, "id", None)

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {}

    def _filterable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {}

    def _updatable_fields(self) -> set[str]:
        return set()

    # ------------------------------ Internals --------------------------------

    def _apply_equality_filters(
        self, stmt: Select[Any], filters: Mapping[str, Any] | None
    ) -> Select[Any]:
        if not filters:
            return stmt
        allowed = self._filterable_fields()
        clauses = [allowed[k] == v for k, v in filters.items() if k in allowed]
        return stmt.where(and_(*clauses)) if clauses else stmt

    def _sanitize_update_fields(
        self, fields: Mapping[str, Any], *, strict: bool = True
    ) -> dict[str, Any]:
        """
        Keep only whitelisted keys.

        :raises ValueError: With ``strict`` when unknown keys are present.
        """
        allowed = self._updatable_fields()
        unknown = [k for k in fields if k not in allowed]
        if unknown and strict:
            raise ValueError(f"Unknown or non-updatable fields: {unknown}")
        return {k: v for k, v in fields.items() if k in allowed}

    # --------------------------------- CRUD ----------------------------------

    def add(self, instance: E) -> E:
        """Stage ``instance`` and flush so its primary key is populated."""
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        pk_attr = self._pk_attr()
        if pk_attr is None:
            raise RuntimeError(f"{type(self).__name__}.get needs a primary key attribute.")
        stmt = self._default_eagerload(select(self.model).where(pk_attr == entity_id))
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def get_for_update(self, entity_id: Any) -> E | None:
        """Like :meth:`get`, with ``SELECT ... FOR UPDATE`` where the dialect supports it."""
        pk_attr = self._pk_attr()
        if pk_attr is None:
            raise RuntimeError(f"{type(self).__name__}.get_for_update needs a primary key.")
        stmt = self._default_eagerload(
            select(self.model).where(pk_attr == entity_id)
        ).with_for_update()
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def exists(self, **filters: Any) -> bool:
        stmt = self._apply_equality_filters(select(func.count()).select_from(self.model), filters)
        return int(self.session.execute(stmt).scalar_one()) > 0

    def count(self, **filters: Any) -> int:
        stmt = self._apply_equality_filters(select(func.count()).select_from(self.model), filters)
        return int(self.session.execute(stmt).scalar_one())

    def delete(self, instance: E) -> None:
        self.session.delete(instance)
        self.flush()

    def flush(self) -> None:
        self.session.flush()

    # ----------------------------- Safe updates -------------------------------

    def assign_updates(
        self,
        instance: E,
        fields: Mapping[str, Any],
        *,
        strict: bool = True,
        flush: bool = True,
    ) -> E:
        """
        ``setattr`` each whitelisted key on ``instance``.

        Assignment goes through the model's ``@validates`` hooks.
        """
        for k, v in self._sanitize_update_fields(fields, strict=strict).items():
            setattr(instance, k, v)
        if flush:
            self.flush()
        return instance

    def update(self, instance: E, **fields: Any) -> E:
        return self.assign_updates(instance, fields, strict=True, flush=True)

    # ------------------------------- Listing ---------------------------------

    def paginate_stmt(self, stmt: Select[Any], pagination: Pagination) -> Page[E]:
        """Sort ``stmt`` by the whitelist and return one :class:`Page`."""
        stmt = apply_sorting(
            stmt, self._sortable_fields(), pagination.sort, pk_attr=self._pk_attr()
        )
        items, total = paginate_select(
            self.session, stmt, page=pagination.page, limit=pagination.limit
        )
        return Page(
            items=cast(list[E], items),
            total=total,
            page=pagination.page,
            limit=pagination.limit,
        )

    def paginate(
        self,
        pagination: Pagination,
        *,
        filters: Mapping[str, Any] | None = None,
    ) -> Page[E]:
        stmt = self._default_eagerload(
            self._apply_equality_filters(select(self.model), filters)
        )
        return self.paginate_stmt(stmt, pagination)
