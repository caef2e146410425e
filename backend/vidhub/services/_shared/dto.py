# comments in English; reST docstrings strict
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class PaginationIn:
    """
    Input pagination contract.

    :param page: 1-based page number.
    :type page: int
    :param limit: Page size (> 0).
    :type limit: int
    :param sort: Sort tokens like ``["-created_at", "title"]``.
    :type sort: Sequence[str]
    """

    page: int = 1
    limit: int = 10
    sort: Sequence[str] = ()


@dataclass(frozen=True, slots=True)
class PageMeta:
    """
    Output pagination metadata.

    :param page: Current page (1-based).
    :param limit: Page size.
    :param total: Total rows available.
    :param has_prev: Whether a previous page exists.
    :param has_next: Whether a next page exists.
    """

    page: int
    limit: int
    total: int
    has_prev: bool
    has_next: bool

    @classmethod
    def build(cls, *, page: int, limit: int, total: int) -> PageMeta:
        return cls(
            page=page,
            limit=limit,
            total=total,
            has_prev=page > 1,
            has_next=page * limit < total,
        )


@dataclass(frozen=True, slots=True)
class PageOut(Generic[T]):
    """A page of output DTOs plus its metadata."""

    items: list[T]
    meta: PageMeta


@dataclass(frozen=True, slots=True)
class UserSummaryOut:
    """
    Public projection of a user embedded in other resources.

    :param id: User identifier.
    :param username: Handle.
    :param full_name: Display name.
    :param avatar_url: Avatar URL, if any.
    """

    id: int
    username: str
    full_name: str
    avatar_url: str | None
