"""Transaction boundary contract shared by the read-write and read-only scopes."""

from __future__ import annotations

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """
    One use case, one transaction.

    Implementations hand out repositories (``users``, ``videos``,
    ``subscriptions``, ``likes`` ...) bound to a single session and decide
    on exit whether that session is committed or rolled back.
    """

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...

    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...
