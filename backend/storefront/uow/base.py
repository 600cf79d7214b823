"""Transaction boundary shared by the application services."""

from __future__ import annotations

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """
    One use-case, one transaction.

    Implementations expose repositories (``users``, ``products``, ``coupons``,
    ``orders``) bound to a single session and decide on exit whether the
    staged changes are kept.
    """

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...

    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...

    @abstractmethod
    def commit(self) -> None: ...

    @abstractmethod
    def rollback(self) -> None: ...
