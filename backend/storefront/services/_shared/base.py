"""Common plumbing for the storefront application services."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, datetime

from storefront.repositories.base import Pagination
from storefront.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


@dataclass(slots=True)
class ServiceContext:
    """
    Request facts a service may log or authorize against.

    :param actor_id: Identity performing the call, if authenticated.
    :param request_id: Correlation id of the HTTP request.
    """

    actor_id: int | None = None
    request_id: str | None = None


class BaseService:
    """
    Parent of every application service.

    Services orchestrate repositories inside a Unit of Work and talk to
    external stores through ports. They never import Flask and never use the
    scoped session directly.
    """

    MAX_PAGE_SIZE = 100

    def __init__(
        self,
        *,
        ctx: ServiceContext | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """
        :param ctx: Request context; an empty one when omitted.
        :param clock: Returns the current aware UTC time. Tests pin it.
        """
        self.ctx = ctx or ServiceContext()
        self._clock = clock or (lambda: datetime.now(UTC))

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """Unit of Work that commits on success."""
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """Unit of Work that refuses to flush."""
        return SQLAlchemyReadOnlyUnitOfWork()

    def ensure_pagination(
        self, *, page: int, limit: int, sort: Iterable[str] | None = None
    ) -> Pagination:
        """Clamp ``page`` to >= 1 and ``limit`` to ``1..MAX_PAGE_SIZE``."""
        return Pagination(
            page=max(1, int(page)),
            limit=min(max(1, int(limit)), self.MAX_PAGE_SIZE),
            sort=list(sort or []),
        )

    def now_utc(self) -> datetime:
        return self._clock()
