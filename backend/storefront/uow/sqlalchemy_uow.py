"""Units of Work over the Flask-SQLAlchemy scoped session."""

from __future__ import annotations

from sqlalchemy import event
from sqlalchemy.orm import Session, scoped_session

from storefront.core.extensions import db
from storefront.repositories import (
    CouponRepository,
    OrderRepository,
    ProductRepository,
    UserRepository,
)
from storefront.uow.base import UnitOfWork


class SQLAlchemyRepositoryContainer:
    """Provide repository instances that share a SQLAlchemy session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session=self.session)
        self.products = ProductRepository(session=self.session)
        self.coupons = CouponRepository(session=self.session)
        self.orders = OrderRepository(session=self.session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """Commit on clean exit, roll back when the block raises."""

    def __init__(self) -> None:
        super().__init__(session=db.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            try:
                self.commit()
            except Exception:
                self.rollback()
                raise
        else:
            self.rollback()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only Unit of Work backed by the Flask-scoped SQLAlchemy session.

    This UoW:
    - Installs a ``before_flush`` guard rejecting new/dirty/deleted objects.
    - Disallows ``commit()``.
    - Leaves the surrounding transaction untouched on exit, so entities loaded
      here stay usable by the caller (e.g. the Auth Gate's identity).
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)
        self._listening = False

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        event.listen(self._target(), "before_flush", self._before_flush)
        self._listening = True
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._listening:
            event.remove(self._target(), "before_flush", self._before_flush)
            self._listening = False
        if exc_type is not None:
            self.rollback()

    def _target(self) -> Session:
        # Guard only this thread's session, not the whole sessionmaker
        if isinstance(self.session, scoped_session):
            return self.session()
        return self.session

    @staticmethod
    def _before_flush(session, flush_context, instances) -> None:
        if session.new or session.dirty or session.deleted:
            raise RuntimeError(
                "Read-only UnitOfWork: ORM flush blocked (new/dirty/deleted objects present)."
            )

    def commit(self) -> None:
        """
        Disallow commit in read-only Unit of Work.

        :raises RuntimeError: always, to prevent accidental writes.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()
