import pytest
from storefront.models.user import User
from storefront.uow import (
    SQLAlchemyReadOnlyUnitOfWork as ROuow,
)
from storefront.uow import (
    SQLAlchemyUnitOfWork as RWuow,
)
from tests.factories.user import UserFactory


class TestSQLAlchemyReadOnlyUnitOfWork:
    def test_blocks_orm_flush_writes(self, app, session):
        """
        Ensure that attempting to flush ORM changes inside the RO UoW raises.
        """
        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            user = UserFactory.build()  # not persisted
            uow.session.add(user)
            uow.session.flush()
        session.rollback()

    def test_allows_reads(self, app, session):
        """
        Read operations should work normally within RO UoW.
        """
        with RWuow() as uow:
            uow.session.add(UserFactory.build())

        with ROuow() as uow:
            assert uow.users.count() >= 1

    def test_disallows_commit(self, app, session):
        """
        RO UoW must reject commit().
        """
        with ROuow() as uow, pytest.raises(RuntimeError, match="does not allow commit"):
            uow.commit()

    def test_mutation_is_not_persisted(self, app, session):
        with RWuow() as uow:
            user = UserFactory.build()
            uow.session.add(user)
            uow.session.flush()
            user_id = user.id

        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            u = uow.session.get(User, user_id)
            original_email = u.email
            u.email = "mutated-in-ro@example.com"
            uow.session.flush()
        session.rollback()

        with RWuow() as uow:
            persisted = uow.session.get(User, user_id)
            assert persisted.email == original_email

    def test_guard_is_removed_on_exit(self, app, session):
        with ROuow():
            pass

        with RWuow() as uow:
            uow.session.add(UserFactory.build())
            uow.session.flush()


class TestSQLAlchemyUnitOfWork:
    def test_rolls_back_on_error(self, app, session):
        with pytest.raises(LookupError), RWuow() as uow:
            uow.session.add(UserFactory.build(email="ghost@example.com"))
            uow.session.flush()
            raise LookupError("boom")

        with ROuow() as uow:
            assert uow.users.get_by_email("ghost@example.com") is None
