"""Unit tests for CouponRepository."""

import pytest
from storefront.repositories.coupon import CouponRepository
from tests.factories.coupon import CouponFactory
from tests.factories.user import UserFactory


class TestCouponRepository:
    @pytest.fixture()
    def repo(self):
        return CouponRepository()

    def test_get_active_by_code_is_scoped_to_owner(self, repo, session):
        owner, other = UserFactory(), UserFactory()
        CouponFactory(owner=owner, code="MINE")
        session.commit()

        assert repo.get_active_by_code(code=" MINE ", user_id=owner.id) is not None
        assert repo.get_active_by_code(code="MINE", user_id=other.id) is None

    def test_inactive_coupons_are_ignored(self, repo, session):
        owner = UserFactory()
        CouponFactory(owner=owner, code="USED", is_active=False)
        session.commit()

        assert repo.get_active_by_code(code="USED", user_id=owner.id) is None
        assert repo.get_active_for_user(owner.id) is None

    def test_get_active_for_user_prefers_latest(self, repo, session):
        owner = UserFactory()
        CouponFactory(owner=owner, code="FIRST")
        CouponFactory(owner=owner, code="SECOND")
        session.commit()

        assert repo.get_active_for_user(owner.id).code == "SECOND"

    def test_delete_for_user(self, repo, session):
        owner, other = UserFactory(), UserFactory()
        CouponFactory.create_batch(2, owner=owner)
        CouponFactory(owner=other, code="KEEP")
        session.commit()

        assert repo.delete_for_user(owner.id) == 2
        assert repo.code_exists("KEEP")
