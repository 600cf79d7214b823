"""Factory Boy definition for :class:`storefront.models.coupon.Coupon`."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import factory
from storefront.models.coupon import Coupon
from tests.factories import BaseFactory
from tests.factories.user import UserFactory


class CouponFactory(BaseFactory):
    class Meta:
        model = Coupon

    id = None
    code = factory.Sequence(lambda n: f"SAVE{n:04d}")
    discount_percentage = 10
    expiration_date = factory.LazyFunction(lambda: datetime.now(UTC) + timedelta(days=30))
    is_active = True
    user_id = factory.SelfAttribute("owner.id")

    class Params:
        owner = factory.SubFactory(UserFactory)
