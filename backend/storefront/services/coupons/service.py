"""
CouponService
=============

Coupon lookup and validation. A coupon is usable while active and unexpired;
an expired coupon found during validation is deactivated on the spot.
"""

from __future__ import annotations

import logging
import secrets
import string
from datetime import timedelta

from storefront.models.coupon import Coupon
from storefront.services._shared.base import BaseService
from storefront.services._shared.errors import NotFoundError, ValidationError
from storefront.services.coupons.dto import CouponOut

log = logging.getLogger(__name__)

GIFT_CODE_PREFIX = "GIFT"
GIFT_CODE_ALPHABET = string.ascii_uppercase + string.digits


class CouponService(BaseService):
    """Application service for per-identity coupons."""

    def get_active(self, user_id: int) -> CouponOut | None:
        """Return the caller's active coupon, or ``None``."""
        with self.ro_uow() as uow:
            coupon = uow.coupons.get_active_for_user(user_id)
            return CouponOut.from_model(coupon) if coupon is not None else None

    def validate(self, user_id: int, code: str) -> CouponOut:
        """
        Check that ``code`` is an active, unexpired coupon of the caller.

        :raises ValidationError: Empty code.
        :raises NotFoundError: Unknown, inactive or expired coupon. An expired
            coupon is deactivated before the error is raised.
        """
        if not code or not code.strip():
            raise ValidationError("Coupon code is required")

        expired = False
        with self.rw_uow() as uow:
            coupon = uow.coupons.get_active_by_code(code=code, user_id=user_id)
            if coupon is None:
                raise NotFoundError(
                    "Coupon", code, "Coupon not found or not active for this user"
                )
            if coupon.is_expired(self.now_utc()):
                coupon.is_active = False
                expired = True
            out = CouponOut.from_model(coupon)

        if expired:
            log.info("Expired coupon deactivated", extra={"user_id": str(user_id)})
            raise NotFoundError("Coupon", code, "Coupon expired")
        return out

    # ------------------------------------------------------------------ #
    # Helpers shared with checkout (caller-owned unit of work)
    # ------------------------------------------------------------------ #

    def usable_coupon(self, uow, user_id: int, code: str | None) -> Coupon | None:
        """
        Return the caller's coupon for ``code`` if it can be applied now.

        Expired coupons are deactivated and ignored.
        """
        if not code:
            return None
        coupon = uow.coupons.get_active_by_code(code=code, user_id=user_id)
        if coupon is None:
            return None
        if coupon.is_expired(self.now_utc()):
            coupon.is_active = False
            log.info("Expired coupon ignored at checkout", extra={"user_id": str(user_id)})
            return None
        return coupon

    def gift_coupon(
        self, uow, user_id: int, *, percentage: int, valid_for: timedelta
    ) -> Coupon:
        """Replace the caller's coupons with a fresh ``GIFT`` coupon."""
        uow.coupons.delete_for_user(user_id)
        code = self._new_code()
        while uow.coupons.code_exists(code):
            code = self._new_code()
        coupon = Coupon(
            code=code,
            discount_percentage=percentage,
            expiration_date=self.now_utc() + valid_for,
            user_id=user_id,
            is_active=True,
        )
        uow.coupons.add(coupon)
        log.info("Gift coupon issued", extra={"user_id": str(user_id)})
        return coupon

    @staticmethod
    def _new_code() -> str:
        return GIFT_CODE_PREFIX + "".join(secrets.choice(GIFT_CODE_ALPHABET) for _ in range(6))
