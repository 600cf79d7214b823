"""Coupon repository."""

from __future__ import annotations

from typing import cast

from sqlalchemy import delete, select

from storefront.models.coupon import Coupon
from storefront.repositories.base import BaseRepository


class CouponRepository(BaseRepository[Coupon]):
    """Persistence-only repository for :class:`Coupon`."""

    model = Coupon

    def get_active_for_user(self, user_id: int) -> Coupon | None:
        """Return the caller's active coupon, if any."""
        stmt = (
            select(Coupon)
            .where(Coupon.user_id == user_id, Coupon.is_active.is_(True))
            .order_by(Coupon.id.desc())
        )
        return cast(Coupon | None, self.session.execute(stmt).scalars().first())

    def get_active_by_code(self, *, code: str, user_id: int) -> Coupon | None:
        """Look up an active coupon by code, scoped to its owner."""
        stmt = select(Coupon).where(
            Coupon.code == code.strip(),
            Coupon.user_id == user_id,
            Coupon.is_active.is_(True),
        )
        return cast(Coupon | None, self.session.execute(stmt).scalars().first())

    def delete_for_user(self, user_id: int) -> int:
        """Remove every coupon owned by ``user_id``; returns the row count."""
        result = self.session.execute(delete(Coupon).where(Coupon.user_id == user_id))
        return int(result.rowcount or 0)

    def code_exists(self, code: str) -> bool:
        stmt = select(Coupon.id).where(Coupon.code == code)
        return bool(self.session.execute(stmt).first())
