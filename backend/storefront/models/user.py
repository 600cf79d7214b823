"""Identity and cart-line models."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Any

from sqlalchemy import (
    CheckConstraint,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates
from werkzeug.security import check_password_hash, generate_password_hash

from storefront.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .product import Product


class Role(str, enum.Enum):
    """Closed set of roles an identity can hold."""

    CUSTOMER = "customer"
    ADMIN = "admin"


UserRole = Enum(*[r.value for r in Role], name="user_role")


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Authenticated identity owning a cart.

    Fields
    ------
    name : str
        Display name.
    email : str
        Login email. Stored normalized (lowercase, trimmed); unique.
    password_hash : str
        Hashed password (write-only setter via ``password``).
    role : str
        ``customer`` (default) or ``admin``. No self-service path changes it.
    cart_items : list[CartLine]
        At most one line per product, ordered by insertion.
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(254), nullable=False)
    role: Mapped[str] = mapped_column(UserRole, nullable=False, default=Role.CUSTOMER.value)

    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        Index("ix_users_email", "email"),
    )

    cart_items: Mapped[list[CartLine]] = relationship(
        "CartLine",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="CartLine.id",
        lazy="selectin",
    )

    # -------------------- Password API --------------------
    @property
    def password(self) -> Any:  # pragma: no cover - explicit write-only contract
        """
        Disallow reading passwords.

        :raises AttributeError: Always, to ensure password is write-only.
        """
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        """
        Hash and set the password.

        :param raw: Plain text password to hash.
        :type raw: str
        """
        if not isinstance(raw, str) or not raw:
            raise ValueError("Password must be a non-empty string.")
        self.password_hash = generate_password_hash(raw)

    def verify_password(self, raw: str) -> bool:
        """
        Verify a password against the stored hash.

        :param raw: Plain text password candidate.
        :returns: ``True`` if it matches; otherwise ``False``.
        """
        if not self.password_hash:
            return False
        return bool(check_password_hash(self.password_hash, raw))

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    # -------------------- Cart helpers --------------------
    def find_cart_line(self, product_id: int) -> CartLine | None:
        """Return the cart line for ``product_id`` (lines are keyed by product)."""
        for line in self.cart_items:
            if line.product_id == product_id:
                return line
        return None

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and validate email.

        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip().lower()
        # Minimal sanity check; full validation happens at API layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("name")
    def _normalize_name(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Name is required.")
        return value.strip()

    @validates("role")
    def _validate_role(self, key: str, value: str) -> str:
        return Role(value).value


class CartLine(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    One product in an identity's cart.

    Invariants: one line per ``(user_id, product_id)`` and ``quantity >= 1``;
    a line whose quantity would drop to 0 is deleted instead.
    """

    __tablename__ = "cart_lines"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="uq_cart_lines_user_product"),
        CheckConstraint("quantity >= 1", name="quantity_positive"),
        Index("ix_cart_lines_user", "user_id"),
    )

    user: Mapped[User] = relationship("User", back_populates="cart_items")
    product: Mapped[Product] = relationship("Product", lazy="selectin")

    @validates("quantity")
    def _validate_quantity(self, key: str, value: int) -> int:
        if value is None or int(value) < 1:
            raise ValueError("Cart line quantity must be >= 1.")
        return int(value)
