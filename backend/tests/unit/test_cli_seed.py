"""Tests for the ``flask seed`` command group."""

from __future__ import annotations

from sqlalchemy import func, select
from storefront.models.product import Product
from storefront.models.user import Role, User
from storefront.seeds.catalog import PRODUCT_FIXTURES
from tests.factories.user import UserFactory


def _product_count(session) -> int:
    return session.execute(select(func.count()).select_from(Product)).scalar_one()


def test_seed_catalog_is_idempotent(app, session) -> None:
    runner = app.test_cli_runner()

    first = runner.invoke(args=["seed", "catalog"])
    second = runner.invoke(args=["seed", "catalog"])

    assert first.exit_code == 0, first.output
    assert second.exit_code == 0, second.output
    assert "Seed summary:" in first.output
    assert _product_count(session) == len(PRODUCT_FIXTURES)


def test_seed_admin_creates_account(app, session) -> None:
    result = app.test_cli_runner().invoke(
        args=["seed", "admin", "--email", "Boss@Example.com", "--name", "Boss", "--password", "hunter22"]
    )

    assert result.exit_code == 0, result.output
    assert "Admin created: boss@example.com" in result.output
    user = session.execute(select(User).where(User.email == "boss@example.com")).scalar_one()
    assert user.role == Role.ADMIN.value
    assert user.verify_password("hunter22")


def test_seed_admin_promotes_existing_customer(app, session) -> None:
    UserFactory(email="shopper@example.com")
    session.commit()

    result = app.test_cli_runner().invoke(
        args=["seed", "admin", "--email", "shopper@example.com", "--name", "Shopper", "--password", "secret1"]
    )

    assert result.exit_code == 0, result.output
    assert "Admin promoted" in result.output
    user = session.execute(select(User).where(User.email == "shopper@example.com")).scalar_one()
    assert user.role == Role.ADMIN.value


def test_seed_admin_rejects_short_password(app) -> None:
    result = app.test_cli_runner().invoke(
        args=["seed", "admin", "--email", "a@example.com", "--name", "A", "--password", "123"]
    )

    assert result.exit_code != 0
    assert "at least 6 characters" in result.output


def test_seed_refuses_production(app, monkeypatch) -> None:
    monkeypatch.setitem(app.config, "TESTING", False)
    monkeypatch.setitem(app.config, "DEBUG", False)

    result = app.test_cli_runner().invoke(args=["seed", "catalog"])

    assert result.exit_code != 0
    assert "restricted to non-production" in result.output
