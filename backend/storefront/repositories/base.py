"""Shared persistence helpers for the storefront repositories.

Repositories only read and stage rows; they never commit. A Unit of Work owns
the transaction and hands the same session to every repository it exposes.

Listing helpers accept *public* keys (``"category"``, ``"-created_at"``) and
resolve them through per-repository whitelists, so request input never reaches
``ORDER BY`` or ``WHERE`` unchecked.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from storefront.core.extensions import db

E = TypeVar("E")

Column = InstrumentedAttribute[Any]


@dataclass(slots=True)
class Pagination:
    """Page request.

    :param page: 1-based page number.
    :param limit: Page size.
    :param sort: Public sort keys, ``-`` prefix for descending.
    """

    page: int
    limit: int
    sort: list[str] = field(default_factory=list)

    @property
    def offset(self) -> int:
        return (max(self.page, 1) - 1) * max(self.limit, 1)


@dataclass(slots=True)
class Page(Generic[E]):
    """One page of rows plus the unpaginated total."""

    items: Sequence[E]
    total: int
    page: int
    limit: int


def sort_keys(raw: Iterable[str]) -> list[tuple[str, bool]]:
    """Split ``["-created_at", "name"]`` into ``[("created_at", True), ("name", False)]``."""
    keys: list[tuple[str, bool]] = []
    for token in raw:
        name = token.lstrip("-").strip()
        if name:
            keys.append((name, token.startswith("-")))
    return keys


class BaseRepository(Generic[E]):
    """Persistence-only repository bound to one mapped model.

    Subclasses set ``model`` and may widen ``_sortable_fields`` and
    ``_filterable_fields``.
    """

    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        """
        :param session: Session of the enclosing Unit of Work; the
            Flask-scoped session is used when omitted.
        """
        self._session = session

    @property
    def session(self) -> Session:
        return self._session if self._session is not None else cast(Session, db.session)

    # Whitelists ------------------------------------------------------------

    def _sortable_fields(self) -> Mapping[str, Column]:
        return {}

    def _filterable_fields(self) -> Mapping[str, Column]:
        return {}

    # Statement builders -----------------------------------------------------

    def _select(self, filters: Mapping[str, Any] | None = None) -> Select[Any]:
        """``SELECT model`` narrowed by whitelisted equality filters."""
        stmt = select(self.model)
        allowed = self._filterable_fields()
        for key, value in (filters or {}).items():
            if key in allowed:
                stmt = stmt.where(allowed[key] == value)
        return stmt

    def _ordered(self, stmt: Select[Any], sort: Iterable[str]) -> Select[Any]:
        """Apply known sort keys, then the primary key so pages are stable."""
        columns = self._sortable_fields()
        for name, desc in sort_keys(sort):
            col = columns.get(name)
            if col is not None:
                stmt = stmt.order_by(col.desc() if desc else col.asc())
        pk = getattr(self.model, "id", None)
        return stmt.order_by(pk.asc()) if pk is not None else stmt

    def _scalars(self, stmt: Select[Any]) -> list[E]:
        return cast(list[E], list(self.session.execute(stmt).scalars().all()))

    # Writes ----------------------------------------------------------------

    def add(self, instance: E) -> E:
        """Stage ``instance`` and flush so its primary key is populated."""
        self.session.add(instance)
        self.flush()
        return instance

    def delete(self, instance: E) -> None:
        self.session.delete(instance)
        self.flush()

    def flush(self) -> None:
        self.session.flush()

    # Reads -----------------------------------------------------------------

    def get(self, entity_id: Any) -> E | None:
        return cast(E | None, self.session.get(self.model, entity_id))

    def find_one(self, **filters: Any) -> E | None:
        """First row matching the whitelisted equality ``filters``."""
        return cast(E | None, self.session.execute(self._select(filters)).scalars().first())

    def count(self) -> int:
        return int(self.session.execute(select(func.count()).select_from(self.model)).scalar_one())

    def list(
        self,
        *,
        filters: Mapping[str, Any] | None = None,
        sort: Iterable[str] = (),
        limit: int | None = None,
    ) -> list[E]:
        """Rows matching ``filters`` in ``sort`` order (primary key last)."""
        stmt = self._ordered(self._select(filters), sort)
        if limit is not None:
            stmt = stmt.limit(int(limit))
        return self._scalars(stmt)

    def paginate(
        self, pagination: Pagination, *, filters: Mapping[str, Any] | None = None
    ) -> Page[E]:
        """Return one page of rows and the total count of the filtered query."""
        base = self._select(filters)
        total = int(
            self.session.execute(
                select(func.count()).select_from(base.subquery())
            ).scalar_one()
        )
        limit = max(int(pagination.limit), 1)
        stmt = self._ordered(base, pagination.sort).limit(limit).offset(pagination.offset)
        return Page(
            items=self._scalars(stmt),
            total=total,
            page=pagination.page,
            limit=pagination.limit,
        )
