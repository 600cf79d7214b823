"""DTOs shared by more than one service."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PageMeta:
    """
    Paging facts returned next to a list of items.

    :param page: Current 1-based page.
    :param limit: Page size that was applied.
    :param total: Rows matching the query across all pages.
    :param has_prev: ``page > 1``.
    :param has_next: More rows exist after this page.
    """

    page: int
    limit: int
    total: int
    has_prev: bool
    has_next: bool

    @classmethod
    def build(cls, *, page: int, limit: int, total: int) -> PageMeta:
        return cls(page, limit, total, page > 1, page * limit < total)
