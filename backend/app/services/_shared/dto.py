"""Pagination DTOs shared by list-returning services."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PaginationIn:
    """
    Page request coming from the HTTP layer.

    Out-of-range values are rejected on construction rather than clamped, so a
    caller asking for ``page=0`` learns about it.

    :param page: 1-based page number.
    :type page: int
    :param limit: Page size (> 0).
    :type limit: int
    :raises ValueError: ``page`` or ``limit`` below 1.
    """

    page: int = 1
    limit: int = 20

    def __post_init__(self) -> None:
        if int(self.page) < 1:
            raise ValueError("page must be >= 1")
        if int(self.limit) < 1:
            raise ValueError("limit must be >= 1")


@dataclass(frozen=True, slots=True)
class PageMeta:
    """
    Metadata returned next to one page of items.

    :param total: Rows available across all pages.
    :param page: Page that was served.
    :param limit: Effective page size (after capping).
    :param has_prev: A page precedes this one.
    :param has_next: More rows follow this page.
    """

    total: int
    page: int
    limit: int
    has_prev: bool
    has_next: bool

    @classmethod
    def build(cls, *, page: int, limit: int, total: int) -> PageMeta:
        return cls(
            total=total,
            page=page,
            limit=limit,
            has_prev=page > 1,
            has_next=page * limit < total,
        )
