# app/services/_shared/base.py
from __future__ import annotations

from app.repositories.base import Pagination
from app.services._shared.dto import PaginationIn
from app.services._shared.errors import ValidationError
from app.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


class BaseService:
    """
    Common ground for the account services.

    Each public method is one use case and runs inside exactly one unit of
    work: :meth:`rw_uow` when it writes, :meth:`ro_uow` when it only reads.
    Services raise :mod:`app.services._shared.errors` types; the HTTP layer
    turns them into envelopes.

    .. note::
       The read-only unit of work always rolls back on exit, so output DTOs
       must be built before leaving its ``with`` block.
    """

    #: Upper bound for any page size a caller asks for.
    MAX_PAGE_SIZE = 100

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """Open a read-write unit of work (commit on success)."""
        return SQLAlchemyUnitOfWork()

    def ro_uow(self, *, enforce_db_readonly: bool = True) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Open a read-only unit of work.

        :param enforce_db_readonly: Issue ``SET TRANSACTION READ ONLY`` on
            backends that support it.
        :type enforce_db_readonly: bool
        """
        return SQLAlchemyReadOnlyUnitOfWork(enforce_db_readonly=enforce_db_readonly)

    def to_pagination(self, pagination: PaginationIn) -> Pagination:
        """
        Translate a page request into the repository value object.

        ``limit`` is capped at :attr:`MAX_PAGE_SIZE`.

        :raises ValidationError: Values that are not positive integers.
        """
        try:
            page = int(pagination.page)
            limit = int(pagination.limit)
        except (TypeError, ValueError) as exc:
            raise ValidationError("Invalid pagination", fields=["page", "limit"]) from exc
        if page < 1 or limit < 1:
            raise ValidationError("Invalid pagination", fields=["page", "limit"])
        return Pagination(page=page, limit=min(limit, self.MAX_PAGE_SIZE))
