# cms/utils/pagination.py
from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy import func, select
from sqlalchemy.sql import Select


class Pagination:
    """
    Offset pagination for page listings.

    Attached to a loader with ``set_pagination()``, it is applied to the
    next query the loader runs: the filtered query is counted, then limited
    to the current page.
    """

    def __init__(self, per_page: int = 20, current_page: int = 1):
        if per_page <= 0:
            raise ValueError("per_page must be greater than zero")
        if current_page <= 0:
            raise ValueError("current_page must be greater than zero")

        self.per_page = per_page
        self.current_page = current_page
        self.total: Optional[int] = None

    @property
    def offset(self) -> int:
        return (self.current_page - 1) * self.per_page

    @property
    def total_pages(self) -> Optional[int]:
        if self.total is None:
            return None
        return (self.total + self.per_page - 1) // self.per_page

    @property
    def has_more(self) -> bool:
        return self.total is not None and self.current_page < (self.total_pages or 0)

    def apply(self, session: Any, query: Select) -> Select:
        """
        Count ``query`` and return it limited to the current page.

        The count ignores ordering; ``query`` must already carry every
        filter that decides membership.
        """
        self.total = session.execute(
            select(func.count()).select_from(query.order_by(None).subquery())
        ).scalar_one()

        return query.limit(self.per_page).offset(self.offset)

    def meta(self) -> Dict[str, Any]:
        meta: Dict[str, Any] = {
            "page": self.current_page,
            "per_page": self.per_page,
        }

        if self.total is not None:
            meta["total"] = self.total
            meta["total_pages"] = self.total_pages

        return meta
