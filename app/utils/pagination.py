"""페이지네이션 유틸리티 모듈.

Pagination utility module for SQLAlchemy async queries.
Provides the PageRequest (page number, page size, sort order),
a generic paginate function, and a Page response model for consistent
pagination across all list endpoints.
"""

import math
from dataclasses import dataclass
from typing import Any, Generic, Sequence, TypeVar

from pydantic import BaseModel
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")

SORT_ASC: str = "asc"
SORT_DESC: str = "desc"


@dataclass(frozen=True)
class PageRequest:
    """페이지 요청 사양 — 페이지 번호, 크기, 정렬 기준.

    Pagination request describing a bounded, ordered slice of a result set.

    Attributes:
        page: 페이지 번호, 1부터 시작 (1-based page number)
        per_page: 페이지당 항목 수 (Items per page)
        sort_field: 정렬 컬럼명 (Column name to order by)
        sort_direction: "asc" 또는 "desc" (Sort direction)
    """

    page: int = 1
    per_page: int = 20
    sort_field: str = "id"
    sort_direction: str = SORT_ASC

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


class Page(BaseModel, Generic[T]):
    """페이지네이션 결과 모델.

    Pagination result model for typed responses.
    Contains the paginated items and metadata for client-side pagination controls.

    Attributes:
        items: 현재 페이지 항목 목록 (Items for the current page)
        total: 전체 항목 수 (Total count across all pages)
        page: 현재 페이지 번호 (Current page number, 1-based)
        per_page: 페이지당 항목 수 (Items per page)
        pages: 전체 페이지 수 (Total number of pages)
    """

    items: list[T]  # 현재 페이지 항목 목록 (Paginated items)
    total: int  # 전체 항목 수 (Total item count)
    page: int  # 현재 페이지 번호 — 1부터 시작 (Current page, 1-indexed)
    per_page: int  # 페이지당 항목 수 (Items per page)
    pages: int  # 전체 페이지 수 (Total pages, computed: ceil(total/per_page))


def page_count(total: int, per_page: int) -> int:
    """전체 페이지 수를 계산합니다 (ceil(total / per_page), 0 when empty)."""
    if total <= 0:
        return 0
    return math.ceil(total / per_page)


async def paginate(
    db: AsyncSession,
    query: Select[Any],
    model: type,
    page_request: PageRequest,
) -> tuple[Sequence[Any], int]:
    """SQLAlchemy 쿼리에 대한 정렬 및 페이지네이션을 수행합니다.

    Execute a sorted, paginated SQLAlchemy query, returning items and total count.
    Runs two queries: one for the total count (via subquery) and one for
    the actual page of results with ORDER BY/OFFSET/LIMIT.

    Args:
        db: 비동기 DB 세션 (Async database session)
        query: SQLAlchemy Select 쿼리 (Base query to paginate)
        model: 정렬 컬럼을 가진 ORM 모델 (ORM model owning the sort column)
        page_request: 페이지 요청 사양 (Validated page request)

    Returns:
        tuple[Sequence[Any], int]: (항목 목록, 전체 개수) 튜플
            (Tuple of paginated items and total count)
    """
    # 전체 개수 조회 — 서브쿼리로 감싸서 COUNT 실행 (Count total via subquery)
    count_query = select(func.count()).select_from(query.subquery())
    total: int = (await db.execute(count_query)).scalar() or 0

    # 정렬 적용 — id를 보조 정렬 키로 사용해 페이지 간 순서를 고정 (id tiebreaker keeps pages stable)
    column = getattr(model, page_request.sort_field)
    ordering = column.desc() if page_request.sort_direction == SORT_DESC else column.asc()
    query = query.order_by(ordering)
    if page_request.sort_field != "id":
        query = query.order_by(model.id.asc())

    result = await db.execute(query.offset(page_request.offset).limit(page_request.per_page))
    items: Sequence[Any] = result.scalars().all()

    return items, total
