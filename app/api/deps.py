"""FastAPI 의존성 모듈 — 페이지네이션 파라미터 파싱.

FastAPI dependency module — Pagination query parameter parsing.
Provides a dependency factory that turns raw ``page``/``per_page``/``sort``
query parameters into a validated PageRequest, rejecting bad input with
field-level violations before the service layer is reached.
"""

from typing import Annotated, Callable, Iterable

from fastapi import Path, Query, Response

from app.utils.exceptions import raise_for_violations
from app.utils.pagination import PageRequest
from app.utils.validators import BIGINT_MAX, BIGINT_MIN, parse_page_request

# 전체 개수 응답 헤더 — Response header carrying the total record count
TOTAL_COUNT_HEADER: str = "X-Total-Count"

# 식별자 경로 파라미터 — 64비트 범위 밖의 값은 422 (Ids outside the 64-bit range are rejected)
IdPath = Annotated[int, Path(ge=BIGINT_MIN, le=BIGINT_MAX)]


def pagination_params(allowed_sort_fields: Iterable[str]) -> Callable[..., PageRequest]:
    """정렬 허용 컬럼을 고정한 페이지네이션 의존성 팩토리.

    Dependency factory producing a FastAPI dependency that parses and
    validates pagination parameters for one entity.

    Args:
        allowed_sort_fields: 허용된 정렬 컬럼 (Sortable column names)

    Returns:
        FastAPI 의존성 함수 — PageRequest 반환 또는 422 발생
        (FastAPI dependency function returning PageRequest or raising 422)
    """
    allowed: tuple[str, ...] = tuple(allowed_sort_fields)

    def _parse(
        page: Annotated[int, Query(description="페이지 번호, 1부터 시작 (1-based page)")] = 1,
        per_page: Annotated[int | None, Query(description="페이지 크기 (Page size)")] = None,
        sort: Annotated[str | None, Query(description="정렬: field[,asc|desc]")] = None,
    ) -> PageRequest:
        page_request, violations = parse_page_request(page, per_page, sort, allowed)
        raise_for_violations(violations)
        return page_request  # type: ignore[return-value]

    return _parse


def set_total_count(response: Response, total: int) -> None:
    """X-Total-Count 헤더를 설정합니다 (Expose the total count to clients)."""
    response.headers[TOTAL_COUNT_HEADER] = str(total)
