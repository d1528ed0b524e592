"""경계 입력 검증 함수 모듈.

Boundary input validation functions.
Each validator inspects a request schema and returns a list of
field-level violations instead of raising; routers turn a non-empty list
into a 422 via ``raise_for_violations`` before any service call.

Usage:
    violations = validate_user_create(data)
    raise_for_violations(violations)
"""

from decimal import Decimal
from typing import Iterable

from email_validator import EmailNotValidError, validate_email

from app.config import settings
from app.schemas.catalog import CategoryCreate, CategoryUpdate, ProductCreate, ProductUpdate
from app.schemas.common import FieldViolation
from app.schemas.user_profile import UserProfileCreate, UserProfileUpdate
from app.utils.pagination import SORT_ASC, SORT_DESC, PageRequest

# 가격 한도 — NUMERIC(10, 2): 정수부 8자리, 소수부 2자리
_PRICE_LIMIT: Decimal = Decimal("100000000")
_PRICE_STEP: Decimal = Decimal("0.01")

# 정수 컬럼 한도 — BIGINT (ids, user_id) and INTEGER (stock_quantity) ranges
BIGINT_MIN: int = -(2**63)
BIGINT_MAX: int = 2**63 - 1
INT_MAX: int = 2**31 - 1

# 사용자 선택 필드 최대 길이 — Optional user field max lengths (field, label, max)
_USER_OPTIONAL_LIMITS: tuple[tuple[str, str, int], ...] = (
    ("phone", "Phone number", 20),
    ("address", "Address", 100),
    ("city", "City", 50),
    ("state", "State", 50),
    ("country", "Country", 50),
    ("zip_code", "Zip code", 10),
    ("role", "Role", 20),
)


def _check_required_text(
    violations: list[FieldViolation],
    field: str,
    label: str,
    value: str | None,
    min_len: int,
    max_len: int,
) -> None:
    """필수 문자열 필드를 검사합니다 (Required, non-blank, length-bounded)."""
    if value is None or not value.strip():
        violations.append(FieldViolation(field=field, message=f"{label} is required"))
    elif not min_len <= len(value) <= max_len:
        violations.append(
            FieldViolation(
                field=field,
                message=f"{label} must be between {min_len} and {max_len} characters",
            )
        )


def _check_max_length(
    violations: list[FieldViolation],
    field: str,
    label: str,
    value: str | None,
    max_len: int,
) -> None:
    if value is not None and len(value) > max_len:
        violations.append(
            FieldViolation(field=field, message=f"{label} should not exceed {max_len} characters")
        )


def _check_email(violations: list[FieldViolation], value: str | None) -> None:
    if value is None or not value.strip():
        violations.append(FieldViolation(field="email", message="Email is required"))
        return
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        violations.append(FieldViolation(field="email", message="Email should be valid"))
        return
    _check_max_length(violations, "email", "Email", value, 100)


def _check_user_optional_fields(
    violations: list[FieldViolation],
    data: UserProfileCreate | UserProfileUpdate,
) -> None:
    for field, label, max_len in _USER_OPTIONAL_LIMITS:
        _check_max_length(violations, field, label, getattr(data, field), max_len)


# ---------------------------------------------------------------------------
# 사용자 프로필 (User profile)
# ---------------------------------------------------------------------------

def validate_user_create(data: UserProfileCreate) -> list[FieldViolation]:
    """사용자 생성 입력을 검증합니다.

    Validate a user profile creation payload. Names are required
    (2-50 chars), email is required and well-formed, and optional
    contact fields are length-bounded.

    Args:
        data: 생성 요청 (Creation payload)

    Returns:
        list[FieldViolation]: 위반 목록, 없으면 빈 리스트 (Violations; empty when valid)
    """
    violations: list[FieldViolation] = []
    _check_required_text(violations, "first_name", "First name", data.first_name, 2, 50)
    _check_required_text(violations, "last_name", "Last name", data.last_name, 2, 50)
    _check_email(violations, data.email)
    _check_user_optional_fields(violations, data)
    if data.user_id is not None and data.user_id <= 0:
        violations.append(FieldViolation(field="user_id", message="User ID must be positive"))
    elif data.user_id is not None and data.user_id > BIGINT_MAX:
        violations.append(FieldViolation(field="user_id", message=f"User ID must not exceed {BIGINT_MAX}"))
    return violations


def validate_user_update(data: UserProfileUpdate) -> list[FieldViolation]:
    """사용자 부분 수정 입력을 검증합니다.

    Validate a partial-merge update payload. Only fields that are present
    (non-null) are checked, but a present name or email must still satisfy
    the same rule as on create.
    """
    violations: list[FieldViolation] = []
    if data.first_name is not None:
        _check_required_text(violations, "first_name", "First name", data.first_name, 2, 50)
    if data.last_name is not None:
        _check_required_text(violations, "last_name", "Last name", data.last_name, 2, 50)
    if data.email is not None:
        _check_email(violations, data.email)
    _check_user_optional_fields(violations, data)
    return violations


# ---------------------------------------------------------------------------
# 상품 카탈로그 (Product catalog)
# ---------------------------------------------------------------------------

def _check_price(violations: list[FieldViolation], price: Decimal | None) -> None:
    if price is None:
        violations.append(FieldViolation(field="price", message="Price is required"))
    elif price < 0:
        violations.append(FieldViolation(field="price", message="Price must not be negative"))
    elif price >= _PRICE_LIMIT or price.quantize(_PRICE_STEP) != price:
        violations.append(
            FieldViolation(
                field="price",
                message="Price must have at most 8 integer digits and 2 decimal places",
            )
        )


def _check_product_common(
    violations: list[FieldViolation],
    data: ProductCreate | ProductUpdate,
) -> None:
    _check_required_text(violations, "name", "Name", data.name, 1, 100)
    _check_max_length(violations, "description", "Description", data.description, 1000)
    _check_price(violations, data.price)
    if data.stock_quantity < 0:
        violations.append(
            FieldViolation(field="stock_quantity", message="Stock quantity must not be negative")
        )
    elif data.stock_quantity > INT_MAX:
        violations.append(
            FieldViolation(field="stock_quantity", message=f"Stock quantity must not exceed {INT_MAX}")
        )
    if data.category_id is not None and not BIGINT_MIN <= data.category_id <= BIGINT_MAX:
        violations.append(FieldViolation(field="category_id", message="Category ID is out of range"))
    _check_max_length(violations, "image_url", "Image URL", data.image_url, 500)


def validate_product_create(data: ProductCreate) -> list[FieldViolation]:
    """상품 생성 입력을 검증합니다 (Validate a product creation payload)."""
    violations: list[FieldViolation] = []
    _check_product_common(violations, data)
    _check_required_text(violations, "sku", "SKU", data.sku, 1, 50)
    _check_max_length(violations, "brand", "Brand", data.brand, 100)
    return violations


def validate_product_update(data: ProductUpdate) -> list[FieldViolation]:
    """상품 전체 덮어쓰기 입력을 검증합니다.

    Validate a full-overwrite update payload. Required fields are checked
    exactly as on create, since the stored values are replaced wholesale.
    """
    violations: list[FieldViolation] = []
    _check_product_common(violations, data)
    return violations


def validate_price_range(min_price: Decimal, max_price: Decimal) -> list[FieldViolation]:
    """가격 범위 파라미터를 검증합니다 (Validate an inclusive price range)."""
    violations: list[FieldViolation] = []
    if min_price < 0:
        violations.append(FieldViolation(field="min_price", message="Minimum price must not be negative"))
    if min_price > max_price:
        violations.append(
            FieldViolation(field="max_price", message="Maximum price must not be less than minimum price")
        )
    return violations


def validate_category_create(data: CategoryCreate) -> list[FieldViolation]:
    """분류 생성 입력을 검증합니다 (Validate a category creation payload)."""
    violations: list[FieldViolation] = []
    _check_required_text(violations, "name", "Name", data.name, 1, 100)
    _check_max_length(violations, "description", "Description", data.description, 500)
    return violations


def validate_category_update(data: CategoryUpdate) -> list[FieldViolation]:
    """분류 부분 수정 입력을 검증합니다 (Validate a partial category update)."""
    violations: list[FieldViolation] = []
    if data.name is not None:
        _check_required_text(violations, "name", "Name", data.name, 1, 100)
    _check_max_length(violations, "description", "Description", data.description, 500)
    return violations


# ---------------------------------------------------------------------------
# 페이지네이션 (Pagination)
# ---------------------------------------------------------------------------

def parse_page_request(
    page: int,
    per_page: int | None,
    sort: str | None,
    allowed_sort_fields: Iterable[str],
) -> tuple[PageRequest | None, list[FieldViolation]]:
    """페이지 요청 파라미터를 검증하고 PageRequest로 변환합니다.

    Validate raw pagination query parameters and build a PageRequest.

    ``sort`` is ``"<field>"`` or ``"<field>,asc|desc"``; the field must be in
    ``allowed_sort_fields``.

    Args:
        page: 페이지 번호, 1부터 시작 (1-based page number)
        per_page: 페이지 크기, None이면 기본값 (Page size; None uses DEFAULT_PAGE_SIZE)
        sort: 정렬 표현식 (Sort expression, optional)
        allowed_sort_fields: 허용된 정렬 컬럼 (Sortable column names)

    Returns:
        tuple[PageRequest | None, list[FieldViolation]]:
            (페이지 요청, 위반 목록) — 위반이 있으면 요청은 None
            (Page request, violations); the request is None when invalid
    """
    violations: list[FieldViolation] = []
    size: int = settings.DEFAULT_PAGE_SIZE if per_page is None else per_page

    if page < 1:
        violations.append(FieldViolation(field="page", message="Page must be at least 1"))
    elif (page - 1) * max(size, 1) > BIGINT_MAX:
        violations.append(FieldViolation(field="page", message="Page is out of range"))
    if not 1 <= size <= settings.MAX_PAGE_SIZE:
        violations.append(
            FieldViolation(
                field="per_page",
                message=f"Page size must be between 1 and {settings.MAX_PAGE_SIZE}",
            )
        )

    sort_field: str = "id"
    sort_direction: str = SORT_ASC
    if sort:
        field_part, _, direction_part = sort.partition(",")
        sort_field = field_part.strip()
        sort_direction = direction_part.strip().lower() or SORT_ASC
        if sort_field not in set(allowed_sort_fields):
            violations.append(FieldViolation(field="sort", message=f"Cannot sort by '{sort_field}'"))
        if sort_direction not in (SORT_ASC, SORT_DESC):
            violations.append(
                FieldViolation(field="sort", message="Sort direction must be 'asc' or 'desc'")
            )

    if violations:
        return None, violations
    return PageRequest(page=page, per_page=size, sort_field=sort_field, sort_direction=sort_direction), []
