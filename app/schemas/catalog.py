"""상품 카탈로그 Pydantic 요청/응답 스키마 정의.

Product catalog Pydantic request/response schema definitions.
Covers categories and products for the product service.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel


# === 분류 (Category) 스키마 ===

class CategoryCreate(BaseModel):
    """분류 생성 요청 스키마.

    Category creation request schema.

    Attributes:
        name: 분류 이름 (Category name, required, unique)
        description: 설명 (Optional description)
        active: 활성 상태 (Active flag, default True)
    """

    name: str | None = None
    description: str | None = None
    active: bool = True


class CategoryUpdate(BaseModel):
    """분류 수정 요청 스키마 (부분 업데이트).

    Category update request schema (partial update).
    """

    name: str | None = None  # 변경할 이름 (New name, optional)
    description: str | None = None
    active: bool | None = None  # 활성 상태 변경 (Activate/deactivate, optional)


class CategoryResponse(BaseModel):
    """분류 응답 스키마 (Category response schema)."""

    id: int
    name: str
    description: str | None
    active: bool
    created_at: datetime
    updated_at: datetime


# === 상품 (Product) 스키마 ===

class ProductCreate(BaseModel):
    """상품 생성 요청 스키마.

    Product creation request schema.

    Attributes:
        name: 상품명 (Product name, required)
        description: 설명 (Optional description)
        price: 가격 (Fixed-point price, required)
        stock_quantity: 재고 수량 (Units in stock, default 0)
        category_id: 분류 ID (Category reference, optional)
        brand: 브랜드 (Brand name)
        image_url: 이미지 URL (Image URL)
        sku: 재고 관리 코드 (Stock keeping unit, required, unique)
        active: 활성 상태 (Active flag, default True)
    """

    name: str | None = None
    description: str | None = None
    price: Decimal | None = None
    stock_quantity: int = 0
    category_id: int | None = None
    brand: str | None = None
    image_url: str | None = None
    sku: str | None = None
    active: bool = True


class ProductUpdate(BaseModel):
    """상품 수정 요청 스키마 (전체 덮어쓰기).

    Product update request schema (full overwrite).
    Every field replaces the stored value, including omitted ones, which
    take the defaults below. SKU and brand are not updatable.
    """

    name: str | None = None
    description: str | None = None
    price: Decimal | None = None
    stock_quantity: int = 0
    category_id: int | None = None
    image_url: str | None = None
    active: bool = True


class ProductResponse(BaseModel):
    """상품 응답 스키마 (Product response schema)."""

    id: int
    name: str
    description: str | None
    price: Decimal
    stock_quantity: int
    category_id: int | None
    brand: str | None
    image_url: str | None
    sku: str
    active: bool
    created_at: datetime
    updated_at: datetime
