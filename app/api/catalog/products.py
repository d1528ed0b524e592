"""상품 라우터 — 상품 CRUD 및 검색 엔드포인트.

Product Router — CRUD, search and pagination endpoints for products.
Request bodies are validated explicitly before reaching the service; the
router commits the session after each mutating call.
"""

from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import IdPath, pagination_params, set_total_count
from app.database import get_db
from app.schemas.catalog import ProductCreate, ProductResponse, ProductUpdate
from app.services.product_service import PRODUCT_SORT_FIELDS, ProductService, product_service
from app.utils.exceptions import NotFoundError, raise_for_violations
from app.utils.pagination import Page, PageRequest
from app.utils.validators import (
    validate_price_range,
    validate_product_create,
    validate_product_update,
)


def create_router(service: ProductService) -> APIRouter:
    """상품 서비스를 사용하는 라우터를 생성합니다.

    Build the product router bound to ``service``.
    Static paths are registered before ``/{product_id}`` so they are not
    captured by the id route.
    """
    router: APIRouter = APIRouter()

    @router.post("", response_model=ProductResponse, status_code=201)
    async def create_product(
        data: ProductCreate,
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> ProductResponse:
        """새 상품을 생성합니다 (Create a product)."""
        raise_for_violations(validate_product_create(data))
        result: ProductResponse = await service.create_product(db, data)
        await db.commit()
        return result

    @router.get("", response_model=list[ProductResponse])
    async def get_all_products(
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> list[ProductResponse]:
        """전체 상품 목록을 조회합니다 (List all products)."""
        return await service.get_all_products(db)

    @router.get("/page", response_model=Page[ProductResponse])
    async def get_products_paginated(
        response: Response,
        page_request: Annotated[PageRequest, Depends(pagination_params(PRODUCT_SORT_FIELDS))],
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> Page[ProductResponse]:
        """상품 목록을 페이지 단위로 조회합니다 (Paginated product listing)."""
        page: Page[ProductResponse] = await service.get_products_paginated(db, page_request)
        set_total_count(response, page.total)
        return page

    @router.get("/active", response_model=list[ProductResponse])
    async def get_active_products(
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> list[ProductResponse]:
        return await service.get_active_products(db)

    @router.get("/search", response_model=list[ProductResponse])
    async def search_products_by_name(
        name: Annotated[str, Query(description="상품명 부분 문자열 (Name substring)")],
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> list[ProductResponse]:
        """상품명으로 검색합니다 (Case-insensitive name search)."""
        return await service.search_products_by_name(db, name)

    @router.get("/price-range", response_model=list[ProductResponse])
    async def get_products_by_price_range(
        min_price: Annotated[Decimal, Query()],
        max_price: Annotated[Decimal, Query()],
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> list[ProductResponse]:
        """가격 범위로 상품을 조회합니다 (Inclusive price range)."""
        raise_for_violations(validate_price_range(min_price, max_price))
        return await service.get_products_by_price_range(db, min_price, max_price)

    @router.get("/health", response_class=PlainTextResponse)
    async def health_check() -> str:
        """서비스 상태 확인 (Liveness probe)."""
        return "Product Service is running"

    @router.get("/count/active", response_model=int)
    async def count_active_products(
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> int:
        return await service.count_active_products(db)

    @router.get("/category/{category_id}", response_model=list[ProductResponse])
    async def get_products_by_category(
        category_id: IdPath,
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> list[ProductResponse]:
        return await service.get_products_by_category(db, category_id)

    @router.get("/brand/{brand}", response_model=list[ProductResponse])
    async def get_products_by_brand(
        brand: str,
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> list[ProductResponse]:
        return await service.get_products_by_brand(db, brand)

    @router.get("/sku/{sku}", response_model=ProductResponse)
    async def get_product_by_sku(
        sku: str,
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> ProductResponse:
        """SKU로 상품을 조회합니다 (Lookup by SKU, 404 when absent)."""
        result: ProductResponse | None = await service.get_product_by_sku(db, sku)
        if result is None:
            raise NotFoundError(f"Product not found with sku: {sku}")
        return result

    @router.get("/exists/{product_id}", response_model=bool)
    async def exists_by_id(
        product_id: IdPath,
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> bool:
        return await service.exists_by_id(db, product_id)

    @router.get("/{product_id}", response_model=ProductResponse)
    async def get_product_by_id(
        product_id: IdPath,
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> ProductResponse:
        """ID로 상품을 조회합니다.

        Retrieve a product; the service signals absence with None, which
        becomes a 404 here.
        """
        result: ProductResponse | None = await service.get_product_by_id(db, product_id)
        if result is None:
            raise NotFoundError(f"Product not found with id: {product_id}")
        return result

    @router.put("/{product_id}", response_model=ProductResponse)
    async def update_product(
        product_id: IdPath,
        data: ProductUpdate,
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> ProductResponse:
        """상품을 전체 덮어쓰기로 수정합니다 (Full-overwrite update)."""
        raise_for_violations(validate_product_update(data))
        result: ProductResponse = await service.update_product(db, product_id, data)
        await db.commit()
        return result

    @router.delete("/{product_id}", status_code=204)
    async def delete_product(
        product_id: IdPath,
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> None:
        """상품을 삭제합니다 (Physical delete)."""
        await service.delete_product(db, product_id)
        await db.commit()

    return router


router: APIRouter = create_router(product_service)
