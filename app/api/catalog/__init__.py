"""상품 카탈로그 API 라우터 패키지 — 상품 서비스 엔드포인트 통합.

Product catalog API router package — Aggregates the product service
endpoints into a single router.

Included routers:
    - products: 상품 CRUD, 검색, 페이지네이션 (Product CRUD, search, pagination)
    - categories: 상품 분류 관리 (Category management)
"""

from fastapi import APIRouter

from app.api.catalog.categories import router as categories_router
from app.api.catalog.products import router as products_router

catalog_router: APIRouter = APIRouter()

catalog_router.include_router(products_router, prefix="/products", tags=["Products"])
catalog_router.include_router(categories_router, prefix="/categories", tags=["Categories"])
