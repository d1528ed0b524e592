"""상품 서비스 — 상품 CRUD 비즈니스 로직.

Product Service — Business logic for the product catalog.
Handles creation (SKU uniqueness, category reference check), full-overwrite
updates, filtered reads, pagination and physical deletion.

Update policy: ``update_product`` is a *full overwrite*. Every mutable field
(name, description, price, stock_quantity, category_id, image_url, active)
is replaced by the incoming value, even when that value is null or a
default. SKU, brand and created_at are never touched by an update.
"""

import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.catalog import Product
from app.repositories.category_repository import CategoryRepository, category_repository
from app.repositories.product_repository import ProductRepository, product_repository
from app.schemas.catalog import ProductCreate, ProductResponse, ProductUpdate
from app.utils.exceptions import DuplicateError, NotFoundError
from app.utils.pagination import Page, PageRequest, page_count
from app.utils.timestamps import utc_now

logger = logging.getLogger(__name__)

# 정렬 허용 컬럼 — Sortable columns for paginated listing
PRODUCT_SORT_FIELDS: tuple[str, ...] = (
    "id", "name", "price", "stock_quantity", "sku", "brand", "created_at", "updated_at",
)


class ProductService:
    """상품 관련 비즈니스 로직을 처리하는 서비스.

    Service handling product business logic. Holds explicit references to
    the product and category repositories passed in at construction.
    """

    def __init__(
        self,
        repository: ProductRepository,
        categories: CategoryRepository,
    ) -> None:
        self.repository: ProductRepository = repository
        self.categories: CategoryRepository = categories

    def _to_response(self, product: Product) -> ProductResponse:
        """상품 모델을 응답 스키마로 변환합니다.

        Convert a Product model instance to a ProductResponse schema.
        """
        return ProductResponse(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            stock_quantity=product.stock_quantity,
            category_id=product.category_id,
            brand=product.brand,
            image_url=product.image_url,
            sku=product.sku,
            active=product.active,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )

    async def _ensure_category(self, db: AsyncSession, category_id: int | None) -> None:
        # 분류 참조 확인 — Category reference must resolve when given
        if category_id is not None and not await self.categories.exists_by_id(db, category_id):
            logger.warning("Category not found with id: %s", category_id)
            raise NotFoundError(f"Category not found with id: {category_id}")

    async def create_product(self, db: AsyncSession, data: ProductCreate) -> ProductResponse:
        """새 상품을 생성합니다.

        Create a new product. Timestamps are stamped immediately before persist.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 검증된 상품 생성 데이터 (Validated creation payload)

        Returns:
            ProductResponse: 생성된 상품, ID 포함 (Stored product with generated id)

        Raises:
            DuplicateError: SKU가 이미 존재할 때 (SKU already taken)
            NotFoundError: 분류가 존재하지 않을 때 (Unknown category reference)
        """
        logger.info("Creating new product: %s", data.name)
        if await self.repository.exists_by_sku(db, data.sku):
            logger.warning("Product with SKU %s already exists", data.sku)
            raise DuplicateError(f"Product with SKU {data.sku} already exists")
        await self._ensure_category(db, data.category_id)

        now = utc_now()
        product: Product = await self.repository.create(
            db,
            {
                **data.model_dump(),
                "created_at": now,
                "updated_at": now,
            },
        )
        logger.info("Product created successfully with id: %s", product.id)
        return self._to_response(product)

    async def update_product(
        self,
        db: AsyncSession,
        product_id: int,
        data: ProductUpdate,
    ) -> ProductResponse:
        """상품의 변경 가능한 필드를 전체 덮어씁니다.

        Overwrite every mutable field of an existing product.

        Raises:
            NotFoundError: 상품 또는 분류가 없을 때 (Product or category missing)
        """
        logger.info("Updating product with id: %s", product_id)
        product: Product | None = await self.repository.get_by_id(db, product_id)
        if product is None:
            logger.warning("Product not found with id: %s", product_id)
            raise NotFoundError(f"Product not found with id: {product_id}")
        await self._ensure_category(db, data.category_id)

        product.name = data.name
        product.description = data.description
        product.price = data.price
        product.stock_quantity = data.stock_quantity
        product.category_id = data.category_id
        product.image_url = data.image_url
        product.active = data.active
        product.updated_at = utc_now()

        product = await self.repository.save(db, product)
        logger.info("Product updated successfully: %s", product_id)
        return self._to_response(product)

    async def get_product_by_id(self, db: AsyncSession, product_id: int) -> ProductResponse | None:
        """ID로 상품을 조회합니다. 없으면 None을 반환합니다 (no exception)."""
        product: Product | None = await self.repository.get_by_id(db, product_id)
        return self._to_response(product) if product is not None else None

    async def get_product_by_sku(self, db: AsyncSession, sku: str) -> ProductResponse | None:
        product: Product | None = await self.repository.find_by_sku(db, sku)
        return self._to_response(product) if product is not None else None

    async def get_all_products(self, db: AsyncSession) -> list[ProductResponse]:
        return [self._to_response(p) for p in await self.repository.get_all(db)]

    async def get_products_paginated(
        self,
        db: AsyncSession,
        page_request: PageRequest,
    ) -> Page[ProductResponse]:
        """상품 목록의 한 페이지를 조회합니다 (One sorted page of products)."""
        items, total = await self.repository.get_paginated(db, page_request)
        return Page[ProductResponse](
            items=[self._to_response(p) for p in items],
            total=total,
            page=page_request.page,
            per_page=page_request.per_page,
            pages=page_count(total, page_request.per_page),
        )

    async def get_products_by_category(self, db: AsyncSession, category_id: int) -> list[ProductResponse]:
        products = await self.repository.find_by_category_id(db, category_id)
        return [self._to_response(p) for p in products]

    async def get_products_by_brand(self, db: AsyncSession, brand: str) -> list[ProductResponse]:
        products = await self.repository.find_by_brand(db, brand)
        return [self._to_response(p) for p in products]

    async def search_products_by_name(self, db: AsyncSession, name: str) -> list[ProductResponse]:
        products = await self.repository.search_by_name(db, name)
        return [self._to_response(p) for p in products]

    async def get_active_products(self, db: AsyncSession) -> list[ProductResponse]:
        products = await self.repository.find_active(db)
        return [self._to_response(p) for p in products]

    async def get_products_by_price_range(
        self,
        db: AsyncSession,
        min_price: Decimal,
        max_price: Decimal,
    ) -> list[ProductResponse]:
        products = await self.repository.find_by_price_between(db, min_price, max_price)
        return [self._to_response(p) for p in products]

    async def count_active_products(self, db: AsyncSession) -> int:
        return await self.repository.count_active(db)

    async def delete_product(self, db: AsyncSession, product_id: int) -> None:
        """상품을 물리 삭제합니다.

        Physically delete a product.

        Raises:
            NotFoundError: 상품을 찾을 수 없을 때 (Product not found)
        """
        logger.info("Deleting product with id: %s", product_id)
        deleted: bool = await self.repository.delete(db, product_id)
        if not deleted:
            logger.warning("Product not found with id: %s", product_id)
            raise NotFoundError(f"Product not found with id: {product_id}")
        logger.info("Product deleted successfully: %s", product_id)

    async def exists_by_id(self, db: AsyncSession, product_id: int) -> bool:
        return await self.repository.exists_by_id(db, product_id)


# 싱글턴 인스턴스 — Singleton instance
product_service: ProductService = ProductService(product_repository, category_repository)
