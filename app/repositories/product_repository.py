"""상품 레포지토리 — 상품 CRUD 및 카탈로그 쿼리.

Product Repository — CRUD and catalog queries for products.
Extends BaseRepository with SKU, name, brand, category, active-flag
and price-range lookups.
"""

from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.catalog import Product
from app.repositories.base import BaseRepository


class ProductRepository(BaseRepository[Product]):
    """상품 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the products table.
    """

    def __init__(self) -> None:
        super().__init__(Product)

    async def find_by_sku(self, db: AsyncSession, sku: str) -> Product | None:
        """SKU로 상품을 조회합니다 (Exact SKU match)."""
        return await self.find_one_by(db, "sku", sku)

    async def search_by_name(self, db: AsyncSession, term: str) -> list[Product]:
        """상품명 부분 문자열로 검색합니다 (Case-insensitive substring on name)."""
        return await self.find_by_substring(db, "name", term)

    async def find_by_brand(self, db: AsyncSession, brand: str) -> list[Product]:
        return await self.find_by_equals(db, "brand", brand)

    async def find_by_category_id(self, db: AsyncSession, category_id: int) -> list[Product]:
        return await self.find_by_equals(db, "category_id", category_id)

    async def find_active(self, db: AsyncSession) -> list[Product]:
        return await self.find_by_flag(db, "active", True)

    async def find_by_price_between(
        self,
        db: AsyncSession,
        min_price: Decimal,
        max_price: Decimal,
    ) -> list[Product]:
        """가격 범위로 조회합니다 (min_price <= price <= max_price)."""
        return await self.find_by_range(db, "price", min_price, max_price)

    async def count_active(self, db: AsyncSession) -> int:
        return await self.count(db, {"active": True})

    async def exists_by_sku(self, db: AsyncSession, sku: str) -> bool:
        return await self.exists(db, {"sku": sku})


# 싱글턴 인스턴스 — Singleton instance
product_repository: ProductRepository = ProductRepository()
