"""분류 레포지토리 — 분류 CRUD 및 이름 기반 쿼리.

Category Repository — CRUD and name-based queries for categories.
"""

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.catalog import Category, Product
from app.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    """분류 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the categories table.
    """

    def __init__(self) -> None:
        super().__init__(Category)

    async def find_by_name(self, db: AsyncSession, name: str) -> Category | None:
        """이름으로 분류를 조회합니다 (Exact name match)."""
        return await self.find_one_by(db, "name", name)

    async def search_by_name(self, db: AsyncSession, term: str) -> list[Category]:
        """이름 부분 문자열로 검색합니다 (Case-insensitive substring)."""
        return await self.find_by_substring(db, "name", term)

    async def find_active(self, db: AsyncSession) -> list[Category]:
        return await self.find_by_flag(db, "active", True)

    async def count_active(self, db: AsyncSession) -> int:
        return await self.count(db, {"active": True})

    async def exists_by_name(self, db: AsyncSession, name: str) -> bool:
        return await self.exists(db, {"name": name})

    async def detach_products(self, db: AsyncSession, category_id: int) -> None:
        """분류를 참조하는 상품의 category_id를 NULL로 설정합니다.

        Clear the category reference on every product pointing at
        ``category_id``. Called before the category row is deleted.
        """
        await db.execute(
            update(Product)
            .where(Product.category_id == category_id)
            .values(category_id=None)
        )


# 싱글턴 인스턴스 — Singleton instance
category_repository: CategoryRepository = CategoryRepository()
