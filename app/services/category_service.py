"""분류 서비스 — 상품 분류 CRUD 비즈니스 로직.

Category Service — Business logic for product categories.
Enforces name uniqueness and detaches products before deletion.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.catalog import Category
from app.repositories.category_repository import CategoryRepository, category_repository
from app.schemas.catalog import CategoryCreate, CategoryResponse, CategoryUpdate
from app.utils.exceptions import DuplicateError, NotFoundError
from app.utils.timestamps import utc_now

logger = logging.getLogger(__name__)


class CategoryService:
    """분류 관련 비즈니스 로직을 처리하는 서비스.

    Service handling category business logic.
    """

    def __init__(self, repository: CategoryRepository) -> None:
        self.repository: CategoryRepository = repository

    def _to_response(self, category: Category) -> CategoryResponse:
        return CategoryResponse(
            id=category.id,
            name=category.name,
            description=category.description,
            active=category.active,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )

    async def _get_or_404(self, db: AsyncSession, category_id: int) -> Category:
        category: Category | None = await self.repository.get_by_id(db, category_id)
        if category is None:
            logger.warning("Category not found with id: %s", category_id)
            raise NotFoundError(f"Category not found with id: {category_id}")
        return category

    async def create_category(self, db: AsyncSession, data: CategoryCreate) -> CategoryResponse:
        """새 분류를 생성합니다.

        Create a new category.

        Raises:
            DuplicateError: 같은 이름의 분류가 이미 존재할 때
                            (When a category with the same name already exists)
        """
        logger.info("Creating new category: %s", data.name)
        if await self.repository.exists_by_name(db, data.name):
            logger.warning("Category with name %s already exists", data.name)
            raise DuplicateError(f"Category with name {data.name} already exists")

        now = utc_now()
        category: Category = await self.repository.create(
            db,
            {**data.model_dump(), "created_at": now, "updated_at": now},
        )
        return self._to_response(category)

    async def update_category(
        self,
        db: AsyncSession,
        category_id: int,
        data: CategoryUpdate,
    ) -> CategoryResponse:
        """분류 정보를 부분 수정합니다.

        Partially update a category; only non-null fields are applied.

        Raises:
            NotFoundError: 분류를 찾을 수 없을 때 (Category not found)
            DuplicateError: 변경할 이름이 이미 사용 중일 때 (New name already taken)
        """
        category: Category = await self._get_or_404(db, category_id)

        # 이름 변경 시 중복 확인 — Check name uniqueness if changing name
        if data.name is not None and data.name != category.name:
            if await self.repository.exists_by_name(db, data.name):
                raise DuplicateError(f"Category with name {data.name} already exists")

        update_data: dict = data.model_dump(exclude_none=True)
        update_data["updated_at"] = utc_now()
        updated: Category | None = await self.repository.update(db, category_id, update_data)
        if updated is None:
            raise NotFoundError(f"Category not found with id: {category_id}")
        return self._to_response(updated)

    async def get_category(self, db: AsyncSession, category_id: int) -> CategoryResponse:
        return self._to_response(await self._get_or_404(db, category_id))

    async def get_category_by_name(self, db: AsyncSession, name: str) -> CategoryResponse:
        category: Category | None = await self.repository.find_by_name(db, name)
        if category is None:
            raise NotFoundError(f"Category not found with name: {name}")
        return self._to_response(category)

    async def list_categories(self, db: AsyncSession) -> list[CategoryResponse]:
        return [self._to_response(c) for c in await self.repository.get_all(db)]

    async def search_categories(self, db: AsyncSession, name: str) -> list[CategoryResponse]:
        return [self._to_response(c) for c in await self.repository.search_by_name(db, name)]

    async def get_active_categories(self, db: AsyncSession) -> list[CategoryResponse]:
        return [self._to_response(c) for c in await self.repository.find_active(db)]

    async def count_active_categories(self, db: AsyncSession) -> int:
        return await self.repository.count_active(db)

    async def delete_category(self, db: AsyncSession, category_id: int) -> None:
        """분류를 삭제합니다. 참조하던 상품은 분류 없음으로 남습니다.

        Delete a category; products that referenced it keep existing with
        ``category_id = None``.

        Raises:
            NotFoundError: 분류를 찾을 수 없을 때 (Category not found)
        """
        logger.info("Deleting category with id: %s", category_id)
        await self._get_or_404(db, category_id)
        await self.repository.detach_products(db, category_id)
        await self.repository.delete(db, category_id)


# 싱글턴 인스턴스 — Singleton instance
category_service: CategoryService = CategoryService(category_repository)
