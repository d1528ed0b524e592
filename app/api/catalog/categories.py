"""분류 라우터 — 상품 분류 CRUD 엔드포인트.

Category Router — CRUD and lookup endpoints for product categories.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import IdPath
from app.database import get_db
from app.schemas.catalog import CategoryCreate, CategoryResponse, CategoryUpdate
from app.services.category_service import CategoryService, category_service
from app.utils.exceptions import raise_for_violations
from app.utils.validators import validate_category_create, validate_category_update


def create_router(service: CategoryService) -> APIRouter:
    """분류 서비스를 사용하는 라우터를 생성합니다 (Build the category router)."""
    router: APIRouter = APIRouter()

    @router.post("", response_model=CategoryResponse, status_code=201)
    async def create_category(
        data: CategoryCreate,
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> CategoryResponse:
        """새 분류를 생성합니다 (Create a category)."""
        raise_for_violations(validate_category_create(data))
        result: CategoryResponse = await service.create_category(db, data)
        await db.commit()
        return result

    @router.get("", response_model=list[CategoryResponse])
    async def list_categories(
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> list[CategoryResponse]:
        return await service.list_categories(db)

    @router.get("/active", response_model=list[CategoryResponse])
    async def get_active_categories(
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> list[CategoryResponse]:
        return await service.get_active_categories(db)

    @router.get("/search", response_model=list[CategoryResponse])
    async def search_categories(
        name: Annotated[str, Query(description="분류명 부분 문자열 (Name substring)")],
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> list[CategoryResponse]:
        return await service.search_categories(db, name)

    @router.get("/count/active", response_model=int)
    async def count_active_categories(
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> int:
        return await service.count_active_categories(db)

    @router.get("/name/{name}", response_model=CategoryResponse)
    async def get_category_by_name(
        name: str,
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> CategoryResponse:
        return await service.get_category_by_name(db, name)

    @router.get("/{category_id}", response_model=CategoryResponse)
    async def get_category(
        category_id: IdPath,
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> CategoryResponse:
        return await service.get_category(db, category_id)

    @router.put("/{category_id}", response_model=CategoryResponse)
    async def update_category(
        category_id: IdPath,
        data: CategoryUpdate,
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> CategoryResponse:
        """분류 정보를 부분 수정합니다 (Partial update)."""
        raise_for_violations(validate_category_update(data))
        result: CategoryResponse = await service.update_category(db, category_id, data)
        await db.commit()
        return result

    @router.delete("/{category_id}", status_code=204)
    async def delete_category(
        category_id: IdPath,
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> None:
        """분류를 삭제합니다 (Delete; referencing products are detached)."""
        await service.delete_category(db, category_id)
        await db.commit()

    return router


router: APIRouter = create_router(category_service)
