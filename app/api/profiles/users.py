"""사용자 프로필 라우터 — 프로필 CRUD, 상태 전환, 검색 엔드포인트.

User Profile Router — CRUD, activation toggle, search and aggregate
endpoints for user profiles. Request bodies are validated explicitly
before reaching the service; the router commits after each mutating call.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import IdPath, pagination_params, set_total_count
from app.database import get_db
from app.schemas.user_profile import UserProfileCreate, UserProfileResponse, UserProfileUpdate
from app.services.user_profile_service import (
    USER_SORT_FIELDS,
    UserProfileService,
    user_profile_service,
)
from app.utils.exceptions import raise_for_violations
from app.utils.pagination import Page, PageRequest
from app.utils.validators import validate_user_create, validate_user_update


def create_router(service: UserProfileService) -> APIRouter:
    """사용자 프로필 서비스를 사용하는 라우터를 생성합니다.

    Build the user profile router bound to ``service``.
    Static paths are registered before ``/{profile_id}``.
    """
    router: APIRouter = APIRouter()

    @router.post("", response_model=UserProfileResponse, status_code=201)
    async def create_user(
        data: UserProfileCreate,
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> UserProfileResponse:
        """새 사용자 프로필을 생성합니다 (Create a user profile)."""
        raise_for_violations(validate_user_create(data))
        result: UserProfileResponse = await service.create_user(db, data)
        await db.commit()
        return result

    @router.get("", response_model=list[UserProfileResponse])
    async def get_all_users(
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> list[UserProfileResponse]:
        return await service.get_all_users(db)

    @router.get("/page", response_model=Page[UserProfileResponse])
    async def get_users_page(
        response: Response,
        page_request: Annotated[PageRequest, Depends(pagination_params(USER_SORT_FIELDS))],
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> Page[UserProfileResponse]:
        """프로필 목록을 페이지 단위로 조회합니다 (Paginated listing)."""
        page: Page[UserProfileResponse] = await service.get_users_page(db, page_request)
        set_total_count(response, page.total)
        return page

    @router.get("/recent", response_model=list[UserProfileResponse])
    async def get_users_newest_first(
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> list[UserProfileResponse]:
        """생성 일시 내림차순 목록 (All profiles, newest first)."""
        return await service.get_users_newest_first(db)

    @router.get("/active", response_model=list[UserProfileResponse])
    async def get_active_users(
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> list[UserProfileResponse]:
        return await service.get_active_users(db)

    @router.get("/count", response_model=int)
    async def count_users(
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> int:
        return await service.count_users(db)

    @router.get("/health", response_class=PlainTextResponse)
    async def health_check() -> str:
        """서비스 상태 확인 (Liveness probe)."""
        return "User Service is running"

    @router.get("/search", response_model=list[UserProfileResponse])
    async def search_by_name(
        q: Annotated[str, Query(description="이름 또는 성 부분 문자열 (First or last name substring)")],
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> list[UserProfileResponse]:
        return await service.search_by_name(db, q)

    @router.get("/search/firstname", response_model=list[UserProfileResponse])
    async def search_by_first_name(
        first_name: Annotated[str, Query(alias="firstName")],
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> list[UserProfileResponse]:
        return await service.search_by_first_name(db, first_name)

    @router.get("/search/lastname", response_model=list[UserProfileResponse])
    async def search_by_last_name(
        last_name: Annotated[str, Query(alias="lastName")],
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> list[UserProfileResponse]:
        return await service.search_by_last_name(db, last_name)

    @router.get("/email/{email}", response_model=UserProfileResponse)
    async def get_user_by_email(
        email: str,
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> UserProfileResponse:
        return await service.get_user_by_email(db, email)

    @router.get("/user-id/{user_id}", response_model=UserProfileResponse)
    async def get_user_by_user_id(
        user_id: IdPath,
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> UserProfileResponse:
        return await service.get_user_by_user_id(db, user_id)

    @router.get("/role/{role}", response_model=list[UserProfileResponse])
    async def get_users_by_role(
        role: str,
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> list[UserProfileResponse]:
        return await service.get_users_by_role(db, role)

    @router.get("/city/{city}", response_model=list[UserProfileResponse])
    async def get_users_by_city(
        city: str,
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> list[UserProfileResponse]:
        return await service.get_users_by_city(db, city)

    @router.get("/country/{country}", response_model=list[UserProfileResponse])
    async def get_users_by_country(
        country: str,
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> list[UserProfileResponse]:
        return await service.get_users_by_country(db, country)

    @router.get("/exists/email/{email}", response_model=bool)
    async def email_exists(
        email: str,
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> bool:
        return await service.email_exists(db, email)

    @router.get("/exists/user-id/{user_id}", response_model=bool)
    async def user_id_exists(
        user_id: IdPath,
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> bool:
        return await service.user_id_exists(db, user_id)

    @router.get("/{profile_id}", response_model=UserProfileResponse)
    async def get_user_by_id(
        profile_id: IdPath,
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> UserProfileResponse:
        return await service.get_user_by_id(db, profile_id)

    @router.put("/{profile_id}", response_model=UserProfileResponse)
    async def update_user(
        profile_id: IdPath,
        data: UserProfileUpdate,
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> UserProfileResponse:
        """사용자 프로필을 부분 병합으로 수정합니다 (Partial-merge update)."""
        raise_for_violations(validate_user_update(data))
        result: UserProfileResponse = await service.update_user(db, profile_id, data)
        await db.commit()
        return result

    @router.delete("/{profile_id}", status_code=204)
    async def delete_user(
        profile_id: IdPath,
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> None:
        await service.delete_user(db, profile_id)
        await db.commit()

    @router.patch("/{profile_id}/activate", response_model=UserProfileResponse)
    async def activate_user(
        profile_id: IdPath,
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> UserProfileResponse:
        """계정을 활성화합니다 (Activate; idempotent)."""
        result: UserProfileResponse = await service.activate_user(db, profile_id)
        await db.commit()
        return result

    @router.patch("/{profile_id}/deactivate", response_model=UserProfileResponse)
    async def deactivate_user(
        profile_id: IdPath,
        db: Annotated[AsyncSession, Depends(get_db)],
    ) -> UserProfileResponse:
        """계정을 비활성화합니다 (Deactivate; idempotent)."""
        result: UserProfileResponse = await service.deactivate_user(db, profile_id)
        await db.commit()
        return result

    return router


router: APIRouter = create_router(user_profile_service)
