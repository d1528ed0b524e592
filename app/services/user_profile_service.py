"""사용자 프로필 서비스 — 프로필 CRUD 비즈니스 로직.

User Profile Service — Business logic for user profiles.
Handles creation with secondary-key uniqueness checks (owning-user
reference, email), partial-merge updates, activation toggles,
filtered reads and physical deletion.

Update policy: ``update_user`` is a *partial merge*. Only fields that are
present (non-null) in the input overwrite stored values. When the email
changes, its uniqueness is re-checked before the merge is applied.

Lookups that target a single profile raise NotFoundError when absent.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user_profile import UserProfile
from app.repositories.user_profile_repository import (
    UserProfileRepository,
    user_profile_repository,
)
from app.schemas.user_profile import UserProfileCreate, UserProfileResponse, UserProfileUpdate
from app.utils.exceptions import DuplicateError, NotFoundError
from app.utils.pagination import Page, PageRequest, page_count
from app.utils.timestamps import utc_now

logger = logging.getLogger(__name__)

# 정렬 허용 컬럼 — Sortable columns for paginated listing
USER_SORT_FIELDS: tuple[str, ...] = (
    "id", "first_name", "last_name", "email", "role", "city", "country", "created_at", "updated_at",
)


class UserProfileService:
    """사용자 프로필 비즈니스 로직을 처리하는 서비스.

    Service handling user profile business logic. Holds an explicit
    reference to the repository passed in at construction.
    """

    def __init__(self, repository: UserProfileRepository) -> None:
        self.repository: UserProfileRepository = repository

    def _to_response(self, profile: UserProfile) -> UserProfileResponse:
        """프로필 모델을 응답 스키마로 변환합니다.

        Convert a UserProfile model instance to a UserProfileResponse schema.
        """
        return UserProfileResponse(
            id=profile.id,
            user_id=profile.user_id,
            first_name=profile.first_name,
            last_name=profile.last_name,
            email=profile.email,
            phone=profile.phone,
            address=profile.address,
            city=profile.city,
            state=profile.state,
            country=profile.country,
            zip_code=profile.zip_code,
            role=profile.role,
            active=profile.active,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )

    async def _get_or_404(self, db: AsyncSession, profile_id: int) -> UserProfile:
        profile: UserProfile | None = await self.repository.get_by_id(db, profile_id)
        if profile is None:
            logger.warning("User profile not found with id: %s", profile_id)
            raise NotFoundError(f"User not found with id: {profile_id}")
        return profile

    async def create_user(self, db: AsyncSession, data: UserProfileCreate) -> UserProfileResponse:
        """새 사용자 프로필을 생성합니다.

        Create a new user profile after checking that the owning-user
        reference (when given) and the email are not already taken.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 검증된 생성 데이터 (Validated creation payload)

        Returns:
            UserProfileResponse: 생성된 프로필 (Stored profile with generated id)

        Raises:
            DuplicateError: user_id 또는 이메일이 이미 존재할 때
                            (user_id or email already taken)
        """
        logger.info("Creating new user profile for email: %s", data.email)

        if data.user_id is not None and await self.repository.exists_by_user_id(db, data.user_id):
            logger.warning("User with userId %s already exists", data.user_id)
            raise DuplicateError(f"User with userId {data.user_id} already exists")

        if data.email is not None and await self.repository.exists_by_email(db, data.email):
            logger.warning("User with email %s already exists", data.email)
            raise DuplicateError(f"User with email {data.email} already exists")

        now = utc_now()
        profile: UserProfile = await self.repository.create(
            db,
            {**data.model_dump(), "created_at": now, "updated_at": now},
        )
        logger.info("Successfully created user profile with id: %s", profile.id)
        return self._to_response(profile)

    async def update_user(
        self,
        db: AsyncSession,
        profile_id: int,
        data: UserProfileUpdate,
    ) -> UserProfileResponse:
        """사용자 프로필을 부분 병합으로 수정합니다.

        Merge non-null incoming fields into the stored profile.

        Raises:
            NotFoundError: 프로필을 찾을 수 없을 때 (Profile not found)
            DuplicateError: 변경할 이메일이 이미 사용 중일 때 (New email already taken)
        """
        logger.info("Updating user profile with id: %s", profile_id)
        profile: UserProfile = await self._get_or_404(db, profile_id)

        changes: dict = data.model_dump(exclude_none=True)

        # 이메일 변경 시 중복 재확인 — Re-check uniqueness only when the email actually changes
        new_email: str | None = changes.get("email")
        if new_email is not None and new_email != profile.email:
            if await self.repository.exists_by_email(db, new_email):
                logger.warning("Email %s is already taken", new_email)
                raise DuplicateError(f"Email {new_email} is already taken")

        for field, value in changes.items():
            setattr(profile, field, value)
        profile.updated_at = utc_now()

        profile = await self.repository.save(db, profile)
        logger.info("Successfully updated user profile with id: %s", profile_id)
        return self._to_response(profile)

    async def get_user_by_id(self, db: AsyncSession, profile_id: int) -> UserProfileResponse:
        return self._to_response(await self._get_or_404(db, profile_id))

    async def get_user_by_email(self, db: AsyncSession, email: str) -> UserProfileResponse:
        profile: UserProfile | None = await self.repository.find_by_email(db, email)
        if profile is None:
            logger.warning("User profile not found with email: %s", email)
            raise NotFoundError(f"User not found with email: {email}")
        return self._to_response(profile)

    async def get_user_by_user_id(self, db: AsyncSession, user_id: int) -> UserProfileResponse:
        profile: UserProfile | None = await self.repository.find_by_user_id(db, user_id)
        if profile is None:
            raise NotFoundError(f"User not found with userId: {user_id}")
        return self._to_response(profile)

    async def get_all_users(self, db: AsyncSession) -> list[UserProfileResponse]:
        return [self._to_response(p) for p in await self.repository.get_all(db)]

    async def get_users_newest_first(self, db: AsyncSession) -> list[UserProfileResponse]:
        profiles = await self.repository.find_all_newest_first(db)
        return [self._to_response(p) for p in profiles]

    async def get_users_page(
        self,
        db: AsyncSession,
        page_request: PageRequest,
    ) -> Page[UserProfileResponse]:
        """프로필 목록의 한 페이지를 조회합니다 (One sorted page of profiles)."""
        items, total = await self.repository.get_paginated(db, page_request)
        return Page[UserProfileResponse](
            items=[self._to_response(p) for p in items],
            total=total,
            page=page_request.page,
            per_page=page_request.per_page,
            pages=page_count(total, page_request.per_page),
        )

    async def _set_active(self, db: AsyncSession, profile_id: int, active: bool) -> UserProfileResponse:
        # 활성 상태 전환 — active <-> inactive, 반복 호출해도 결과 동일 (idempotent)
        profile: UserProfile = await self._get_or_404(db, profile_id)
        profile.active = active
        profile.updated_at = utc_now()
        profile = await self.repository.save(db, profile)
        logger.info("User profile %s %s", profile_id, "activated" if active else "deactivated")
        return self._to_response(profile)

    async def activate_user(self, db: AsyncSession, profile_id: int) -> UserProfileResponse:
        return await self._set_active(db, profile_id, True)

    async def deactivate_user(self, db: AsyncSession, profile_id: int) -> UserProfileResponse:
        return await self._set_active(db, profile_id, False)

    async def search_by_first_name(self, db: AsyncSession, first_name: str) -> list[UserProfileResponse]:
        profiles = await self.repository.search_by_first_name(db, first_name)
        return [self._to_response(p) for p in profiles]

    async def search_by_last_name(self, db: AsyncSession, last_name: str) -> list[UserProfileResponse]:
        profiles = await self.repository.search_by_last_name(db, last_name)
        return [self._to_response(p) for p in profiles]

    async def search_by_name(self, db: AsyncSession, term: str) -> list[UserProfileResponse]:
        profiles = await self.repository.search_by_name(db, term)
        return [self._to_response(p) for p in profiles]

    async def get_users_by_role(self, db: AsyncSession, role: str) -> list[UserProfileResponse]:
        profiles = await self.repository.find_by_role(db, role)
        return [self._to_response(p) for p in profiles]

    async def get_users_by_city(self, db: AsyncSession, city: str) -> list[UserProfileResponse]:
        profiles = await self.repository.find_by_city(db, city)
        return [self._to_response(p) for p in profiles]

    async def get_users_by_country(self, db: AsyncSession, country: str) -> list[UserProfileResponse]:
        profiles = await self.repository.find_by_country(db, country)
        return [self._to_response(p) for p in profiles]

    async def get_active_users(self, db: AsyncSession) -> list[UserProfileResponse]:
        profiles = await self.repository.find_active(db)
        return [self._to_response(p) for p in profiles]

    async def count_users(self, db: AsyncSession) -> int:
        return await self.repository.count(db)

    async def email_exists(self, db: AsyncSession, email: str) -> bool:
        return await self.repository.exists_by_email(db, email)

    async def user_id_exists(self, db: AsyncSession, user_id: int) -> bool:
        return await self.repository.exists_by_user_id(db, user_id)

    async def delete_user(self, db: AsyncSession, profile_id: int) -> None:
        """사용자 프로필을 물리 삭제합니다.

        Physically delete a user profile.

        Raises:
            NotFoundError: 프로필을 찾을 수 없을 때 (Profile not found)
        """
        logger.info("Deleting user profile with id: %s", profile_id)
        deleted: bool = await self.repository.delete(db, profile_id)
        if not deleted:
            logger.warning("User profile not found with id: %s", profile_id)
            raise NotFoundError(f"User not found with id: {profile_id}")
        logger.info("Successfully deleted user profile with id: %s", profile_id)


# 싱글턴 인스턴스 — Singleton instance
user_profile_service: UserProfileService = UserProfileService(user_profile_repository)
