"""사용자 프로필 레포지토리 — 프로필 CRUD 및 검색 쿼리.

User Profile Repository — CRUD and lookup queries for user profiles.
Extends BaseRepository with owning-user, email, name, role, location
and active-flag queries.
"""

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user_profile import UserProfile
from app.repositories.base import BaseRepository


class UserProfileRepository(BaseRepository[UserProfile]):
    """user_profiles 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the user_profiles table.
    """

    def __init__(self) -> None:
        super().__init__(UserProfile)

    async def find_by_user_id(self, db: AsyncSession, user_id: int) -> UserProfile | None:
        """소유 사용자 참조로 조회합니다 (Lookup by owning-user reference)."""
        return await self.find_one_by(db, "user_id", user_id)

    async def find_by_email(self, db: AsyncSession, email: str) -> UserProfile | None:
        return await self.find_one_by(db, "email", email)

    async def exists_by_user_id(self, db: AsyncSession, user_id: int) -> bool:
        return await self.exists(db, {"user_id": user_id})

    async def exists_by_email(self, db: AsyncSession, email: str) -> bool:
        return await self.exists(db, {"email": email})

    async def search_by_first_name(self, db: AsyncSession, term: str) -> list[UserProfile]:
        return await self.find_by_substring(db, "first_name", term)

    async def search_by_last_name(self, db: AsyncSession, term: str) -> list[UserProfile]:
        return await self.find_by_substring(db, "last_name", term)

    async def search_by_name(self, db: AsyncSession, term: str) -> list[UserProfile]:
        """이름 또는 성에 부분 문자열이 포함된 프로필을 검색합니다.

        Case-insensitive substring match against first OR last name.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            term: 검색어 (Search term)

        Returns:
            list[UserProfile]: 일치하는 프로필 목록 (Matching profiles)
        """
        lowered: str = term.lower()
        query: Select = (
            select(UserProfile)
            .where(
                or_(
                    func.lower(UserProfile.first_name).contains(lowered, autoescape=True),
                    func.lower(UserProfile.last_name).contains(lowered, autoescape=True),
                )
            )
            .order_by(UserProfile.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_by_role(self, db: AsyncSession, role: str) -> list[UserProfile]:
        return await self.find_by_equals(db, "role", role)

    async def find_by_city(self, db: AsyncSession, city: str) -> list[UserProfile]:
        return await self.find_by_equals(db, "city", city)

    async def find_by_country(self, db: AsyncSession, country: str) -> list[UserProfile]:
        return await self.find_by_equals(db, "country", country)

    async def find_active(self, db: AsyncSession) -> list[UserProfile]:
        return await self.find_by_flag(db, "active", True)

    async def find_all_newest_first(self, db: AsyncSession) -> list[UserProfile]:
        """생성 일시 내림차순으로 전체 조회합니다 (All profiles, newest first)."""
        return await self.get_all(db, order_by=UserProfile.created_at.desc())


# 싱글턴 인스턴스 — Singleton instance
user_profile_repository: UserProfileRepository = UserProfileRepository()
