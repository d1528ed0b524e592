"""사용자 프로필 API 라우터 패키지 — 사용자 서비스 엔드포인트 통합.

User profile API router package — Aggregates the user service endpoints.

Included routers:
    - users: 사용자 프로필 관리 (User profile management)
"""

from fastapi import APIRouter

from app.api.profiles.users import router as users_router

profile_router: APIRouter = APIRouter()

profile_router.include_router(users_router, prefix="/users", tags=["User Management"])
