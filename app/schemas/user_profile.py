"""사용자 프로필 Pydantic 요청/응답 스키마 정의.

User profile Pydantic request/response schema definitions.
Length and format rules are not declared here; they are checked by the
explicit validators in ``app.utils.validators`` at the router boundary.
"""

from datetime import datetime

from pydantic import BaseModel


class UserProfileCreate(BaseModel):
    """사용자 프로필 생성 요청 스키마.

    User profile creation request schema.

    Attributes:
        user_id: 소유 사용자 참조 (Owning-user reference, optional, unique)
        first_name: 이름 (First name, required)
        last_name: 성 (Last name, required)
        email: 이메일 (Email, required, unique)
        phone / address / city / state / country / zip_code: 연락처·주소 (Contact fields)
        role: 역할 (Role label)
        active: 활성 상태 (Active flag, default True)
    """

    user_id: int | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    zip_code: str | None = None
    role: str | None = None
    active: bool = True


class UserProfileUpdate(BaseModel):
    """사용자 프로필 수정 요청 스키마 (부분 병합).

    User profile update request schema (partial merge).
    Only non-null fields overwrite stored values; user_id is immutable.
    """

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    zip_code: str | None = None
    role: str | None = None
    active: bool | None = None


class UserProfileResponse(BaseModel):
    """사용자 프로필 응답 스키마.

    User profile response schema returned from API.
    """

    id: int
    user_id: int | None
    first_name: str
    last_name: str
    email: str
    phone: str | None
    address: str | None
    city: str | None
    state: str | None
    country: str | None
    zip_code: str | None
    role: str | None
    active: bool
    created_at: datetime
    updated_at: datetime
