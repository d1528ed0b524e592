"""사용자 프로필 SQLAlchemy ORM 모델 정의.

User profile SQLAlchemy ORM model definition for the user service.

Tables:
    - user_profiles: 사용자 프로필 (Profiles, unique user_id and email)
"""

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.catalog import IdType


class UserProfile(Base):
    """사용자 프로필 모델.

    User profile model. Owned exclusively by the user service.

    Attributes:
        id: 자동 증가 식별자 (Auto-increment identifier)
        user_id: 소유 사용자 참조, 고유 (Owning-user reference, unique, optional)
        first_name: 이름 (First name)
        last_name: 성 (Last name)
        email: 이메일, 고유 (Email address, unique)
        phone: 전화번호 (Phone number)
        address: 주소 (Street address)
        city / state / country / zip_code: 지역 정보 (Location fields)
        role: 역할 이름 (Role label, e.g. "USER", "ADMIN")
        active: 활성 상태 (Active status flag)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "user_profiles"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    # 소유 사용자 참조 — 외부 인증 시스템의 사용자 ID (External owning-user id)
    user_id: Mapped[int | None] = mapped_column(BigInteger, unique=True, nullable=True)
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    phone: Mapped[str | None] = mapped_column(String(20), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    city: Mapped[str | None] = mapped_column(String(50), nullable=True)
    state: Mapped[str | None] = mapped_column(String(50), nullable=True)
    country: Mapped[str | None] = mapped_column(String(50), nullable=True)
    zip_code: Mapped[str | None] = mapped_column(String(10), nullable=True)
    role: Mapped[str | None] = mapped_column(String(20), nullable=True, index=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
