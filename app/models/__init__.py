"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
relationship resolution.

Modules:
    catalog: 상품 분류 및 상품 (Category and Product, product service)
    user_profile: 사용자 프로필 (UserProfile, user service)
"""

from app.models.catalog import Category, Product
from app.models.user_profile import UserProfile

__all__ = [
    "Category", "Product",
    "UserProfile",
]
