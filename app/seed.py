"""초기 데이터 시드 스크립트 — 분류, 상품, 사용자 프로필 생성.

Seed script — Creates sample categories, products and user profiles.
Run this script once to populate a development database.

Usage:
    python -m app.seed

Creates:
    - 2개 분류: Electronics, Books (2 categories)
    - 3개 상품 (3 products)
    - 2개 사용자 프로필: 일반 사용자, 관리자 (2 profiles)
"""

import asyncio
import logging
from decimal import Decimal

from sqlalchemy import select

from app.database import Base, async_session, engine
from app.models import Category, Product, UserProfile
from app.utils.timestamps import utc_now

logger = logging.getLogger(__name__)


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Seed the database with sample data.
    Creates tables if they don't exist, then inserts categories,
    products and user profiles.

    Idempotent: 이미 시드된 경우 건너뜁니다 (Skips if already seeded).
    """
    # 테이블 생성 — DDL 실행 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        # 분류가 하나라도 있으면 건너뜀 (Any existing category means already seeded)
        result = await db.execute(select(Category).limit(1))
        if result.scalar_one_or_none():
            logger.info("Already seeded. Skipping.")
            return

        now = utc_now()

        categories: dict[str, Category] = {}
        for name, description in [
            ("Electronics", "Devices and accessories"),
            ("Books", "Printed and digital books"),
        ]:
            category = Category(
                name=name, description=description, active=True, created_at=now, updated_at=now
            )
            db.add(category)
            await db.flush()  # flush로 category.id 생성 (Flush to generate category.id)
            categories[name] = category

        products_data: list[tuple[str, str, str, int, str, str]] = [
            ("Wireless Mouse", "19.99", "WM-001", 150, "Electronics", "Logi"),
            ("USB-C Hub", "34.50", "HUB-7", 40, "Electronics", "Anker"),
            ("Python Cookbook", "45.00", "BK-PY-3", 12, "Books", "O'Reilly"),
        ]
        for name, price, sku, stock, category_name, brand in products_data:
            db.add(Product(
                name=name,
                price=Decimal(price),
                sku=sku,
                stock_quantity=stock,
                category_id=categories[category_name].id,
                brand=brand,
                active=True,
                created_at=now,
                updated_at=now,
            ))

        db.add(UserProfile(
            user_id=1,
            first_name="John",
            last_name="Doe",
            email="john.doe@example.com",
            city="Seattle",
            country="USA",
            role="USER",
            active=True,
            created_at=now,
            updated_at=now,
        ))
        db.add(UserProfile(
            user_id=2,
            first_name="Admin",
            last_name="User",
            email="admin@example.com",
            role="ADMIN",
            active=True,
            created_at=now,
            updated_at=now,
        ))

        await db.commit()
        logger.info(
            "Seeded: %d categories, %d products, 2 user profiles",
            len(categories), len(products_data),
        )


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed())
