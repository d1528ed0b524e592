"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite DB, session, and httpx client fixtures.
Each test gets a fresh database (StaticPool keeps the single in-memory
connection alive), so no cleanup between tests is needed.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from collections.abc import AsyncGenerator  # noqa: E402
from datetime import datetime, timezone  # noqa: E402
from decimal import Decimal  # noqa: E402
from typing import Any  # noqa: E402

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.database import Base, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Category, Product, UserProfile  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트마다 새 인메모리 DB 엔진을 생성하고 스키마를 적용합니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    # SQLite는 FK 제약을 기본으로 강제하지 않음 (SQLite needs FK enforcement switched on)
    @event.listens_for(eng.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_connection: Any, connection_record: Any) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
def _now() -> datetime:
    return datetime.now(timezone.utc)


@pytest_asyncio.fixture
async def category(db: AsyncSession) -> Category:
    """테스트 분류를 생성합니다."""
    c = Category(
        name="Electronics",
        description="Devices",
        active=True,
        created_at=_now(),
        updated_at=_now(),
    )
    db.add(c)
    await db.flush()
    await db.refresh(c)
    return c


@pytest_asyncio.fixture
async def product(db: AsyncSession, category: Category) -> Product:
    """분류에 속한 테스트 상품을 생성합니다."""
    p = Product(
        name="Wireless Mouse",
        description="2.4GHz mouse",
        price=Decimal("19.99"),
        stock_quantity=10,
        category_id=category.id,
        brand="Logi",
        image_url="http://img.example.com/mouse.png",
        sku="WM-001",
        active=True,
        created_at=_now(),
        updated_at=_now(),
    )
    db.add(p)
    await db.flush()
    await db.refresh(p)
    return p


@pytest_asyncio.fixture
async def user_profile(db: AsyncSession) -> UserProfile:
    """테스트 사용자 프로필을 생성합니다."""
    u = UserProfile(
        user_id=100,
        first_name="Jane",
        last_name="Smith",
        email="jane.smith@example.com",
        phone="555-0100",
        city="Seattle",
        country="USA",
        role="USER",
        active=True,
        created_at=_now(),
        updated_at=_now(),
    )
    db.add(u)
    await db.flush()
    await db.refresh(u)
    return u
