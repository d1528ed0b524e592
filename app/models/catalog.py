"""상품 카탈로그 SQLAlchemy ORM 모델 정의.

Product catalog SQLAlchemy ORM model definitions.
Includes Category and Product entities for the product service.

Tables:
    - categories: 상품 분류 (Product categories, unique name)
    - products: 상품 (Products, unique SKU)
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import BigInteger, Boolean, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

# 식별자 타입 — BIGINT on PostgreSQL, INTEGER on SQLite (required for rowid autoincrement)
IdType = BigInteger().with_variant(Integer, "sqlite")


class Category(Base):
    """상품 분류 모델.

    Product category model. Referenced by Product.category_id;
    deleting a category detaches its products (SET NULL).

    Attributes:
        id: 자동 증가 식별자 (Auto-increment identifier)
        name: 분류 이름, 고유 (Category name, unique)
        description: 설명 (Optional description)
        active: 활성 상태 (Active status flag)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    # 분류 이름 — Unique category name
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    # 타임스탬프 — 서비스 계층에서 명시적으로 기록 (Stamped explicitly by the service layer)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    products = relationship("Product", back_populates="category", passive_deletes=True)


class Product(Base):
    """상품 모델.

    Product model — a sellable catalog item.

    Attributes:
        id: 자동 증가 식별자 (Auto-increment identifier)
        name: 상품명 (Product name)
        description: 상품 설명 (Optional description)
        price: 가격, 소수점 2자리 고정 (Fixed-point price, 2 decimal places)
        stock_quantity: 재고 수량 (Units in stock)
        category_id: 분류 FK (Category reference, nullable)
        brand: 브랜드명 (Brand name)
        image_url: 이미지 URL (Image URL)
        sku: 재고 관리 코드, 고유 (Stock keeping unit, unique)
        active: 활성 상태 (Active status flag)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 가격 — NUMERIC(10, 2)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    stock_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # 분류 FK — 분류 삭제 시 NULL 처리 (SET NULL when the category is deleted)
    category_id: Mapped[int | None] = mapped_column(
        IdType, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True
    )
    brand: Mapped[str | None] = mapped_column(String(100), nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    # SKU — 전체 상품에서 고유 (Unique across all products)
    sku: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    category = relationship("Category", back_populates="products")
