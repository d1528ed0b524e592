"""기본 CRUD 레포지토리 — 모든 레포지토리의 부모 클래스.

Base CRUD Repository — Parent class for all domain repositories.
Provides generic Create, Read, Update, Delete operations and the explicit
query predicates (equality, case-insensitive substring, boolean flag,
inclusive range) that domain repositories compose into named queries.

Usage:
    class CategoryRepository(BaseRepository[Category]):
        def __init__(self) -> None:
            super().__init__(Category)
"""

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base
from app.utils.pagination import PageRequest, paginate

# 제네릭 타입 변수 — SQLAlchemy 모델을 나타냄
# Generic type variable representing a SQLAlchemy model
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """제네릭 CRUD 레포지토리.

    Generic CRUD repository providing common database operations.
    Repositories only flush; the router commits the request transaction.

    Attributes:
        model: SQLAlchemy 모델 클래스 (The SQLAlchemy model class)
    """

    def __init__(self, model: type[ModelType]) -> None:
        """레포지토리를 초기화합니다.

        Initialize the repository with a model class.

        Args:
            model: 이 레포지토리가 관리할 SQLAlchemy 모델 클래스
                   (SQLAlchemy model class this repository manages)
        """
        self.model: type[ModelType] = model

    # ------------------------------------------------------------------
    # 단건/전체 조회 — Single and full reads
    # ------------------------------------------------------------------

    async def get_by_id(self, db: AsyncSession, record_id: int) -> ModelType | None:
        """ID로 단일 레코드를 조회합니다.

        Retrieve a single record by its identifier.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 조회할 레코드의 ID (Identifier of the record)

        Returns:
            ModelType | None: 조회된 레코드 또는 None (Found record or None)
        """
        return await db.get(self.model, record_id)

    async def get_all(
        self,
        db: AsyncSession,
        order_by: Any | None = None,
    ) -> list[ModelType]:
        """모든 레코드를 조회합니다.

        Retrieve all records, ordered by ``order_by`` or by id.
        """
        query: Select = select(self.model).order_by(
            order_by if order_by is not None else self.model.id
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_paginated(
        self,
        db: AsyncSession,
        page_request: PageRequest,
    ) -> tuple[Sequence[ModelType], int]:
        """페이지네이션이 적용된 레코드 목록을 조회합니다.

        Retrieve one sorted page of records.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            page_request: 페이지 요청 사양 (Validated page request)

        Returns:
            tuple[Sequence[ModelType], int]: (레코드 목록, 전체 개수)
                                             (List of records, total count)
        """
        return await paginate(db, select(self.model), self.model, page_request)

    # ------------------------------------------------------------------
    # 명시적 조건 쿼리 — Explicit predicate queries
    # ------------------------------------------------------------------

    async def find_one_by(self, db: AsyncSession, column_name: str, value: Any) -> ModelType | None:
        """컬럼 동등 조건으로 단일 레코드를 조회합니다 (column = value, at most one row)."""
        query: Select = select(self.model).where(getattr(self.model, column_name) == value)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def find_by_equals(self, db: AsyncSession, column_name: str, value: Any) -> list[ModelType]:
        """컬럼 동등 조건으로 조회합니다 (column = value)."""
        query: Select = (
            select(self.model)
            .where(getattr(self.model, column_name) == value)
            .order_by(self.model.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_by_substring(self, db: AsyncSession, column_name: str, term: str) -> list[ModelType]:
        """대소문자 무시 부분 문자열 조건으로 조회합니다.

        Case-insensitive substring match: ``lower(column) LIKE '%' || lower(term) || '%'``.
        Wildcard characters in ``term`` are matched literally.
        """
        column = getattr(self.model, column_name)
        query: Select = (
            select(self.model)
            .where(func.lower(column).contains(term.lower(), autoescape=True))
            .order_by(self.model.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_by_flag(self, db: AsyncSession, column_name: str, flag: bool = True) -> list[ModelType]:
        """불리언 컬럼 조건으로 조회합니다 (column IS flag)."""
        query: Select = (
            select(self.model)
            .where(getattr(self.model, column_name).is_(flag))
            .order_by(self.model.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def find_by_range(
        self,
        db: AsyncSession,
        column_name: str,
        low: Any,
        high: Any,
    ) -> list[ModelType]:
        """양끝 포함 범위 조건으로 조회합니다 (low <= column <= high)."""
        query: Select = (
            select(self.model)
            .where(getattr(self.model, column_name).between(low, high))
            .order_by(self.model.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # 쓰기 — Writes
    # ------------------------------------------------------------------

    async def create(self, db: AsyncSession, obj_data: dict[str, Any]) -> ModelType:
        """새 레코드를 생성합니다.

        Create a new record in the database.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            obj_data: 생성할 레코드의 데이터 딕셔너리
                      (Dictionary of data for the new record)

        Returns:
            ModelType: 생성된 레코드, ID 포함 (The created record with generated id)
        """
        db_obj: ModelType = self.model(**obj_data)
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def save(self, db: AsyncSession, db_obj: ModelType) -> ModelType:
        """변경된 레코드를 저장합니다 (Flush pending changes of a loaded record)."""
        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def update(
        self,
        db: AsyncSession,
        record_id: int,
        update_data: dict[str, Any],
    ) -> ModelType | None:
        """기존 레코드를 업데이트합니다.

        Update an existing record by its identifier.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            record_id: 업데이트할 레코드의 ID (Identifier of the record)
            update_data: 업데이트할 필드와 값의 딕셔너리
                         (Dictionary of fields and values to update)

        Returns:
            ModelType | None: 업데이트된 레코드 또는 None (Updated record or None)
        """
        db_obj: ModelType | None = await self.get_by_id(db, record_id)
        if db_obj is None:
            return None

        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        return await self.save(db, db_obj)

    async def delete(self, db: AsyncSession, record_id: int) -> bool:
        """레코드를 삭제합니다.

        Physically delete a record by its identifier.

        Returns:
            bool: 삭제 성공 여부 (Whether a record was deleted)
        """
        db_obj: ModelType | None = await self.get_by_id(db, record_id)
        if db_obj is None:
            return False

        await db.delete(db_obj)
        await db.flush()
        return True

    # ------------------------------------------------------------------
    # 존재/집계 — Existence and aggregates
    # ------------------------------------------------------------------

    async def exists(self, db: AsyncSession, filters: dict[str, Any]) -> bool:
        """주어진 조건에 일치하는 레코드가 존재하는지 확인합니다.

        Check if a record matching all equality filters exists.
        """
        return await self.count(db, filters) > 0

    async def exists_by_id(self, db: AsyncSession, record_id: int) -> bool:
        """ID 존재 여부를 확인합니다 (Identifier existence check)."""
        return await self.exists(db, {"id": record_id})

    async def count(self, db: AsyncSession, filters: dict[str, Any] | None = None) -> int:
        """조건에 맞는 레코드 수를 셉니다 (Count records matching equality filters)."""
        query: Select = select(func.count()).select_from(self.model)
        for column_name, value in (filters or {}).items():
            query = query.where(getattr(self.model, column_name) == value)

        return (await db.execute(query)).scalar() or 0
