# eurobrokers/utils/database.py

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from sqlalchemy import text
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql.expression import Executable

from eurobrokers.exceptions import DatabaseError

# ────────────── Base для моделей ──────────────
Base = declarative_base()  # базовый класс для всех моделей SQLAlchemy

# ────────────── Миграции ──────────────
# Колонки, добавленные после первой версии схемы: (таблица, колонка, тип)
OPTIONAL_COLUMNS = (
    ("leads", "balcony", "TEXT"),
    ("leads", "condition", "TEXT"),
)


@dataclass(frozen=True)
class ExecuteResult:
    lastrowid: int | None
    rowcount: int


def _as_statement(statement: Executable | str) -> Executable:
    if isinstance(statement, str):
        return text(statement)
    return statement


class Database:
    """
    Обёртка над SQLite (sqlite+aiosqlite).

    Три операции с единым контрактом:
        execute    -> ExecuteResult (id вставленной строки, число затронутых строк)
        fetch_one  -> dict или None
        fetch_many -> list[dict] в порядке выдачи
    Любая ошибка драйвера поднимается как DatabaseError.
    """

    def __init__(self, db_file: str, echo: bool = False):
        self.db_file = Path(db_file)
        self.echo = echo  # True можно включить для отладки SQL
        self.engine: AsyncEngine | None = None

    @property
    def url(self) -> str:
        return f"sqlite+aiosqlite:///{self.db_file}"

    # ────────────── Инициализация ──────────────
    async def connect(self) -> None:
        """
        Создаёт каталог базы (рекурсивно), открывает движок,
        создаёт таблицы (если ещё не созданы) и добавляет новые колонки.
        """
        self.db_file.parent.mkdir(parents=True, exist_ok=True)
        self.engine = create_async_engine(self.url, echo=self.echo)

        # модели должны быть импортированы до create_all
        from eurobrokers.models import lead, user  # noqa: F401

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            raise DatabaseError(f"Не удалось создать схему: {e}") from e

        for table, column, ddl_type in OPTIONAL_COLUMNS:
            await self.add_column_if_missing(table, column, ddl_type)

    async def add_column_if_missing(self, table: str, column: str, ddl_type: str) -> bool:
        """
        ALTER TABLE ... ADD COLUMN.
        "duplicate column name" считается успехом (колонка уже есть) -> False.
        Любая другая ошибка фатальна для старта.
        """
        try:
            async with self.engine.begin() as conn:
                await conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {column} {ddl_type}"))
            return True
        except OperationalError as e:
            if "duplicate column name" in str(e.orig).lower():
                return False
            raise DatabaseError(f"Миграция {table}.{column} не удалась: {e}") from e
        except SQLAlchemyError as e:
            raise DatabaseError(f"Миграция {table}.{column} не удалась: {e}") from e

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None

    # ────────────── Операции ──────────────
    async def execute(self, statement: Executable | str, params: Mapping[str, Any] | None = None) -> ExecuteResult:
        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(_as_statement(statement), params)
                return ExecuteResult(lastrowid=result.lastrowid, rowcount=result.rowcount)
        except SQLAlchemyError as e:
            raise DatabaseError(str(e)) from e

    async def fetch_one(self, statement: Executable | str, params: Mapping[str, Any] | None = None) -> dict | None:
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(_as_statement(statement), params)
                row = result.mappings().first()
        except SQLAlchemyError as e:
            raise DatabaseError(str(e)) from e
        return dict(row) if row is not None else None

    async def fetch_many(self, statement: Executable | str, params: Mapping[str, Any] | None = None) -> list[dict]:
        try:
            async with self.engine.connect() as conn:
                result = await conn.execute(_as_statement(statement), params)
                rows = result.mappings().all()
        except SQLAlchemyError as e:
            raise DatabaseError(str(e)) from e
        return [dict(r) for r in rows]
