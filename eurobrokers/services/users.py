# eurobrokers/services/users.py

from sqlalchemy import insert, select, update

from eurobrokers.models.user import users_table
from eurobrokers.schemas.user import User
from eurobrokers.utils.database import Database


async def get_user_by_email(db: Database, email: str) -> User | None:
    """
    Поиск пользователя по email (точное совпадение, с учётом регистра).
    """
    row = await db.fetch_one(select(users_table).where(users_table.c.email == email))
    return User.model_validate(row) if row is not None else None


async def create_user(db: Database, email: str, password_hash: str) -> int:
    result = await db.execute(insert(users_table).values(email=email, password_hash=password_hash))
    return result.lastrowid


async def update_password_hash(db: Database, email: str, password_hash: str) -> int:
    """
    Перезаписывает хэш пароля на месте. Возвращает число изменённых строк.
    """
    result = await db.execute(
        update(users_table).where(users_table.c.email == email).values(password_hash=password_hash)
    )
    return result.rowcount
