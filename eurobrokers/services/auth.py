# eurobrokers/services/auth.py

from datetime import timedelta

from eurobrokers.exceptions import InvalidCredentials
from eurobrokers.schemas.user import User
from eurobrokers.services.sessions import Session
from eurobrokers.services.users import get_user_by_email
from eurobrokers.utils.database import Database
from eurobrokers.utils.log import Log
from eurobrokers.utils.security import verify_password

REMEMBER_ME_LIFETIME = timedelta(days=30)

# значения чекбокса "Zůstat přihlášen"
_REMEMBER_VALUES = {"on", "1", "true", "yes"}


def is_remember_set(value: str | None) -> bool:
    return (value or "").strip().lower() in _REMEMBER_VALUES


async def login(
    db: Database,
    session: Session,
    email: str,
    password: str,
    remember: str | None = None,
    log: Log | None = None,
    remember_lifetime: timedelta = REMEMBER_ME_LIFETIME,
) -> User:
    """
    Проверка email/пароля и привязка сессии к пользователю.

    Нет пользователя и неверный пароль дают одно и то же InvalidCredentials.
    remember="on" -> сессия на remember_lifetime (30 дней),
    иначе cookie живёт до закрытия браузера.
    """
    user = await get_user_by_email(db, email or "")

    # verify_password без хэша делает холостую проверку
    if not verify_password(password, user.password_hash if user else None):
        if log:
            await log.log_warning("auth", "Неудачная попытка входа", {"email": email})
        raise InvalidCredentials()

    session.bind_user(user.id)
    if is_remember_set(remember):
        session.persist_for(remember_lifetime)
    else:
        session.expire_at_browser_close()

    if log:
        await log.log_info("auth", "Администратор вошёл", {"email": user.email, "remember": session.is_persistent})
    return user


async def logout(session: Session, log: Log | None = None) -> None:
    """
    Уничтожает сессию. Без сессии ничего не делает.
    """
    user_id = session.user_id
    session.destroy()
    if log and user_id is not None:
        await log.log_info("auth", "Администратор вышел", {"user_id": user_id})


def is_authenticated(session: Session | None) -> bool:
    """
    Только проверка наличия user_id в сессии, без запроса к users.
    """
    return session is not None and session.user_id is not None
