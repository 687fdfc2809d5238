# eurobrokers/services/admin_bootstrap.py

from eurobrokers.config import Settings
from eurobrokers.services.users import create_user, get_user_by_email, update_password_hash
from eurobrokers.utils.database import Database
from eurobrokers.utils.log import Log
from eurobrokers.utils.security import hash_password

RESET = "reset"
CREATED = "created"
UNCHANGED = "unchanged"


async def ensure_admin(db: Database, settings: Settings, log: Log | None = None) -> str:
    """
    Гарантирует наличие администратора ADMIN_EMAIL.

        ADMIN_RESET и админ есть  -> новый хэш ADMIN_PASSWORD (reset)
        админа нет                -> создание (created)
        иначе                     -> ничего (unchanged), хэш не вычисляется
    """
    email = settings.ADMIN_EMAIL
    existing = await get_user_by_email(db, email)

    if settings.ADMIN_RESET and existing:
        await update_password_hash(db, email, hash_password(settings.ADMIN_PASSWORD))
        if log:
            await log.log_info("startup", f"Пароль администратора обновлён: {email}")
        return RESET

    if not existing:
        await create_user(db, email, hash_password(settings.ADMIN_PASSWORD))
        if log:
            await log.log_info("startup", f"Администратор создан: {email}")
        return CREATED

    return UNCHANGED
