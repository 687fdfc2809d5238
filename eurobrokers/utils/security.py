# eurobrokers/utils/security.py

"""
Хэширование и проверка паролей администратора.
Схема sha256_crypt из passlib: хэш хранится строкой в users.password_hash.
"""

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["sha256_crypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """
    Хэширует пароль (новая соль при каждом вызове).

    :param password: пароль в открытом виде
    :return: строка хэша для колонки users.password_hash
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """
    Проверяет пароль против хэша.

    Если хэша нет (пользователь не найден), выполняется холостая проверка,
    чтобы оба случая занимали сопоставимое время. Результат всегда False.
    """
    if not hashed_password:
        pwd_context.dummy_verify()
        return False
    try:
        return pwd_context.verify(plain_password or "", hashed_password)
    except ValueError:
        # хэш в базе не распознан passlib
        return False
