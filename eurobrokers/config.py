# eurobrokers/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # ────────────── База данных ──────────────
    DB_FILE: str = "data/eurobrokers.db"   # путь к файлу SQLite, каталог создаётся автоматически

    # ────────────── HTTP ──────────────
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # ────────────── Сессии ──────────────
    SESSION_SECRET: str = "change_me"
    SESSION_COOKIE_NAME: str = "eurobrokers.sid"
    SESSION_COOKIE_SECURE: bool = False
    SESSION_REMEMBER_DAYS: int = 30
    SESSION_IDLE_HOURS: int = 24  # сессия "до закрытия браузера" без запросов удаляется

    # ────────────── Администратор ──────────────
    ADMIN_EMAIL: str = "admin@example.com"
    ADMIN_PASSWORD: str = "changeme123"
    ADMIN_RESET: bool = False   # ADMIN_RESET=1 перезаписывает хэш пароля при старте

    # ────────────── Валидация формы ──────────────
    # Чешские форматы: PSČ "100 00", телефон "777 123 456"
    POSTAL_CODE_PATTERN: str = r"[0-9]{3}\s?[0-9]{2}"
    PHONE_PATTERN: str = r"[0-9]{3}\s?[0-9]{3}\s?[0-9]{3}"

    # ────────────── Данные агента для главной страницы ──────────────
    AGENT_NAME: str = "Rostislav Kandel"
    AGENT_TITLE: str = "Realitní makléř"
    AGENT_PHONE: str = "+420 777 224 185"
    AGENT_EMAIL: str = "rkandel@mmreality.cz"
    AGENT_PHOTO: str = "/img/rostislav-kandel.jpg"

    # ────────────── Логирование ──────────────
    LOG_DIR: str = "log"
    LOG_PRINT: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )

    @property
    def agent(self) -> dict:
        return {
            "name": self.AGENT_NAME,
            "title": self.AGENT_TITLE,
            "phone": self.AGENT_PHONE,
            "email": self.AGENT_EMAIL,
            "photo": self.AGENT_PHOTO,
        }


settings = Settings()
