# eurobrokers/main.py

from fastapi import FastAPI, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse
import uvicorn
from dotenv import load_dotenv
from contextlib import asynccontextmanager
from datetime import timedelta

from eurobrokers.config import Settings
from eurobrokers.exceptions import DatabaseError, LoginRequired
from eurobrokers.middleware.security_headers import SecurityHeadersMiddleware
from eurobrokers.middleware.session_middleware import SessionMiddleware
from eurobrokers.services.admin_bootstrap import ensure_admin
from eurobrokers.services.sessions import SessionStore
from eurobrokers.utils.database import Database
from eurobrokers.utils.log import Log

# --- загрузка переменных окружения ---
load_dotenv()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()

    # --- sync логгер для раннего старта ---
    boot_log = Log(settings.LOG_DIR, settings.LOG_PRINT)

    # ────────────── Lifespan ──────────────
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        boot_log.log_info_sync(target="startup", message="lifespan: startup начат")

        app.state.log = Log(settings.LOG_DIR, settings.LOG_PRINT)

        # База: каталог, таблицы, миграция колонок. Ошибка здесь фатальна.
        db = Database(settings.DB_FILE)
        try:
            await db.connect()
        except DatabaseError as e:
            boot_log.log_error_sync(target="startup", message=f"База не инициализирована: {e}")
            raise
        app.state.db = db
        await app.state.log.log_info(target="db", message=f"База подключена: {settings.DB_FILE}")

        await ensure_admin(db, settings, app.state.log)

        yield

        # shutdown
        await app.state.log.log_info(target="shutdown", message="Остановка приложения")
        await db.close()
        await app.state.log.shutdown()
        boot_log.log_info_sync(target="shutdown", message="Log корректно завершён")

    # ────────────── Создаём FastAPI приложение ──────────────
    app = FastAPI(title="Eurobrokers Leads", lifespan=lifespan)
    app.state.settings = settings
    app.state.sessions = SessionStore(idle_ttl=timedelta(hours=settings.SESSION_IDLE_HOURS))

    # Сессия в request.state.session
    app.add_middleware(
        SessionMiddleware,
        store=app.state.sessions,
        secret=settings.SESSION_SECRET,
        cookie_name=settings.SESSION_COOKIE_NAME,
        secure=settings.SESSION_COOKIE_SECURE,
    )
    app.add_middleware(SecurityHeadersMiddleware)

    # ────────────── Обработчики исключений ──────────────
    @app.exception_handler(LoginRequired)
    async def login_required_handler(request: Request, exc: LoginRequired):
        return RedirectResponse("/admin/login", status_code=status.HTTP_302_FOUND)

    @app.exception_handler(DatabaseError)
    async def database_error_handler(request: Request, exc: DatabaseError):
        await request.app.state.log.log_error(
            "db", f"Ошибка базы данных: {exc}", {"path": request.url.path}
        )
        return PlainTextResponse("Něco se pokazilo.", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    # ────────────── Подключение роутов ──────────────
    from eurobrokers.routes import admin, public

    app.include_router(public.router, tags=["public"])
    app.include_router(admin.router, prefix="/admin", tags=["admin"])

    return app


app = create_app()


def run():
    settings = app.state.settings
    uvicorn.run(
        "eurobrokers.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level="info",
    )


# ────────────── Запуск uvicorn ──────────────
if __name__ == "__main__":
    run()
