# eurobrokers/routes/deps.py

from pathlib import Path

from fastapi import Depends, Request
from fastapi.templating import Jinja2Templates

from eurobrokers.config import Settings
from eurobrokers.exceptions import LoginRequired
from eurobrokers.services.auth import is_authenticated
from eurobrokers.services.sessions import Session
from eurobrokers.utils.database import Database
from eurobrokers.utils.log import Log

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


# ────────────── Зависимости из app.state (заполняются в lifespan) ──────────────
def get_db(request: Request) -> Database:
    return request.app.state.db


def get_log(request: Request) -> Log:
    return request.app.state.log


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_session(request: Request) -> Session:
    """Сессия, которую SessionMiddleware положил в request.state."""
    return request.state.session


# ────────────── Доступ к админке ──────────────
def require_admin(session: Session = Depends(get_session)) -> int:
    """
    Пропускает запрос, если в сессии есть user_id, иначе LoginRequired
    (обработчик в main.py делает редирект на /admin/login).
    """
    if not is_authenticated(session):
        raise LoginRequired()
    return session.user_id
