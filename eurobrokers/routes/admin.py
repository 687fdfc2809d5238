# eurobrokers/routes/admin.py

from datetime import timedelta

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse

from eurobrokers.config import Settings
from eurobrokers.exceptions import InvalidCredentials, LeadNotFound
from eurobrokers.routes.deps import get_db, get_log, get_session, get_settings, require_admin, templates
from eurobrokers.services import auth
from eurobrokers.services.leads import get_lead, list_leads, toggle_contacted
from eurobrokers.services.sessions import Session
from eurobrokers.utils.database import Database
from eurobrokers.utils.log import Log

router = APIRouter()


def parse_lead_id(raw: str) -> int | None:
    """id из пути; нечисловое значение -> None (ответ как для отсутствующей заявки)."""
    try:
        return int(raw)
    except ValueError:
        return None


# ────────────── LOGIN ──────────────
@router.get("/login", response_class=HTMLResponse, summary="Форма входа администратора")
async def login_form(request: Request, session: Session = Depends(get_session)):
    if auth.is_authenticated(session):
        return RedirectResponse("/admin", status_code=status.HTTP_302_FOUND)
    return templates.TemplateResponse(request, "admin/login.html", {"error": None})


@router.post(
    "/login",
    summary="Вход администратора",
    responses={
        302: {"description": "Успешный вход, редирект на /admin"},
        401: {"description": "Неверный email или пароль (причина не уточняется)"},
        500: {"description": "Ошибка базы данных"},
    },
)
async def login_submit(
    request: Request,
    session: Session = Depends(get_session),
    db: Database = Depends(get_db),
    log: Log = Depends(get_log),
    settings: Settings = Depends(get_settings),
):
    """
    Проверяет email и пароль.
    remember=on -> сессия на 30 дней, иначе до закрытия браузера.
    """
    form = await request.form()
    try:
        await auth.login(
            db,
            session,
            email=form.get("email") or "",
            password=form.get("password") or "",
            remember=form.get("remember"),
            log=log,
            remember_lifetime=timedelta(days=settings.SESSION_REMEMBER_DAYS),
        )
    except InvalidCredentials as e:
        return templates.TemplateResponse(
            request, "admin/login.html", {"error": e.message}, status_code=status.HTTP_401_UNAUTHORIZED
        )
    return RedirectResponse("/admin", status_code=status.HTTP_302_FOUND)


# ────────────── LOGOUT ──────────────
@router.get("/logout", summary="Выход администратора")
async def logout(session: Session = Depends(get_session), log: Log = Depends(get_log)):
    await auth.logout(session, log)
    return RedirectResponse("/admin/login", status_code=status.HTTP_302_FOUND)


# ────────────── DASHBOARD ──────────────
@router.get(
    "",
    response_class=HTMLResponse,
    summary="Список заявок (новые сверху)",
    responses={
        302: {"description": "Нет сессии, редирект на /admin/login"},
        500: {"description": "Ошибка базы данных"},
    },
)
async def dashboard(
    request: Request,
    _: int = Depends(require_admin),
    db: Database = Depends(get_db),
    log: Log = Depends(get_log),
):
    leads = await list_leads(db, log)
    return templates.TemplateResponse(request, "admin/dashboard.html", {"leads": leads})


# ────────────── TOGGLE CONTACTED ──────────────
@router.post(
    "/leads/{lead_id}/contacted",
    summary="Переключить флаг 'kontaktováno'",
    responses={
        302: {"description": "Флаг переключён, редирект на /admin"},
        404: {"description": "Заявка не найдена"},
    },
)
async def lead_toggle_contacted(
    lead_id: str,
    _: int = Depends(require_admin),
    db: Database = Depends(get_db),
    log: Log = Depends(get_log),
):
    parsed_id = parse_lead_id(lead_id)
    if parsed_id is None:
        return PlainTextResponse("Nenalezeno.", status_code=status.HTTP_404_NOT_FOUND)
    try:
        await toggle_contacted(db, parsed_id, log)
    except LeadNotFound:
        return PlainTextResponse("Nenalezeno.", status_code=status.HTTP_404_NOT_FOUND)
    return RedirectResponse("/admin", status_code=status.HTTP_302_FOUND)


# ────────────── LEAD DETAIL ──────────────
@router.get(
    "/leads/{lead_id}",
    response_class=HTMLResponse,
    summary="Детали заявки",
    responses={
        404: {"description": "Заявка не найдена"},
    },
)
async def lead_detail(
    request: Request,
    lead_id: str,
    _: int = Depends(require_admin),
    db: Database = Depends(get_db),
    log: Log = Depends(get_log),
):
    parsed_id = parse_lead_id(lead_id)
    if parsed_id is None:
        return PlainTextResponse("Poptávka nenalezena.", status_code=status.HTTP_404_NOT_FOUND)
    try:
        lead = await get_lead(db, parsed_id, log)
    except LeadNotFound:
        return PlainTextResponse("Poptávka nenalezena.", status_code=status.HTTP_404_NOT_FOUND)
    return templates.TemplateResponse(request, "admin/lead.html", {"lead": lead})
