# eurobrokers/routes/public.py

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse

from eurobrokers.config import Settings
from eurobrokers.exceptions import DatabaseError, LeadRejected
from eurobrokers.routes.deps import get_db, get_log, get_settings, templates
from eurobrokers.services.intake import validate_lead
from eurobrokers.services.leads import create_lead
from eurobrokers.utils.database import Database
from eurobrokers.utils.log import Log

router = APIRouter()

GENERIC_ERROR = "Něco se pokazilo."


# ────────────── Главная страница с формой ──────────────
@router.get("/", response_class=HTMLResponse, summary="Форма заявки")
async def index(request: Request, settings: Settings = Depends(get_settings)):
    return templates.TemplateResponse(request, "index.html", {"agent": settings.agent})


# ────────────── Приём заявки ──────────────
@router.post(
    "/lead",
    summary="Отправить заявку на продажу недвижимости",
    responses={
        302: {"description": "Заявка сохранена, редирект на /thanks"},
        400: {"description": "Не заполнены обязательные поля или неверный формат"},
        500: {"description": "Ошибка базы данных"},
    },
)
async def submit_lead(
    request: Request,
    db: Database = Depends(get_db),
    log: Log = Depends(get_log),
    settings: Settings = Depends(get_settings),
):
    form = await request.form()

    try:
        lead = validate_lead(form, settings)
    except LeadRejected as e:
        await log.log_warning("lead", "Заявка отклонена валидацией")
        return PlainTextResponse(e.message, status_code=status.HTTP_400_BAD_REQUEST)

    try:
        await create_lead(db, lead, log)
    except DatabaseError as e:
        await log.log_error("lead", f"Ошибка при создании лида: {e}")
        return PlainTextResponse(GENERIC_ERROR, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return RedirectResponse("/thanks", status_code=status.HTTP_302_FOUND)


@router.get("/thanks", response_class=HTMLResponse, summary="Подтверждение заявки")
async def thanks(request: Request):
    return templates.TemplateResponse(request, "thanks.html", {})


@router.get("/health", summary="Проверка живости")
async def health():
    return {"status": "ok"}
