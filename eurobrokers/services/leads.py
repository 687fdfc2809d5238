# eurobrokers/services/leads.py

from sqlalchemy import insert, select, update

from eurobrokers.exceptions import LeadNotFound
from eurobrokers.models.lead import leads_table
from eurobrokers.schemas.lead import Lead, LeadCreate
from eurobrokers.utils.database import Database
from eurobrokers.utils.log import Log


async def create_lead(db: Database, lead: LeadCreate, log: Log | None = None) -> int:
    """
    Сохранение нового лида. contacted и created_at проставляет база.
    """
    result = await db.execute(insert(leads_table).values(**lead.model_dump()))

    if log:
        await log.log_info("lead", "Лид создан", {"id": result.lastrowid, "city": lead.city, "type": lead.type})
    return result.lastrowid


async def list_leads(db: Database, log: Log | None = None) -> list[Lead]:
    """
    Все лиды, новые сверху. Без пагинации.
    """
    rows = await db.fetch_many(
        select(leads_table).order_by(leads_table.c.created_at.desc(), leads_table.c.id.desc())
    )
    leads = [Lead.model_validate(row) for row in rows]

    if log:
        await log.log_info("lead", f"{len(leads)} лидов загружено")
    return leads


async def get_lead(db: Database, lead_id: int, log: Log | None = None) -> Lead:
    """
    Чтение лида по ID. Нет такого -> LeadNotFound.
    """
    row = await db.fetch_one(select(leads_table).where(leads_table.c.id == lead_id))
    if row is None:
        if log:
            await log.log_warning("lead", "Лид не найден", {"id": lead_id})
        raise LeadNotFound(lead_id)
    return Lead.model_validate(row)


async def toggle_contacted(db: Database, lead_id: int, log: Log | None = None) -> None:
    """
    Переключает флаг contacted.
    Чтение и запись не атомарны: при одновременных переключениях побеждает последняя запись.
    """
    row = await db.fetch_one(select(leads_table.c.contacted).where(leads_table.c.id == lead_id))
    if row is None:
        if log:
            await log.log_warning("lead", "Лид не найден для переключения", {"id": lead_id})
        raise LeadNotFound(lead_id)

    contacted = not bool(row["contacted"])
    await db.execute(update(leads_table).where(leads_table.c.id == lead_id).values(contacted=contacted))

    if log:
        await log.log_info("lead", "Флаг contacted переключён", {"id": lead_id, "contacted": contacted})
