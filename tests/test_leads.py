# tests/test_leads.py

import pytest

from conftest import VALID_FORM, query
from eurobrokers.exceptions import LeadNotFound
from eurobrokers.services.intake import validate_lead
from eurobrokers.services.leads import create_lead, get_lead, list_leads, toggle_contacted


async def add_lead(db, log=None, **overrides):
    data = dict(VALID_FORM)
    data.update(overrides)
    return await create_lead(db, validate_lead(data), log)


async def test_create_and_get(db, log):
    lead_id = await add_lead(db, log)

    lead = await get_lead(db, lead_id, log)
    assert lead.id == lead_id
    assert lead.type == "byt"
    assert lead.balcony == "Ano"
    assert lead.layout == ""
    assert lead.contacted is False
    assert lead.created_at is not None


async def test_get_missing_raises(db, log):
    with pytest.raises(LeadNotFound) as exc:
        await get_lead(db, 999, log)
    assert exc.value.lead_id == 999


async def test_list_is_newest_first(db, settings):
    first = await add_lead(db, city="Brno")
    second = await add_lead(db, city="Ostrava")
    third = await add_lead(db, city="Plzeň")

    leads = await list_leads(db)
    assert [lead.id for lead in leads] == [third, second, first]

    # более старый created_at -> ниже в списке
    await db.execute(
        "UPDATE leads SET created_at = '2020-01-01 00:00:00' WHERE id = :id", {"id": third}
    )
    leads = await list_leads(db)
    assert [lead.id for lead in leads] == [second, first, third]


async def test_list_empty(db):
    assert await list_leads(db) == []


async def test_toggle_twice_restores_flag(db, log, settings):
    lead_id = await add_lead(db)

    assert await toggle_contacted(db, lead_id, log) is None
    assert (await get_lead(db, lead_id)).contacted is True
    assert query(settings.DB_FILE, "SELECT contacted FROM leads WHERE id = ?", (lead_id,))[0]["contacted"] == 1

    await toggle_contacted(db, lead_id, log)
    assert (await get_lead(db, lead_id)).contacted is False


async def test_toggle_missing_raises(db, log):
    with pytest.raises(LeadNotFound):
        await toggle_contacted(db, 42, log)
