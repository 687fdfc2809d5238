# tests/test_admin_bootstrap.py

from conftest import ADMIN_EMAIL, ADMIN_PASSWORD, query
from eurobrokers.services.admin_bootstrap import CREATED, RESET, UNCHANGED, ensure_admin
from eurobrokers.utils.security import verify_password


def admin_rows(settings):
    return query(settings.DB_FILE, "SELECT * FROM users WHERE email = ?", (ADMIN_EMAIL,))


async def test_creates_admin_once(db, settings, log):
    assert await ensure_admin(db, settings, log) == CREATED
    rows = admin_rows(settings)
    assert len(rows) == 1
    first_hash = rows[0]["password_hash"]
    assert first_hash != ADMIN_PASSWORD
    assert verify_password(ADMIN_PASSWORD, first_hash)

    assert await ensure_admin(db, settings, log) == UNCHANGED
    rows = admin_rows(settings)
    assert len(rows) == 1
    assert rows[0]["password_hash"] == first_hash


async def test_reset_overwrites_hash(db, settings, log):
    await ensure_admin(db, settings, log)
    old = admin_rows(settings)[0]

    reset_settings = settings.model_copy(update={"ADMIN_RESET": True, "ADMIN_PASSWORD": "nove-heslo"})
    assert await ensure_admin(db, reset_settings, log) == RESET

    rows = admin_rows(settings)
    assert len(rows) == 1
    assert rows[0]["id"] == old["id"]
    assert verify_password("nove-heslo", rows[0]["password_hash"])
    assert not verify_password(ADMIN_PASSWORD, rows[0]["password_hash"])


async def test_reset_without_admin_creates_it(db, settings):
    reset_settings = settings.model_copy(update={"ADMIN_RESET": True})
    assert await ensure_admin(db, reset_settings) == CREATED
    assert len(admin_rows(settings)) == 1


async def test_unchanged_does_not_hash(db, settings, monkeypatch):
    await ensure_admin(db, settings)

    def fail(_password):
        raise AssertionError("hash_password must not be called")

    monkeypatch.setattr("eurobrokers.services.admin_bootstrap.hash_password", fail)
    assert await ensure_admin(db, settings) == UNCHANGED
