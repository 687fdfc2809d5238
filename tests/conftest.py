# tests/conftest.py

import sqlite3

import pytest
from fastapi.testclient import TestClient

from eurobrokers.config import Settings
from eurobrokers.main import create_app
from eurobrokers.utils.database import Database
from eurobrokers.utils.log import Log

ADMIN_EMAIL = "admin@eurobrokers.cz"
ADMIN_PASSWORD = "tajne-heslo-123"

VALID_FORM = {
    "city": "Praha",
    "psc": "100 00",
    "type": "Byt",
    "area": "55",
    "layout": "",
    "balcony": "Ano",
    "condition": "",
    "first_name": "Jan",
    "last_name": "Novák",
    "email": "jan@x.cz",
    "phone": "777 123 456",
}


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        DB_FILE=str(tmp_path / "data" / "nested" / "eurobrokers.db"),
        LOG_DIR=str(tmp_path / "log"),
        LOG_PRINT=False,
        SESSION_SECRET="test-secret",
        ADMIN_EMAIL=ADMIN_EMAIL,
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        ADMIN_RESET=False,
    )


@pytest.fixture
async def log(settings):
    test_log = Log(settings.LOG_DIR, log_print=False)
    yield test_log
    await test_log.shutdown()


@pytest.fixture
async def db(settings):
    database = Database(settings.DB_FILE)
    await database.connect()
    yield database
    await database.close()


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def admin_client(client):
    response = client.post(
        "/admin/login",
        data={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
        follow_redirects=False,
    )
    assert response.status_code == 302
    return client


def query(db_file: str, sql: str, params: tuple = ()) -> list[dict]:
    """Чтение SQLite-файла напрямую, мимо приложения."""
    conn = sqlite3.connect(db_file)
    conn.row_factory = sqlite3.Row
    try:
        return [dict(row) for row in conn.execute(sql, params).fetchall()]
    finally:
        conn.close()
