# tests/test_auth.py

from datetime import timedelta

import pytest

from conftest import ADMIN_EMAIL, ADMIN_PASSWORD
from eurobrokers.exceptions import InvalidCredentials
from eurobrokers.services import auth
from eurobrokers.services.admin_bootstrap import ensure_admin
from eurobrokers.services.sessions import Session, utcnow


@pytest.fixture
async def admin_db(db, settings):
    await ensure_admin(db, settings)
    return db


@pytest.mark.parametrize("email,password", [
    ("nobody@x.cz", ADMIN_PASSWORD),
    (ADMIN_EMAIL, "spatne-heslo"),
    (ADMIN_EMAIL.upper(), ADMIN_PASSWORD),
    ("", ""),
])
async def test_invalid_credentials_are_indistinguishable(admin_db, log, email, password):
    session = Session()
    with pytest.raises(InvalidCredentials) as exc:
        await auth.login(admin_db, session, email, password, log=log)

    assert exc.value.message == "Neplatné přihlašovací údaje."
    assert session.user_id is None
    assert not session.modified


async def test_login_without_remember_is_browser_session(admin_db, log):
    session = Session()
    user = await auth.login(admin_db, session, ADMIN_EMAIL, ADMIN_PASSWORD, log=log)

    assert session.user_id == user.id
    assert session.expires_at is None
    assert session.modified
    assert auth.is_authenticated(session)


@pytest.mark.parametrize("remember", ["on", "ON", "true", "1"])
async def test_login_with_remember_persists_30_days(admin_db, remember):
    session = Session()
    await auth.login(admin_db, session, ADMIN_EMAIL, ADMIN_PASSWORD, remember=remember)

    delta = session.expires_at - utcnow()
    assert timedelta(days=29, hours=23) < delta <= timedelta(days=30)


@pytest.mark.parametrize("remember", [None, "", "off", "0"])
def test_remember_not_set(remember):
    assert auth.is_remember_set(remember) is False


async def test_logout_is_idempotent(admin_db, log):
    session = Session()
    await auth.login(admin_db, session, ADMIN_EMAIL, ADMIN_PASSWORD)

    await auth.logout(session, log)
    assert session.destroyed
    assert not auth.is_authenticated(session)

    await auth.logout(session, log)
    await auth.logout(Session(), log)


def test_is_authenticated_is_presence_check():
    assert not auth.is_authenticated(None)
    assert not auth.is_authenticated(Session())
    # пользователя с id 12345 нет в базе, но проверка только по сессии
    assert auth.is_authenticated(Session("sid", {"user_id": 12345}))
