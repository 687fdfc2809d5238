# eurobrokers/services/sessions.py

import secrets
from datetime import datetime, timedelta, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Session:
    """
    Серверная сессия одного браузера.

    expires_at = None  -> сессия до закрытия браузера (cookie без срока)
    expires_at = dt    -> постоянная сессия до dt
    """

    def __init__(self, session_id: str | None = None, data: dict | None = None,
                 expires_at: datetime | None = None):
        self.id = session_id
        self.data = dict(data or {})
        self.expires_at = expires_at
        self.modified = False
        self.destroyed = False

    @property
    def is_new(self) -> bool:
        return self.id is None

    @property
    def user_id(self) -> int | None:
        return self.data.get("user_id")

    @property
    def is_persistent(self) -> bool:
        return self.expires_at is not None

    def bind_user(self, user_id: int) -> None:
        self.data["user_id"] = user_id
        self.destroyed = False
        self.modified = True

    def persist_for(self, lifetime: timedelta, now: datetime | None = None) -> None:
        self.expires_at = (now or utcnow()) + lifetime
        self.modified = True

    def expire_at_browser_close(self) -> None:
        self.expires_at = None
        self.modified = True

    def destroy(self) -> None:
        self.data.clear()
        self.expires_at = None
        self.destroyed = True

    def is_expired(self, now: datetime | None = None) -> bool:
        return self.expires_at is not None and self.expires_at <= (now or utcnow())


class SessionStore:
    """
    Хранилище сессий в памяти процесса: session_id -> Session.
    Просроченные записи удаляются при обращении.

    У сессии до закрытия браузера срока нет, поэтому она живёт,
    пока к ней обращаются: после idle_ttl без запросов запись удаляется.
    """

    def __init__(self, idle_ttl: timedelta = timedelta(hours=24)):
        self.idle_ttl = idle_ttl
        self._sessions: dict[str, Session] = {}
        self._touched: dict[str, datetime] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    @staticmethod
    def new_id() -> str:
        return secrets.token_urlsafe(32)

    def is_stale(self, session_id: str, now: datetime) -> bool:
        stored = self._sessions[session_id]
        if stored.is_persistent:
            return stored.is_expired(now)
        return self._touched[session_id] + self.idle_ttl <= now

    def get(self, session_id: str | None, now: datetime | None = None) -> Session | None:
        if not session_id:
            return None
        stored = self._sessions.get(session_id)
        if stored is None:
            return None
        now = now or utcnow()
        if self.is_stale(session_id, now):
            self.delete(session_id)
            return None
        self._touched[session_id] = now
        # копия: изменения попадут в хранилище только через save()
        return Session(stored.id, stored.data, stored.expires_at)

    def save(self, session: Session, now: datetime | None = None) -> Session:
        now = now or utcnow()
        if session.id is None:
            session.id = self.new_id()
        self.purge_expired(now)
        self._sessions[session.id] = Session(session.id, session.data, session.expires_at)
        self._touched[session.id] = now
        session.modified = False
        return session

    def delete(self, session_id: str | None) -> None:
        if session_id:
            self._sessions.pop(session_id, None)
            self._touched.pop(session_id, None)

    def purge_expired(self, now: datetime | None = None) -> int:
        now = now or utcnow()
        stale = [sid for sid in self._sessions if self.is_stale(sid, now)]
        for sid in stale:
            self.delete(sid)
        return len(stale)
