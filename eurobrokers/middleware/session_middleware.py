# eurobrokers/middleware/session_middleware.py

from datetime import datetime, timezone

from jwt import encode, decode, InvalidTokenError
from starlette.datastructures import MutableHeaders
from starlette.requests import HTTPConnection
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from eurobrokers.services.sessions import Session, SessionStore

ALGORITHM = "HS256"


class SessionMiddleware:
    """
    Кладёт объект Session в request.state.session до вызова обработчика,
    после обработчика сохраняет/удаляет сессию и выставляет cookie.

    В cookie лежит только подписанный (JWT) идентификатор сессии,
    данные хранятся на сервере в SessionStore.
    """

    def __init__(self, app: ASGIApp, store: SessionStore, secret: str,
                 cookie_name: str = "eurobrokers.sid", secure: bool = False):
        self.app = app
        self.store = store
        self.secret = secret
        self.cookie_name = cookie_name
        self.secure = secure

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        token = HTTPConnection(scope).cookies.get(self.cookie_name)
        session = self.store.get(self.read_session_id(token)) or Session()

        state = scope.setdefault("state", {})
        state["session"] = session

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                cookie = self.commit(session, had_cookie=token is not None)
                if cookie:
                    MutableHeaders(scope=message).append("Set-Cookie", cookie)
            await send(message)

        await self.app(scope, receive, send_wrapper)

    # ────────────── Подпись идентификатора ──────────────
    def sign_session_id(self, session: Session) -> str:
        payload = {"sid": session.id}
        if session.expires_at is not None:
            payload["exp"] = session.expires_at
        return encode(payload, self.secret, algorithm=ALGORITHM)

    def read_session_id(self, token: str | None) -> str | None:
        if not token:
            return None
        try:
            payload = decode(token, self.secret, algorithms=[ALGORITHM])
        except InvalidTokenError:
            # подделанная или просроченная cookie -> анонимная сессия
            return None
        sid = payload.get("sid")
        return sid if isinstance(sid, str) else None

    # ────────────── Cookie ──────────────
    def commit(self, session: Session, had_cookie: bool) -> str | None:
        """
        Применяет изменения сессии к хранилищу и возвращает значение Set-Cookie (или None).
        """
        if session.destroyed:
            self.store.delete(session.id)
            return self.build_cookie("", max_age=0) if had_cookie else None

        if not session.modified:
            return None

        self.store.save(session)
        if session.expires_at is None:
            return self.build_cookie(self.sign_session_id(session))

        max_age = int((session.expires_at - datetime.now(timezone.utc)).total_seconds())
        return self.build_cookie(self.sign_session_id(session), max_age=max(max_age, 0))

    def build_cookie(self, value: str, max_age: int | None = None) -> str:
        parts = [f"{self.cookie_name}={value}", "path=/"]
        if max_age is not None:
            parts.append(f"Max-Age={max_age}")
        parts += ["httponly", "samesite=lax"]
        if self.secure:
            parts.append("secure")
        return "; ".join(parts)
