import logging
import time

from starlette.requests import HTTPConnection
from starlette.responses import RedirectResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from blog.config import settings

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"

# Reachable without a session.
PUBLIC_PATHS: frozenset[str] = frozenset({"/login", "/signup", "/user", "/health"})
PUBLIC_PREFIXES: tuple[str, ...] = ("/static/",)


def is_public_path(path: str) -> bool:
    if path in PUBLIC_PATHS:
        return True
    return path.startswith(PUBLIC_PREFIXES)


# ---------------------------------------------------------------------------
# Middleware (pure ASGI — avoids BaseHTTPMiddleware ContextVar isolation)
# ---------------------------------------------------------------------------

class AuthGateMiddleware:
    """
    Pure ASGI middleware enforcing the "must be logged in" policy.

    Requests to allow-listed paths pass straight through. Every other
    request must carry a session cookie that the application's
    ``SessionStore`` (``app.state.session_store``) still recognises;
    otherwise the client is redirected to the login view, for HTML and
    JSON paths alike. On success the live ``Session`` is exposed to
    handlers as ``request.state.session``.
    """

    def __init__(self, app: ASGIApp, cookie_name: str | None = None) -> None:
        self.app = app
        self.cookie_name = cookie_name or settings.SESSION_COOKIE_NAME

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        conn = HTTPConnection(scope)
        store = conn.app.state.session_store
        session = store.get(conn.cookies.get(self.cookie_name))
        scope.setdefault("state", {})["session"] = session

        if session is None and not is_public_path(conn.url.path):
            logger.debug("Unauthenticated %s %s -> %s", scope["method"], conn.url.path, LOGIN_PATH)
            response = RedirectResponse(LOGIN_PATH, status_code=302)
            await response(scope, receive, send)
            return

        await self.app(scope, receive, send)


class TimingMiddleware:
    """
    Pure ASGI middleware that adds an ``X-Response-Time-Ms`` header and
    writes one access-log line per request.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        status_code = 500

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                duration_ms = round((time.perf_counter() - start) * 1000, 2)
                headers = list(message.get("headers", []))
                headers.append((b"x-response-time-ms", str(duration_ms).encode()))
                message["headers"] = headers
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            logger.info(
                "%s %s %s %.2fms",
                scope["method"],
                scope["path"],
                status_code,
                (time.perf_counter() - start) * 1000,
            )
