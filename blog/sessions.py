"""Server-side login sessions.

A :class:`SessionStore` maps opaque cookie tokens to the authenticated
principal. One store is created per application and hung on ``app.state``;
the auth gate and the login/logout routes reach it through the request,
never through a module global.
"""
from __future__ import annotations

import logging
import secrets
import time
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class Session:
    token: str
    principal: str
    account_id: int
    expires_at: float
    created_at: float = field(default_factory=time.time)
    valid: bool = True

    def is_active(self, now: float | None = None) -> bool:
        return self.valid and (now or time.time()) < self.expires_at


class SessionStore:
    """
    In-process token → session mapping with a fixed TTL per session.

    Expired entries are purged lazily when looked up; :meth:`purge_expired`
    sweeps the whole table and is called on every new login so the map
    cannot grow without bound.
    """

    MIN_TTL_SECONDS = 60

    def __init__(self, ttl_seconds: int = 1800) -> None:
        if ttl_seconds < self.MIN_TTL_SECONDS:
            raise ValueError(
                f"session TTL must be at least {self.MIN_TTL_SECONDS}s, got {ttl_seconds}"
            )
        self.ttl_seconds = ttl_seconds
        self._sessions: dict[str, Session] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self, principal: str, account_id: int) -> Session:
        """Open a session for *principal* and return it (token included)."""
        self.purge_expired()
        token = secrets.token_urlsafe(32)
        session = Session(
            token=token,
            principal=principal,
            account_id=account_id,
            expires_at=time.time() + self.ttl_seconds,
        )
        self._sessions[token] = session
        logger.debug("Session opened for account_id=%s", account_id)
        return session

    def get(self, token: str | None) -> Session | None:
        """Return the live session for *token*, or None."""
        if not token:
            return None
        session = self._sessions.get(token)
        if session is None:
            return None
        if not session.is_active():
            self._sessions.pop(token, None)
            return None
        return session

    def invalidate(self, token: str | None) -> bool:
        """
        Invalidate the session server-side.

        Returns True when a session was actually closed. The cookie left on
        the client is useless afterwards even if it is never cleared.
        """
        if not token:
            return False
        session = self._sessions.pop(token, None)
        if session is None:
            return False
        session.valid = False
        logger.debug("Session closed for account_id=%s", session.account_id)
        return True

    def purge_expired(self) -> int:
        now = time.time()
        stale = [t for t, s in self._sessions.items() if not s.is_active(now)]
        for token in stale:
            del self._sessions[token]
        return len(stale)
