# backend/utils/sessions.py
import logging
import secrets
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, Dict, Optional

from utils.basket import Basket

logger = logging.getLogger(__name__)

# 32 random bytes -> 256-bit token
TOKEN_BYTES = 32


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Role(str, Enum):
    ADMIN = "Admin"
    CUSTOMER = "Customer"


# One authenticated browsing context with its own basket
@dataclass
class UserSession:
    token: str
    user_id: int
    username: str
    role: Role
    basket: Basket = field(default_factory=Basket)
    created_at: datetime = field(default_factory=_utcnow)
    last_seen: datetime = field(default_factory=_utcnow)


class SessionStore:
    """
    Process-wide registry of live sessions keyed by opaque token.

    Lookups never raise: an empty, unknown, ended or idle-expired token is
    reported as ``None`` and the HTTP layer turns that into a login redirect.
    """

    def __init__(
        self,
        idle_timeout: Optional[timedelta] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._sessions: Dict[str, UserSession] = {}
        self._lock = threading.Lock()
        self._idle_timeout = idle_timeout if idle_timeout else None
        self._clock = clock

    def create_session(self, user_id: int, username: str, role) -> str:
        now = self._clock()
        token = secrets.token_urlsafe(TOKEN_BYTES)
        session = UserSession(
            token=token,
            user_id=user_id,
            username=username,
            role=Role(role),
            created_at=now,
            last_seen=now,
        )
        with self._lock:
            self._sessions[token] = session
        logger.info("Session created for user %s (%s)", user_id, session.role.value)
        return token

    def get_session(self, token: Optional[str]) -> Optional[UserSession]:
        if not token:
            return None
        now = self._clock()
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return None
            if self._expired(session, now):
                del self._sessions[token]
                logger.info("Session of user %s expired after inactivity", session.user_id)
                return None
            session.last_seen = now
            return session

    def end_session(self, token: Optional[str]) -> None:
        if not token:
            return
        with self._lock:
            session = self._sessions.pop(token, None)
        if session is not None:
            logger.info("Session ended for user %s", session.user_id)

    def evict_idle(self) -> int:
        """Drop every session idle for longer than the timeout. Returns how many were dropped."""
        if self._idle_timeout is None:
            return 0
        now = self._clock()
        with self._lock:
            stale = [t for t, s in self._sessions.items() if self._expired(s, now)]
            for token in stale:
                del self._sessions[token]
        if stale:
            logger.info("Evicted %d idle sessions", len(stale))
        return len(stale)

    def _expired(self, session: UserSession, now: datetime) -> bool:
        return self._idle_timeout is not None and now - session.last_seen > self._idle_timeout

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
