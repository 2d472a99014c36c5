# utils/session_auth.py
from datetime import timedelta
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import APIKeyCookie

from config import settings
from utils.sessions import SessionStore, UserSession

# Session token travels in an HttpOnly cookie set at login
session_cookie = APIKeyCookie(name=settings.SESSION_COOKIE_NAME, auto_error=False)


def build_session_store() -> SessionStore:
    minutes = settings.SESSION_IDLE_TIMEOUT_MINUTES
    return SessionStore(idle_timeout=timedelta(minutes=minutes) if minutes > 0 else None)


# The store lives on the application, created once at start-up
def get_session_store(request: Request) -> SessionStore:
    return request.app.state.session_store


def get_session_token(token: Optional[str] = Depends(session_cookie)) -> Optional[str]:
    return token


# Resolve the session of the current request or send the client to the login page
def get_current_session(
    token: Optional[str] = Depends(session_cookie),
    store: SessionStore = Depends(get_session_store),
) -> UserSession:
    session = store.get_session(token)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"Location": "/login"},
        )
    return session


# Dependency factory for role checks
def role_required(*allowed_roles):
    def _checker(session: UserSession = Depends(get_current_session)):
        if allowed_roles and session.role.value not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Forbidden"
            )
        return session
    return _checker
