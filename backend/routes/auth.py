# backend/routes/auth.py
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Request, Response
from sqlalchemy.orm import Session
from config import settings
from utils.hashing import get_password_hash, verify_password
from utils.session_auth import get_current_session, get_session_store, get_session_token
from utils.sessions import Role, SessionStore, UserSession
from utils.audit import write_log, client_ip
from models import users as models
from schemas import user as schemas
from database import get_db

router = APIRouter(tags=["Auth"])

# Landing page for each role after login
DASHBOARDS = {
    Role.ADMIN: "/admindashboard",
    Role.CUSTOMER: "/customerdashboard",
}


def find_user_by_username(db: Session, username: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.username == username).first()


def authenticate(db: Session, username: str, password: str) -> bool:
    user = find_user_by_username(db, username)
    return user is not None and verify_password(password, user.password_hash)


def _session_info(session: UserSession) -> schemas.SessionInfo:
    return schemas.SessionInfo(
        user_id=session.user_id,
        username=session.username,
        role=session.role.value,
        redirect=DASHBOARDS[session.role],
    )


# Register a new customer account
@router.post("/signup", response_model=schemas.UserResponse, status_code=status.HTTP_201_CREATED)
def signup(payload: schemas.UserCreate, request: Request, db: Session = Depends(get_db)):
    username = payload.username.strip()

    if find_user_by_username(db, username):
        write_log(db, user_id=None, username=username, action="SIGNUP", resource="auth",
                  status="FAIL", ip=client_ip(request), meta={"reason": "Username exists"})
        raise HTTPException(status_code=400, detail="Username already taken")

    new_user = models.User(username=username, password_hash=get_password_hash(payload.password),
                           role=Role.CUSTOMER.value)
    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    write_log(db, user_id=new_user.id, username=username, action="SIGNUP", resource="auth",
              status="SUCCESS", ip=client_ip(request))
    return new_user


# Verify credentials and open a new session; every login gets its own basket
@router.post("/login", response_model=schemas.SessionInfo)
def login(
    payload: schemas.UserLogin,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    store: SessionStore = Depends(get_session_store),
):
    user = find_user_by_username(db, payload.username)
    if user is None or not authenticate(db, payload.username, payload.password):
        write_log(db, user_id=(user.id if user else None), username=payload.username, action="LOGIN",
                  resource="auth", status="FAIL", ip=client_ip(request))
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    token = store.create_session(user.id, user.username, user.role)
    response.set_cookie(settings.SESSION_COOKIE_NAME, token, httponly=True, path="/")

    write_log(db, user_id=user.id, username=user.username, action="LOGIN", resource="auth",
              status="SUCCESS", ip=client_ip(request))
    return _session_info(store.get_session(token))


# End the session (if any) and drop the cookie; always succeeds
@router.post("/logout")
def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    store: SessionStore = Depends(get_session_store),
):
    store.end_session(token)
    response.delete_cookie(settings.SESSION_COOKIE_NAME, path="/")
    return {"detail": "Logged out"}


# Current session details
@router.get("/me", response_model=schemas.SessionInfo)
def me(session: UserSession = Depends(get_current_session)):
    return _session_info(session)
