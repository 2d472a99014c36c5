from fastapi import APIRouter, Depends

from utils.session_auth import get_session_store, role_required
from utils.sessions import SessionStore

router = APIRouter(prefix="/admin", tags=["Admin"])


# Number of live login sessions in this process
@router.get("/sessions")
def session_stats(
    store: SessionStore = Depends(get_session_store),
    _admin = Depends(role_required("Admin")),
):
    return {"active": len(store)}


# Drop sessions idle past the configured timeout
@router.post("/sessions/evict")
def evict_sessions(
    store: SessionStore = Depends(get_session_store),
    _admin = Depends(role_required("Admin")),
):
    evicted = store.evict_idle()
    return {"evicted": evicted, "active": len(store)}
