# backend/models/log.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON, func
from database import Base

# Audit trail of session and basket actions
class AuditEntry(Base):
    __tablename__ = "audit_log"

    id = Column(Integer, primary_key=True, index=True)
    ts = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    # Who did it; user_id is empty for failed logins of unknown users
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    username = Column(String(100), nullable=True)

    action = Column(String(50), index=True)      # LOGIN, BASKET_ADD, CHECKOUT ...
    resource = Column(String(50), index=True)    # auth, basket, order
    status = Column(String(20), index=True)      # SUCCESS / FAIL
    ip = Column(String(64), nullable=True)

    meta = Column(JSON, nullable=True)
