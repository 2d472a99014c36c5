# backend/models/users.py
from sqlalchemy import Column, Integer, String, CheckConstraint
from database import Base

# Store account; role decides which dashboard the login leads to
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(String, CheckConstraint("role IN ('Admin', 'Customer')"), nullable=False, default="Customer")
