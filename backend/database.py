# backend/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
import os
from dotenv import load_dotenv

load_dotenv()

# Database address from the environment, local SQLite file otherwise
SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./appliance_store.db")

# Hosted Postgres URLs still use the old scheme SQLAlchemy no longer accepts
if SQLALCHEMY_DATABASE_URL.startswith("postgres://"):
    SQLALCHEMY_DATABASE_URL = SQLALCHEMY_DATABASE_URL.replace("postgres://", "postgresql://", 1)

# Request handlers run on worker threads, SQLite must allow cross-thread use
if "sqlite" in SQLALCHEMY_DATABASE_URL:
    connect_args = {"check_same_thread": False}
else:
    connect_args = {}

engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args=connect_args
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db():
    # Register every model on Base.metadata before creating tables
    import models.users, models.product, models.order, models.log  # noqa: F401
    Base.metadata.create_all(bind=engine)
