# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./appliance_store.db"

    # Name of the cookie carrying the session token
    SESSION_COOKIE_NAME: str = "sessionId"
    # Sessions idle longer than this are dropped; 0 keeps them until logout
    SESSION_IDLE_TIMEOUT_MINUTES: int = 0

    # Zero-total orders are accepted unless switched off
    ALLOW_EMPTY_CHECKOUT: bool = True

    FRONTEND_URL: Optional[str] = None

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

settings = Settings()
