# retailers/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480
    DATABASE_URL: str = "sqlite:///./database_retailers.db"

    FRONTEND_URL: str = "http://localhost:5173"

    # Queue names used for order and stock notifications
    QUEUE_ORDER_NOTIFICATIONS: str = "order-notifications"
    QUEUE_STOCK_UPDATES: str = "stock-updates"

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

settings = Settings()
