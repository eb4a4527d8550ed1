from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite://"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 8000
    FRONTEND_ORIGINS: List[str] = ["http://localhost:3000"]
    LOG_LEVEL: str = "INFO"
    SEED_DEMO_DATA: bool = True
    CHECKOUT_DELAY_MS: int = 2000
    LOCK_DIR: Optional[str] = None

    # fixed credential pairs for the back-office gate
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "admin"
    MANAGER_USERNAME: str = "manager"
    MANAGER_PASSWORD: str = "manager"

    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_API_URL: str = "https://generativelanguage.googleapis.com/v1beta/models"
    AI_TIMEOUT_SECONDS: int = 30

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
