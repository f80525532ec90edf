# app/core/config.py
from typing import *

from pydantic_settings import BaseSettings



class Settings(BaseSettings):
    APP_NAME: str = "Donation Platform"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"  # development, production, test
    PORT: int = 5000

    # Security
    SECRET_KEY: Optional[str] = None
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7
    ALGORITHM: str = "HS256"
    PASSWORD_RESET_EXPIRE_MINUTES: int = 60

    # CORS, comma separated
    ALLOWED_ORIGINS: str = "http://localhost:5173,http://localhost:5174"
    FRONTEND_URL: str = "http://localhost:5173"

    # Donations
    ANONYMOUS_NAME: str = "Anonymous"

    # Database
    DATABASE_URL: str
    DB_CONNECT_RETRIES: int = 3
    DB_RETRY_BACKOFF_SECONDS: int = 2

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def allowed_origins(self) -> List[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"


settings = Settings()
