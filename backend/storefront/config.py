from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./dev.db"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 8000
    ENVIRONMENT: str = "development"  # development, production, test
    LOG_LEVEL: str = "INFO"
    RESET_DB: bool = False
    SECRET_KEY: str = "change-this-secret"
    ACCESS_TOKEN_TTL_SECONDS: int = 30 * 24 * 3600
    FRONTEND_ORIGINS: List[str] = ["http://localhost:3000"]
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100

    # checkout hardening, off by default
    VERIFY_CHECKOUT_TOTALS: bool = False
    ENFORCE_ORDER_TRANSITIONS: bool = False

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


settings = Settings()
