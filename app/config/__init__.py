"""
Application Settings
Load from environment variables
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings from environment"""

    # ======================
    # Application
    # ======================
    APP_ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    CORS_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000"

    # ======================
    # Telegram
    # ======================
    TELEGRAM_BOT_TOKEN: Optional[str] = None
    TELEGRAM_CHAT_ID: Optional[str] = None
    TELEGRAM_TIMEOUT_SECONDS: float = 15.0

    # ======================
    # Access
    # ======================
    # Comma-separated email whitelist
    AUTHORIZED_USERS: str = ""
    # Headers set by the identity-aware proxy in front of the API
    AUTH_EMAIL_HEADER: str = "X-Forwarded-Email"
    AUTH_USER_HEADER: str = "X-Forwarded-User"

    # ======================
    # Market Data
    # ======================
    NSE_BASE_URL: str = "https://www.nseindia.com"
    NSE_TIMEOUT_SECONDS: float = 30.0

    # ======================
    # Timezone
    # ======================
    TIMEZONE: str = "Asia/Kolkata"

    # ======================
    # Pydantic v2 config
    # ======================
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="forbid",
    )

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


settings = Settings()
