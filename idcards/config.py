from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "ID Card System"
    SECRET_KEY: str = "dev-secret-key-change-me"
    LOG_LEVEL: str = "INFO"

    # Remote persistence API
    API_URL: str = "https://idbackend-production.up.railway.app"
    MEDIA_URL: Optional[str] = None
    API_TIMEOUT: Optional[float] = None

    # Browser-side storage
    TOKEN_STORAGE_KEY: str = "token"
    SESSION_COOKIE_SAMESITE: str = "lax"
    SESSION_COOKIE_SECURE: bool = False

    # Idle visitors (and their draft photos) are dropped after this many seconds
    CLIENT_STATE_TTL: Optional[float] = 1800

    SETTINGS_CLOSE_DELAY: int = 2  # seconds

    @property
    def media_url(self) -> str:
        if self.MEDIA_URL:
            return self.MEDIA_URL.rstrip("/")
        base = self.API_URL.rstrip("/")
        if base.endswith("/api"):
            base = base[: -len("/api")]
        return base


settings = Settings()
