"""
CampusHub – Application configuration.
Reads environment variables from a .env file via pydantic-settings.
"""

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from environment / .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── App ──
    APP_NAME: str = "CampusHub"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = True
    ENVIRONMENT: str = "development"

    # ── Database ──
    DATABASE_URL: str = "sqlite+aiosqlite:///./campushub.db"

    # ── JWT (issued by the identity provider) ──
    JWT_SECRET: str = "change-me-to-a-random-secret"
    ALGORITHM: str = "HS256"
    JWT_AUDIENCE: Optional[str] = "authenticated"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # ── Roles ──
    # The only account allowed to hold the admin role. Empty = nobody.
    SUPER_ADMIN_ID: str = ""

    # ── CORS ──
    CORS_ORIGINS: str = "http://localhost:5173"

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
