import os
from typing import List

from pydantic import BaseModel, Field


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    app_env: str = Field("development", description="development | production | test")
    log_level: str = Field("INFO", description="Root log level")
    notifications_enabled: bool = Field(True, description="Publish WebSocket events")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    database_url: str = Field("", description="MongoDB connection string (optional)")
    database_name: str = Field("", description="MongoDB database name (optional)")
    port: int = Field(8000)
    max_reply_depth: int = Field(100, ge=1, description="Deepest reply nesting accepted by the API")

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def database_configured(self) -> bool:
        return bool(self.database_url and self.database_name)


def load_settings() -> Settings:
    origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
    return Settings(
        app_env=os.getenv("APP_ENV", "development").strip().lower(),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        notifications_enabled=_flag("NOTIFICATIONS_ENABLED", "true"),
        cors_origins=origins or ["*"],
        database_url=os.getenv("DATABASE_URL", ""),
        database_name=os.getenv("DATABASE_NAME", ""),
        port=int(os.getenv("PORT", 8000)),
        max_reply_depth=int(os.getenv("MAX_REPLY_DEPTH", 100)),
    )


settings = load_settings()
