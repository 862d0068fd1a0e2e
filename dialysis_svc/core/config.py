"""
Configuration module for the Dialysis Companion service.
Uses Pydantic BaseSettings for validation - app fails fast if config is malformed.
"""
import logging
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings with validation.
    Every field has a safe default so a fresh install starts without a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Local key-value store (SQLite)
    dialysis_svc_db_dir: str = Field(default="data", description="Database directory")
    dialysis_svc_db_file: str = Field(default="dialysis.db", description="Database filename")
    dialysis_svc_db_busy_timeout: int = Field(default=5000, description="SQLite busy timeout in milliseconds")

    # API Configuration
    dialysis_svc_host: str = Field(default="127.0.0.1", description="API host")
    dialysis_svc_port: int = Field(default=8000, description="API port")
    dialysis_svc_reload: bool = Field(default=False, description="Enable hot reload")

    # Wall clock used for "today" and reminder minutes
    dialysis_svc_timezone: str = Field(
        default="",
        description="IANA timezone name (e.g. 'Asia/Shanghai'); empty uses the host's local zone",
    )

    # Medication reminders
    reminders_enabled: bool = Field(default=True, description="Run the reminder polling loop")
    reminder_poll_interval_seconds: float = Field(
        default=5.0,
        gt=0,
        lt=60,
        description="Polling cadence; must stay below one minute",
    )

    # Voice notes
    audio_upload_max_size: int = Field(default=10485760, description="Max audio size in bytes (10MB)")

    # Google Gemini API Configuration (optional - AI features degrade to fallbacks)
    gemini_api_key: str = Field(default="", description="Google Gemini API key")
    gemini_model: str = Field(default="gemini-2.5-flash", description="Gemini model name")

    # Telegram push channel for reminders (optional)
    telegram_token: str = Field(default="", description="Telegram bot token from @BotFather")
    telegram_chat_id: str = Field(default="", description="Chat that receives medication reminders")

    @model_validator(mode="after")
    def validate_optional_integrations(self) -> "Settings":
        """Warn about half-configured optional integrations at startup."""
        if not self.gemini_api_key:
            logger.warning(
                "GEMINI_API_KEY not set - health summaries and voice transcription will use fallbacks"
            )

        if bool(self.telegram_token) != bool(self.telegram_chat_id):
            logger.warning(
                "Only one of TELEGRAM_TOKEN / TELEGRAM_CHAT_ID is set - "
                "Telegram reminders will not be sent"
            )

        return self

    @property
    def database_path(self) -> str:
        """Get the full database path."""
        return str(Path(self.dialysis_svc_db_dir) / self.dialysis_svc_db_file)

    @property
    def telegram_enabled(self) -> bool:
        """True when both Telegram settings are present."""
        return bool(self.telegram_token and self.telegram_chat_id)


# Create global settings instance
settings = Settings()

# Module-level constants read by the database and the entry point
DATABASE_PATH = settings.database_path
DATABASE_BUSY_TIMEOUT = settings.dialysis_svc_db_busy_timeout

API_HOST = settings.dialysis_svc_host
API_PORT = settings.dialysis_svc_port
API_RELOAD = settings.dialysis_svc_reload
