"""Application configuration with environment variable support.

All settings can be overridden via environment variables prefixed with ``THREADBOARD_``,
or via a ``.env`` file in the project root.

Examples::

    THREADBOARD_PORT=9000 uv run threadboard start
    THREADBOARD_DATA_DIR=/var/data/threadboard uv run threadboard start
    THREADBOARD_RECAPTCHA_SECRET=... uv run threadboard start
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Project root: two levels up from this file (backend/app/config.py -> threadboard/)
_BASE_DIR = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """Threadboard configuration. All values overridable via env vars."""

    model_config = SettingsConfigDict(
        env_prefix="THREADBOARD_",
        env_file=str(_BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    secret_key: str = "change-me"

    # Paths
    data_dir: Path = _BASE_DIR / "data"

    # Logging
    log_level: str = "INFO"

    # Forum
    threads_per_page: int = 25
    trending_limit: int = 5
    spam_keywords: list[str] = ["yahoo customer support"]

    # Recaptcha
    recaptcha_site_key: str = ""
    recaptcha_secret: str = ""
    recaptcha_verify_url: str = "https://www.google.com/recaptcha/api/siteverify"
    recaptcha_timeout: float = 5.0

    @property
    def db_path(self) -> Path:
        return self.data_dir / "threadboard.db"

    @property
    def database_url(self) -> str:
        return f"sqlite+aiosqlite:///{self.db_path}"


# Singleton instance, import this everywhere
settings = Settings()

DATA_DIR = settings.data_dir
DATABASE_URL = settings.database_url
