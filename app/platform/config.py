from pathlib import Path
from typing import List, Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── App ─────────────────────────────────────
    APP_NAME: str = "SEO Tech Check"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    DEBUG: bool = False

    # ── Logging ─────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # ── Rendering provider (scrape.do) ──────────
    SCRAPE_DO_API_KEY: str = ""
    SCRAPE_DO_BASE_URL: str = "https://api.scrape.do/"
    SCRAPE_RENDER_JS: bool = False
    SCRAPE_TIMEOUT_MS: int = 30000
    SCRAPE_MAX_RETRIES: int = 3
    SCRAPE_RETRY_DELAY_MS: int = 2000

    DEFAULT_ANALYSIS_TIMEOUT_MS: int = 20000

    # ── Rate limiting ───────────────────────────
    RATE_LIMIT_MAX_REQUESTS: int = 100
    RATE_LIMIT_WINDOW_SECONDS: int = 900  # 15 minutes
    RATE_LIMIT_PATH_PREFIX: str = "/api"

    CORS_ORIGINS: List[str] = ["*"]

    @property
    def expose_error_details(self) -> bool:
        return self.DEBUG or self.ENVIRONMENT == "local"

    class Config:
        env_file = str(Path(__file__).parent.parent.parent / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


settings = Settings()
