from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path
from typing import Literal

BASE_DIR = Path(__file__).resolve().parents[3]


class Settings(BaseSettings):
    # api-live.euroleague.net (v2, not v3)
    EUROLEAGUE_BASE_URL: str = "https://api-live.euroleague.net/v2"
    UPSTREAM_TIMEOUT: float = 20

    # supabase (sync only)
    SUPABASE_URL: str = "https://knthptmdwgzkpfopceku.supabase.co"
    SUPABASE_SERVICE_KEY: str | None = None

    # request defaults
    DEFAULT_COMPETITION: str = "E"
    DEFAULT_SEASON: str = "2025"
    # empty list accepts any competition code
    ALLOWED_COMPETITION_CODES: list[str] = []

    # sync pipeline
    SYNC_BATCH_SIZE: int = 50
    SYNC_CONCURRENCY: int = 5
    SYNC_STATS_ENDPOINT: Literal["boxscore", "stats"] = "boxscore"

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
