"""Runtime settings for the HTTP front end.

Values come from ``CHECKERS_*`` environment variables or a ``.env.checkers``
file. The rules engine never reads these; they only shape how the server
drives it and what it tells the browser (for instance whether to play sounds).
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from checkers.player import GameMode


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CHECKERS_", env_file=".env.checkers", env_file_encoding="utf-8",
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "info"

    # Game
    default_mode: GameMode = GameMode.SINGLE_PLAYER
    ai_move_delay_ms: int = Field(default=500, ge=0, le=10_000)
    seed: Optional[int] = None

    # Presentation
    sound_enabled: bool = True


@lru_cache
def get_settings() -> Settings:
    return Settings()
