"""Runtime configuration read from the environment (and a .env file)."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .constants import TICK_MS


@dataclass(frozen=True)
class Settings:
    api_url: str = "http://localhost:8080"
    api_timeout: float = 5.0
    tick_ms: int = TICK_MS
    high_score_path: str = "highscore.json"
    host: str = "0.0.0.0"
    port: int = 8765
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            api_url=os.getenv("SNAKE_API_URL", cls.api_url).rstrip("/"),
            api_timeout=float(os.getenv("SNAKE_API_TIMEOUT", cls.api_timeout)),
            tick_ms=int(os.getenv("SNAKE_TICK_MS", cls.tick_ms)),
            high_score_path=os.getenv("SNAKE_HIGHSCORE_PATH", cls.high_score_path),
            host=os.getenv("SNAKE_HOST", cls.host),
            port=int(os.getenv("SNAKE_PORT", cls.port)),
            log_level=os.getenv("SNAKE_LOG_LEVEL", cls.log_level).upper(),
        )
