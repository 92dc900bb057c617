"""
Central configuration via pydantic-settings.
All secrets are read from environment variables / .env file.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Telegram ──────────────────────────────────────────────────────────────
    BOT_TOKEN: str

    # ── Event ─────────────────────────────────────────────────────────────────
    EVENT_NAME: str = "Fun Run Event 2025"
    EVENT_TAGLINE: str = (
        "Bergabunglah dengan ribuan pelari dalam acara lari paling seru tahun ini!"
    )

    # Jersey size chart shown on the race-pack step (PNG/JPG on local disk)
    SIZE_CHART_PATH: Optional[str] = None

    # ── Runtime ───────────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    # Per-user flood protection: RATE_LIMIT updates per RATE_PERIOD seconds
    RATE_LIMIT: int = 30
    RATE_PERIOD: float = 60.0

    # ─────────────────────────────────────────────────────────────────────────

    @property
    def size_chart_file(self) -> Optional[Path]:
        """Size chart path, or None when unset or missing on disk."""
        if not self.SIZE_CHART_PATH:
            return None
        path = Path(self.SIZE_CHART_PATH)
        return path if path.is_file() else None


settings = Settings()
