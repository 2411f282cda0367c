# File: insight_triage/core/config/settings.py

import os
from pathlib import Path
from typing import Optional


class Settings:
    # --- Paths ---
    # insight_triage/core/config/settings.py -> config -> core -> insight_triage -> ROOT
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent.parent
    DATA_DIR: Path = BASE_DIR / "data"

    # --- Database ---
    @property
    def DATABASE_URL(self) -> str:
        # Local SQLite file unless an explicit URL is configured.
        url = os.getenv("INSIGHT_DATABASE_URL")
        if url:
            return url
        return f"sqlite:///{self.DATA_DIR / 'insight_triage.db'}"

    # --- Classification Provider ---
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

    @property
    def GEMINI_API_KEY(self) -> Optional[str]:
        # Read at call time so a key exported after import is still picked up.
        for name in ("GEMINI_API_KEY", "API_KEY", "GOOGLE_API_KEY"):
            value = os.getenv(name)
            if value:
                return value
        return None


settings = Settings()
