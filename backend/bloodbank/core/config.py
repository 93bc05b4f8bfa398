"""Application configuration.

Environment variables override all defaults. A `.env` file in backend/
is loaded for local development.
"""

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

_BACKEND_DIR = Path(__file__).resolve().parents[2]
load_dotenv(dotenv_path=_BACKEND_DIR / ".env", override=False)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


class Settings:
    # Database Configuration
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./bloodbank.db")
    # Seconds a SQLite writer waits on a locked database before failing
    SQLITE_BUSY_TIMEOUT: int = _int_env("SQLITE_BUSY_TIMEOUT", 30)

    # Ledger
    # Conditional stock/status updates that lose a race are re-evaluated this many times
    FULFILLMENT_MAX_RETRIES: int = _int_env("FULFILLMENT_MAX_RETRIES", 3)
    # Upper bound for any unit count: a donation, a request, or a stock row
    MAX_UNITS: int = _int_env("MAX_UNITS", 100_000)

    # Reports
    LOW_STOCK_THRESHOLD: int = _int_env("LOW_STOCK_THRESHOLD", 3)
    INACTIVE_DONOR_MONTHS: int = _int_env("INACTIVE_DONOR_MONTHS", 6)

    # CORS (specific origins only, no wildcards)
    CORS_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv(
            "CORS_ORIGINS",
            "http://localhost:3000,http://127.0.0.1:3000",
        ).split(",")
        if origin.strip()
    ]

    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
