"""Application configuration.

Environment variables override all defaults. A local `backend/.env` is loaded
for development when python-dotenv is installed.
"""

import os
from pathlib import Path
from typing import List


# Load .env for local development (safe no-op if not installed)
try:
    from dotenv import load_dotenv  # type: ignore

    _BACKEND_DIR = Path(__file__).resolve().parents[2]
    load_dotenv(dotenv_path=_BACKEND_DIR / ".env", override=False)
except ImportError:
    pass


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    # Storage
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./clinicdesk.db")

    # Ledger: "permissive" lets stock go negative, "strict" rejects the sale
    LEDGER_STOCK_POLICY: str = os.getenv("LEDGER_STOCK_POLICY", "permissive").lower()

    # Scheduling: off by default, status writes are unconditional
    ENFORCE_APPOINTMENT_TRANSITIONS: bool = _env_bool("ENFORCE_APPOINTMENT_TRANSITIONS", False)

    # Seed a week of random demo sales when the sales key is empty
    SEED_DEMO_SALES: bool = _env_bool("SEED_DEMO_SALES", False)

    # Groq API Key (Must be set via .env, never in code)
    GROQ_API_KEY: str = os.getenv("GROQ_API_KEY", "")
    GROQ_MODEL: str = os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile")
    INSIGHT_TIMEOUT_SECONDS: float = float(os.getenv("INSIGHT_TIMEOUT_SECONDS", "20"))
    INSIGHT_SALES_SAMPLE: int = 50

    # Cosmetic login gate, not a security boundary
    ADMIN_USERNAME: str = os.getenv("ADMIN_USERNAME", "admin")
    ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "admin123")

    CORS_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv(
            "CORS_ORIGINS",
            "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173",
        ).split(",")
        if origin.strip()
    ]

    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    DEBUG: bool = ENVIRONMENT == "development"


settings = Settings()
