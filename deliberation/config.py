"""Application configuration settings."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Final

from deliberation.env import load_env

load_env()

BASE_DIR: Final[Path] = Path(__file__).resolve().parent.parent
DATA_DIR: Final[Path] = Path(os.getenv("DELIBERATION_DATA_DIR", str(BASE_DIR / "data")))

DATABASE_URL: Final[str] = os.getenv(
    "DATABASE_URL", f"sqlite:///{(DATA_DIR / 'deliberation.db').as_posix()}"
)

# Base URL the dashboard view models talk to.
API_BASE_URL: Final[str] = os.getenv("API_BASE_URL", "http://localhost:8000")
REQUEST_TIMEOUT: Final[float] = float(os.getenv("REQUEST_TIMEOUT", 10))

CORS_ORIGINS: Final[list[str]] = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
]

DEFAULT_PAGE_SIZE: Final[int] = int(os.getenv("DEFAULT_PAGE_SIZE", 10))
TOP_REPORT_LIMIT: Final[int] = int(os.getenv("TOP_REPORT_LIMIT", 10))

# Department assigned to teachers created by CSV import.
IMPORT_DEFAULT_DEPARTMENT: Final[str] = os.getenv("IMPORT_DEFAULT_DEPARTMENT", "Unassigned")

SEED_DEMO_DATA: Final[bool] = os.getenv("SEED_DEMO_DATA") == "1"

DATA_DIR.mkdir(parents=True, exist_ok=True)
