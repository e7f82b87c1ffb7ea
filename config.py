"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


# ── Database ──────────────────────────────────────────────
_DEFAULT_DB_PATH = Path.home() / "Documents" / "database" / "gdi.db"

DATABASE_URL: str = os.getenv("DATABASE_URL", f"sqlite:///{_DEFAULT_DB_PATH}")

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
# Optional rotating log file; empty keeps logging on stdout only.
LOG_FILE: str = os.getenv("LOG_FILE", "")

# ── Company fallback ──────────────────────────────────────
# Used when no company has been registered yet.
DEFAULT_COMPANY_NAME: str = os.getenv("DEFAULT_COMPANY_NAME", "GDI")
DEFAULT_COMPANY_TAX_ID: str = os.getenv("DEFAULT_COMPANY_TAX_ID", "20123456789")

# ── Exports ───────────────────────────────────────────────
EXPORT_DIR: str = os.getenv("EXPORT_DIR", "exports")
