"""
Application configuration.
Values are loaded from environment variables and the optional etc/app.conf
file.  Every field has a development default so the service starts with no
configuration at all.
"""

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings

# Project root is two levels up from this file  (backend/core/config.py → project/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    # Bootstrap administrator, created in memory on every process start
    bootstrap_admin_login: str = "admin"
    bootstrap_admin_password: str = "12345"
    bootstrap_admin_name: str = "Admin"

    # PBKDF2-SHA256 iteration count (passlib 2024 default)
    password_hash_rounds: int = 600_000

    # Cookie that mirrors the bearer token for browser clients
    session_cookie_name: str = "session"
    session_idle_minutes: int = 10

    cors_origins: List[str] = ["http://localhost:8000"]

    # app.conf lives in etc/ – resolved relative to the project root so that
    # the file is found regardless of the working directory.
    model_config = {"env_file": str(_PROJECT_ROOT / "etc" / "app.conf")}


# Module-level singleton – import this everywhere: from core.config import settings
settings = Settings()
