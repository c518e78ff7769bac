"""
Application configuration.
Every setting is optional and may be overridden through environment
variables or the etc/app.conf env file.  The defaults are suitable for local
development only.
"""

from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings

# Project root is two levels up from this file  (backend/core/config.py → project root)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

DEFAULT_SESSION_SECRET = "your-super-secret-key-change-this-in-production"


class Settings(BaseSettings):
    # Session cookie signing secret – must be a long, random string in production
    session_secret: str = DEFAULT_SESSION_SECRET

    # SQLite file location.  Ignored when database_url is set explicitly.
    db_path: str = "./data/todo.db"
    database_url: Optional[str] = None

    # Listen address for ``python backend/main.py``
    host: str = "0.0.0.0"
    port: int = 8080

    # Development only: insert the sample user and todos at startup
    seed_data: bool = False

    # Session lifetime (1 week)
    session_expire_days: int = 7
    # Must be enabled when served over HTTPS
    session_cookie_secure: bool = False

    # Browser origins allowed to call the API with credentials
    cors_origins: List[str] = ["http://localhost:5173"]

    # PBKDF2 iteration count (passlib 2024 default)
    password_hash_rounds: int = 600_000

    model_config = {"env_file": str(_PROJECT_ROOT / "etc" / "app.conf"), "extra": "ignore"}

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.db_path}"

    @property
    def uses_default_secret(self) -> bool:
        return self.session_secret == DEFAULT_SESSION_SECRET


# Module-level singleton – import this everywhere: from core.config import settings
settings = Settings()
