"""
Runtime configuration.

Settings come from environment variables (optionally seeded from a .env
file by ``jobly.env.load_env``).
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_DATABASE_URL = "sqlite:///data/jobly.db"


def _env_flag(name: str, default: str = "0") -> bool:
    return (os.getenv(name) or default).strip().lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    log_level: str = "INFO"
    log_dir: Optional[Path] = None
    admin_token: Optional[str] = None
    equity_false_filters: bool = False
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        log_dir = (os.getenv("JOBLY_LOG_DIR") or "").strip()
        return cls(
            database_url=(os.getenv("JOBLY_DATABASE_URL") or DEFAULT_DATABASE_URL).strip(),
            log_level=(os.getenv("JOBLY_LOG_LEVEL") or "INFO").strip().upper(),
            log_dir=Path(log_dir) if log_dir else None,
            admin_token=(os.getenv("JOBLY_ADMIN_TOKEN") or "").strip() or None,
            equity_false_filters=_env_flag("JOBLY_EQUITY_FALSE_FILTERS"),
            host=(os.getenv("JOBLY_HOST") or "127.0.0.1").strip(),
            port=int((os.getenv("JOBLY_PORT") or "8000").strip()),
        )
