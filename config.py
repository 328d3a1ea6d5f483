from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from appdirs import user_log_dir
from dotenv import load_dotenv


DEFAULT_CLIENTS_API_URL = "https://crud-app-backend-n0wq.onrender.com/api/clients"


@dataclass
class Settings:
    clients_api_url: str = DEFAULT_CLIENTS_API_URL
    auth_url: str = ""
    auth_api_key: str | None = None
    api_timeout: float = 15.0
    error_timeout_ms: int = 3000
    log_dir: str = field(default_factory=lambda: user_log_dir("clients_desktop"))
    log_level: str = "INFO"
    detailed_logging: bool = False


def _env_flag(name: str) -> bool:
    return os.getenv(name, "0").lower() in {"1", "true", "yes", "on"}


@lru_cache()
def get_settings() -> Settings:
    dotenv_path = Path(__file__).resolve().parent / ".env"
    load_dotenv(dotenv_path)

    return Settings(
        clients_api_url=(
            os.getenv("CLIENTS_API_URL") or DEFAULT_CLIENTS_API_URL
        ).rstrip("/"),
        auth_url=os.getenv("AUTH_URL", "").rstrip("/"),
        auth_api_key=os.getenv("AUTH_API_KEY"),
        api_timeout=float(os.getenv("API_TIMEOUT", "15")),
        error_timeout_ms=int(os.getenv("ERROR_TIMEOUT_MS", "3000")),
        log_dir=os.getenv("LOG_DIR") or user_log_dir("clients_desktop"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        detailed_logging=_env_flag("DETAILED_LOGGING"),
    )
