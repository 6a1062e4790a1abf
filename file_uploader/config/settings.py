"""Environment-backed runtime settings."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

_PROJECT_ROOT = Path(__file__).resolve().parents[2]
_ENV_FILE = _PROJECT_ROOT / ".env"

DEFAULT_BASE_URL = "https://storage.oaphub.ai"
DEFAULT_MIN_EXPIRE_AFTER = 60
DEFAULT_UPLOAD_TIMEOUT = 300.0


def _parse_int(name: str, raw_value: str | None, default: int) -> int:
    if raw_value is None or raw_value.strip() == "":
        return default
    try:
        return int(raw_value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer when set") from exc


def _parse_optional_float(name: str, raw_value: str | None, default: Optional[float]) -> Optional[float]:
    """Parse the upload timeout; an explicitly empty value disables it."""
    if raw_value is None:
        return default
    value = raw_value.strip()
    if value == "":
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number when set") from exc


def _load_env_file(path: Path) -> None:
    """Populate process env vars from .env when present."""
    if not path.exists():
        return

    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip("'\"")
        if key:
            os.environ.setdefault(key, value)


@dataclass(frozen=True)
class Settings:
    OAP_STORAGE_BASE_URL: str = DEFAULT_BASE_URL
    OAP_CLIENT_KEY: Optional[str] = None
    OAP_MIN_EXPIRE_AFTER: int = DEFAULT_MIN_EXPIRE_AFTER
    OAP_UPLOAD_TIMEOUT: Optional[float] = DEFAULT_UPLOAD_TIMEOUT
    LOG_LEVEL: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            OAP_STORAGE_BASE_URL=os.getenv("OAP_STORAGE_BASE_URL", "").strip() or DEFAULT_BASE_URL,
            OAP_CLIENT_KEY=os.getenv("OAP_CLIENT_KEY", "").strip() or None,
            OAP_MIN_EXPIRE_AFTER=_parse_int(
                "OAP_MIN_EXPIRE_AFTER",
                os.getenv("OAP_MIN_EXPIRE_AFTER"),
                DEFAULT_MIN_EXPIRE_AFTER,
            ),
            OAP_UPLOAD_TIMEOUT=_parse_optional_float(
                "OAP_UPLOAD_TIMEOUT",
                os.getenv("OAP_UPLOAD_TIMEOUT"),
                DEFAULT_UPLOAD_TIMEOUT,
            ),
            LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        ).validate()

    def validate(self) -> "Settings":
        """Reject configurations the upload pipeline cannot work with."""
        if not self.OAP_STORAGE_BASE_URL.strip():
            raise ValueError("OAP_STORAGE_BASE_URL must not be empty")
        if self.OAP_MIN_EXPIRE_AFTER <= 0:
            raise ValueError("OAP_MIN_EXPIRE_AFTER must be a positive integer")
        if self.OAP_UPLOAD_TIMEOUT is not None and self.OAP_UPLOAD_TIMEOUT <= 0:
            raise ValueError("OAP_UPLOAD_TIMEOUT must be positive when set")
        return self


@lru_cache
def get_settings() -> Settings:
    _load_env_file(_ENV_FILE)
    return Settings.from_env()


def configure_logging(settings: Settings | None = None) -> None:
    """Send log records to stderr; stdout carries the MCP stdio transport."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
