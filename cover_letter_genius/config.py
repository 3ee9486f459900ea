"""Runtime settings read from the environment (and a local .env file)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_GEMINI_TIMEOUT = 120.0


@dataclass(frozen=True)
class Settings:
    gemini_base_url: str = DEFAULT_GEMINI_BASE_URL
    gemini_timeout: float = DEFAULT_GEMINI_TIMEOUT
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    font_path: Optional[str] = None


def _parse_origins(raw: Optional[str]) -> List[str]:
    origins = [o.strip() for o in (raw or "").split(",") if o.strip()]
    return origins or ["*"]


def load_settings() -> Settings:
    """Build settings from the environment; existing env vars win over .env."""
    load_dotenv(override=False)

    timeout_raw = os.getenv("GEMINI_TIMEOUT", "").strip()
    try:
        timeout = float(timeout_raw) if timeout_raw else DEFAULT_GEMINI_TIMEOUT
    except ValueError:
        raise ValueError(f"GEMINI_TIMEOUT must be a number of seconds, got {timeout_raw!r}")
    if timeout <= 0:
        raise ValueError(f"GEMINI_TIMEOUT must be positive, got {timeout_raw!r}")

    return Settings(
        gemini_base_url=(os.getenv("GEMINI_BASE_URL") or DEFAULT_GEMINI_BASE_URL).rstrip("/"),
        gemini_timeout=timeout,
        cors_origins=_parse_origins(os.getenv("CORS_ORIGINS")),
        font_path=os.getenv("COVER_LETTER_FONT_PATH") or None,
    )
