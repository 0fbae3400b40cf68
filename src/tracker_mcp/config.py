from __future__ import annotations

import os
from typing import Tuple

from dotenv import load_dotenv

from .connection import DEFAULT_BASE_URL


def load_env_config(*, use_dotenv: bool = True) -> Tuple[str, str]:
    """Load the Tracker API token and base URL from environment (optional .env)."""
    if use_dotenv:
        load_dotenv()
    token = os.getenv("TRACKER_API_TOKEN", "").strip()
    base_url = os.getenv("TRACKER_BASE_URL", "").strip() or DEFAULT_BASE_URL
    return token, base_url


def load_log_level(default: str = "INFO") -> str:
    return os.getenv("TRACKER_LOG_LEVEL", "").strip() or default


__all__ = ["load_env_config", "load_log_level"]
