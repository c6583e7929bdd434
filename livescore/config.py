"""
Runtime configuration for the live scorecard.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_MODEL_NAME = "gemini-2.5-flash"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    """Settings read from the environment (and .env, if present)."""
    model_name: str = DEFAULT_MODEL_NAME
    api_key: Optional[str] = None  # None lets the SDK read GOOGLE_API_KEY / GEMINI_API_KEY
    target_channel_id: Optional[int] = None
    classify_timeout_sec: Optional[float] = 30.0  # None disables
    wicket_modulus: Optional[int] = 11  # None disables the wrap

    @classmethod
    def from_env(cls) -> "Settings":
        timeout = _env_float("CLASSIFY_TIMEOUT_SEC", 30.0)
        modulus = _env_int("WICKET_MODULUS", 11)
        if modulus < 0:
            raise ValueError(f"WICKET_MODULUS must not be negative, got {modulus}")
        if timeout < 0:
            raise ValueError(f"CLASSIFY_TIMEOUT_SEC must not be negative, got {timeout}")
        return cls(
            model_name=os.getenv("GEMINI_MODEL_NAME") or DEFAULT_MODEL_NAME,
            api_key=os.getenv("GOOGLE_API_KEY") or None,
            target_channel_id=_env_int("TARGET_CHANNEL_ID", None),
            classify_timeout_sec=timeout if timeout > 0 else None,
            wicket_modulus=modulus if modulus else None,
        )
