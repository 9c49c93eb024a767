from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_SOURCE_MEDIA_URL = (
    "https://www.voiptroubleshooter.com/open_speech/american/OSR_us_000_0010_8k.wav"
)


_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass(slots=True)
class Settings:
    source_media_url: str
    data_dir: Path
    aws_region: str
    bucket_prefix: str
    language_code: str
    poll_interval_seconds: float
    max_wait_seconds: float | None
    http_timeout_seconds: float
    cleanup_on_failure: bool
    log_level: str


def _as_float(name: str, default: float, *, minimum: float = 0.0, inclusive: bool = True) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return _checked_float(name, raw, minimum=minimum, inclusive=inclusive)


def _as_optional_float(name: str, *, minimum: float = 0.0) -> float | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return _checked_float(name, raw, minimum=minimum, inclusive=True)


def _checked_float(name: str, raw: str, *, minimum: float, inclusive: bool) -> float:
    value = float(raw)
    if not math.isfinite(value):
        raise ValueError(f"{name} must be a finite number, got {raw!r}")
    if value < minimum or (not inclusive and value == minimum):
        bound = f">= {minimum}" if inclusive else f"> {minimum}"
        raise ValueError(f"{name} must be {bound}, got {raw!r}")
    return value


def _as_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean (1/0, true/false, yes/no, on/off), got {raw!r}")


def _as_log_level(name: str, default: str) -> str:
    level = os.getenv(name, default).strip().upper() or default
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"{name} must be a logging level name, got {level!r}")
    return level


def load_settings() -> Settings:
    load_dotenv()
    region = (os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION") or "us-east-1").strip()

    return Settings(
        source_media_url=os.getenv("SOURCE_MEDIA_URL", DEFAULT_SOURCE_MEDIA_URL).strip(),
        data_dir=Path(os.getenv("DATA_DIR", "data")).resolve(),
        aws_region=region,
        bucket_prefix=os.getenv("BUCKET_PREFIX", "transcribe-example").strip(),
        language_code=os.getenv("LANGUAGE_CODE", "en-US").strip(),
        poll_interval_seconds=_as_float("POLL_INTERVAL_SECONDS", 3.0),
        max_wait_seconds=_as_optional_float("MAX_WAIT_SECONDS"),
        http_timeout_seconds=_as_float("HTTP_TIMEOUT_SECONDS", 60.0, inclusive=False),
        cleanup_on_failure=_as_bool("CLEANUP_ON_FAILURE", True),
        log_level=_as_log_level("LOG_LEVEL", "INFO"),
    )
