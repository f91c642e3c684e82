import os
from pathlib import Path

from dotenv import load_dotenv


_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
load_dotenv(_ENV_PATH, override=False)

DEFAULT_EXPIRY_SECONDS = 3600
MAX_EXPIRY_SECONDS = 604800


def _get_env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def _get_int_env(name: str, default: int) -> int:
    raw = _get_env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_bool_env(name: str, default: bool = False) -> bool:
    raw = _get_env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def clamp_expiry(seconds: int) -> int:
    return max(1, min(int(seconds), MAX_EXPIRY_SECONDS))


def get_default_expiry() -> int:
    """Return the deployment-level signed URL lifetime in seconds.

    `EXPIRY` is honoured for deployments configured before the `LFS_` prefix.
    """
    raw = _get_env("LFS_EXPIRY") or _get_env("EXPIRY")
    if raw is None:
        return DEFAULT_EXPIRY_SECONDS
    try:
        return clamp_expiry(int(raw))
    except ValueError:
        return DEFAULT_EXPIRY_SECONDS


def get_static_dir() -> str | None:
    return _get_env("LFS_STATIC_DIR")


def get_enforce_media_type() -> bool:
    return _get_bool_env("LFS_ENFORCE_MEDIA_TYPE")


def get_signing_max_workers() -> int:
    return max(1, _get_int_env("LFS_SIGNING_MAX_WORKERS", 8))


def get_cors_allow_origins() -> list[str]:
    raw = _get_env("LFS_CORS_ALLOW_ORIGINS")
    if raw is None:
        return []
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def get_log_level() -> str:
    return (_get_env("LFS_PROXY_LOGLEVEL") or "WARNING").upper()
