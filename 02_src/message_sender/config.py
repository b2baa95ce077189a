"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "sender.log"

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080
DEFAULT_BATCH_SIZE = 1
DEFAULT_MAX_WORKERS = 1_000_000
DEFAULT_RECV_BUFFER = 1024


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    """Read a positive integer from the environment."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default

    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None

    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return value


@dataclass(frozen=True)
class SenderSettings:
    """Defaults for a sending session."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    batch_size: int = DEFAULT_BATCH_SIZE  # messages per worker
    max_workers: int = DEFAULT_MAX_WORKERS
    recv_buffer_size: int = DEFAULT_RECV_BUFFER

    @classmethod
    def from_env(cls) -> "SenderSettings":
        """Build settings from SENDER_* environment variables."""
        port = _env_int("SENDER_PORT", DEFAULT_PORT)
        if port > 65535:
            raise ValueError(f"SENDER_PORT must be <= 65535, got {port}")

        return cls(
            host=os.getenv("SENDER_HOST") or DEFAULT_HOST,
            port=port,
            batch_size=_env_int("SENDER_BATCH_SIZE", DEFAULT_BATCH_SIZE),
            max_workers=_env_int("SENDER_MAX_WORKERS", DEFAULT_MAX_WORKERS),
            recv_buffer_size=_env_int("SENDER_RECV_BUFFER", DEFAULT_RECV_BUFFER),
        )
