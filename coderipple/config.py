"""
Runtime configuration.

All settings come from environment variables (optionally via a .env file):
    GRAPH_STORE_BACKEND        graph store backend, "networkx" (default)
    CODERIPPLE_QUIET           "1"/"true"/"yes" silences build progress output
    CODERIPPLE_MAX_FILE_BYTES  largest source file parsed on upload (default 1 MiB)
    CODERIPPLE_CORS_ORIGINS    comma separated list of allowed origins (default "*")
"""

import os
from dataclasses import dataclass, field
from typing import List

import dotenv

dotenv.load_dotenv()

DEFAULT_MAX_FILE_BYTES = 1024 * 1024

_TRUTHY = ("1", "true", "yes")


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUTHY


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        print(f"[WARN] Ignoring non-integer {name}={raw!r}, using {default}")
        return default


@dataclass
class Settings:
    graph_store_backend: str = "networkx"
    quiet: bool = False
    max_file_bytes: int = DEFAULT_MAX_FILE_BYTES
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.getenv("CODERIPPLE_CORS_ORIGINS", "*")
        return cls(
            graph_store_backend=os.getenv("GRAPH_STORE_BACKEND", "networkx").strip().lower(),
            quiet=_env_flag("CODERIPPLE_QUIET"),
            max_file_bytes=_env_int("CODERIPPLE_MAX_FILE_BYTES", DEFAULT_MAX_FILE_BYTES),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()] or ["*"],
        )


def get_settings() -> Settings:
    """Read settings fresh from the environment."""
    return Settings.from_env()


def log(message: str) -> None:
    """Console progress line, suppressed when CODERIPPLE_QUIET is set."""
    if not _env_flag("CODERIPPLE_QUIET"):
        print(message)
