"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables; defaults are provided for all fields.  Unlike a
module‑level constant, every ``Settings()`` instance re‑reads the
environment, which lets the serverless handlers and the tests pick up
changes without reloading modules.

The data directory deserves a note.  ``DATA_DIR`` wins when set.
Otherwise, when the ``NETLIFY`` variable is present (the serverless
deployment profile) records go to the system temp directory, which is
the only writable location there.  Everything else falls back to
``data`` relative to the project root.
"""

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


def resolve_data_dir() -> str:
    """Compute the directory that holds the JSON record stores.

    Relative ``DATA_DIR`` values are resolved against the project root so
    that the location does not depend on the working directory.
    """
    data_dir = os.getenv("DATA_DIR")
    if data_dir:
        if os.path.isabs(data_dir):
            return data_dir
        return str((PROJECT_ROOT / data_dir).resolve())
    if os.getenv("NETLIFY"):
        return tempfile.gettempdir()
    return str(PROJECT_ROOT / "data")


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = field(default_factory=lambda: os.getenv("PROJECT_NAME", "HealthCare+ API"))
    api_version: str = field(default_factory=lambda: os.getenv("API_VERSION", "1.0.0"))
    debug: bool = field(default_factory=lambda: _env_bool("DEBUG"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    # Optional path of a log file in addition to the console handler.
    log_file: str = field(default_factory=lambda: os.getenv("LOG_FILE", ""))
    data_dir: str = field(default_factory=resolve_data_dir)
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "3000")))
    # Base URL used by ``clinic_client`` and the admin panel script.
    api_url: str = field(default_factory=lambda: os.getenv("CLINIC_API_URL", "http://localhost:3000"))


def get_settings() -> Settings:
    """Return a fresh ``Settings`` instance built from the current environment."""
    return Settings()


# Instantiate settings once for modules that only need the values seen
# at import time (the HTTP application and the launcher).
settings = Settings()
