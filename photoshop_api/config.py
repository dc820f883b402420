"""Client configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_BASE_URL = "https://image.adobe.io"
DEFAULT_PRESIGN_EXPIRY_SECONDS = 3600

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class PhotoshopAPIOptions:
    """Options shared by the API client and its file resolver."""

    base_url: str = DEFAULT_BASE_URL
    presign_expiry_seconds: int = DEFAULT_PRESIGN_EXPIRY_SECONDS
    default_adobe_cloud_paths: bool = False
    poll_interval_seconds: float = 2.0
    timeout_seconds: float = 30.0
    max_retries: int = 3
    retry_backoff_seconds: float = 1.0
    max_resolve_workers: int = 8
    log_level: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PhotoshopAPIOptions":
        """Build options from ``PHOTOSHOP_API_*`` environment variables and ``LOG_LEVEL``."""

        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            base_url=env.get("PHOTOSHOP_API_BASE_URL", defaults.base_url).rstrip("/"),
            presign_expiry_seconds=int(
                env.get("PHOTOSHOP_API_PRESIGN_EXPIRY_SECONDS", defaults.presign_expiry_seconds)
            ),
            default_adobe_cloud_paths=str(
                env.get("PHOTOSHOP_API_DEFAULT_ADOBE_CLOUD_PATHS", "")
            ).strip().lower() in _TRUE_VALUES,
            poll_interval_seconds=float(
                env.get("PHOTOSHOP_API_POLL_INTERVAL_SECONDS", defaults.poll_interval_seconds)
            ),
            timeout_seconds=float(env.get("PHOTOSHOP_API_TIMEOUT_SECONDS", defaults.timeout_seconds)),
            max_retries=int(env.get("PHOTOSHOP_API_MAX_RETRIES", defaults.max_retries)),
            log_level=env.get("LOG_LEVEL") or None,
        )
