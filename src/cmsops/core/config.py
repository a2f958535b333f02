"""Runtime settings read from the environment.

Settings are resolved once per invocation and passed explicitly to the
client and uploader, so tests can build them directly without touching
`os.environ`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

DEFAULT_API_BASE_URL = "https://backend-rakj.onrender.com/api/v1"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_LOG_LEVEL = "WARNING"


def _sanitize_base_url(url: str) -> str:
    """Strip whitespace and trailing slashes from the API base URL."""
    return url.strip().rstrip("/")


def _timeout(raw: str | None) -> float:
    """Parse a timeout override, falling back to the default on bad input."""
    if raw is None:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_TIMEOUT_SECONDS
    return value if value > 0 else DEFAULT_TIMEOUT_SECONDS


@dataclass(frozen=True)
class Settings:
    """Backend and asset-host configuration for one CLI invocation."""

    api_base_url: str = DEFAULT_API_BASE_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = DEFAULT_LOG_LEVEL
    cloudinary_cloud_name: str | None = None
    cloudinary_upload_preset: str | None = None
    cloudinary_pdf_upload_preset: str | None = None
    cloudinary_api_key: str | None = None

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables (or a given mapping)."""
        env = os.environ if env is None else env
        return cls(
            api_base_url=_sanitize_base_url(
                env.get("CMSOPS_API_BASE_URL") or DEFAULT_API_BASE_URL
            ),
            timeout=_timeout(env.get("CMSOPS_HTTP_TIMEOUT")),
            log_level=(env.get("CMSOPS_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
            cloudinary_cloud_name=env.get("CLOUDINARY_CLOUD_NAME") or None,
            cloudinary_upload_preset=env.get("CLOUDINARY_UPLOAD_PRESET") or None,
            cloudinary_pdf_upload_preset=env.get("CLOUDINARY_PDF_UPLOAD_PRESET")
            or None,
            cloudinary_api_key=env.get("CLOUDINARY_API_KEY") or None,
        )

    @property
    def upload_configured(self) -> bool:
        """True when every setting required for asset uploads is present."""
        return bool(
            self.cloudinary_cloud_name
            and self.cloudinary_upload_preset
            and self.cloudinary_api_key
        )
