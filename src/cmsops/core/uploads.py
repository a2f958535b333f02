"""Image and PDF uploads to the asset host (Cloudinary).

Type and size checks run before anything goes over the network. Failures
reported by the asset host are normalized like backend failures.
"""

from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path

import httpx

from cmsops.core.config import Settings
from cmsops.core.errors import ApiError, ErrorKind, normalize_error

logger = logging.getLogger(__name__)

CLOUDINARY_API_URL = "https://api.cloudinary.com/v1_1"
DEFAULT_UPLOAD_PRESET = "images_preset"

MB = 1024 * 1024
MAX_IMAGE_BYTES = 5 * MB
MAX_PDF_BYTES = 10 * MB

PDF_CONTENT_TYPE = "application/pdf"


class UploadRejected(ValueError):
    """Raised when a file fails client-side checks before upload."""


@dataclass(frozen=True)
class UploadFile:
    """An upload candidate: name, content type and raw bytes."""

    name: str
    content_type: str
    content: bytes

    @property
    def is_pdf(self) -> bool:
        return self.content_type == PDF_CONTENT_TYPE

    @property
    def is_image(self) -> bool:
        return self.content_type.startswith("image/")

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def from_path(cls, path: Path) -> UploadFile:
        """Read a file from disk, guessing its content type from the name."""
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            content_type=content_type or "application/octet-stream",
            content=path.read_bytes(),
        )


def validate_upload(upload: UploadFile) -> None:
    """Reject files that are not images/PDFs or that exceed the size cap."""
    if not upload.is_image and not upload.is_pdf:
        raise UploadRejected("File must be an image or PDF")

    max_bytes = MAX_PDF_BYTES if upload.is_pdf else MAX_IMAGE_BYTES
    if upload.size > max_bytes:
        limit = "10MB" if upload.is_pdf else "5MB"
        raise UploadRejected(f"File size must be less than {limit}")


def _upload_preset(settings: Settings, *, pdf: bool) -> str:
    """Pick the preset: PDFs prefer the dedicated PDF preset when set."""
    if pdf and settings.cloudinary_pdf_upload_preset:
        return settings.cloudinary_pdf_upload_preset
    return settings.cloudinary_upload_preset or DEFAULT_UPLOAD_PRESET


def upload_endpoint(settings: Settings, *, pdf: bool) -> str:
    """Return the upload URL (raw uploads for PDFs, image uploads otherwise)."""
    resource_type = "raw" if pdf else "image"
    return f"{CLOUDINARY_API_URL}/{settings.cloudinary_cloud_name}/{resource_type}/upload"


def upload_asset(
    upload: UploadFile,
    settings: Settings,
    *,
    client: httpx.Client | None = None,
) -> str:
    """
    Upload one image or PDF and return its durable secure URL.

    Raises:
        UploadRejected: wrong content type or file too large (no network call).
        ApiError: missing upload configuration, or the asset host failed.
    """
    validate_upload(upload)

    if not settings.upload_configured:
        raise ApiError(
            "Missing Cloudinary configuration. "
            "Please check your environment variables.",
            kind=ErrorKind.UNEXPECTED,
        )

    preset = _upload_preset(settings, pdf=upload.is_pdf)
    url = upload_endpoint(settings, pdf=upload.is_pdf)
    logger.info(
        "Uploading %s (%s, %d bytes) with preset %s",
        upload.name,
        upload.content_type,
        upload.size,
        preset,
    )

    owns_client = client is None
    http = client or httpx.Client(timeout=settings.timeout)
    try:
        response = http.post(
            url,
            data={"upload_preset": preset, "api_key": settings.cloudinary_api_key},
            files={"file": (upload.name, upload.content, upload.content_type)},
        )
        response.raise_for_status()
        return str(response.json()["secure_url"])
    except httpx.HTTPStatusError as exc:
        logger.error(
            "Asset upload failed: %s %s", exc.response.status_code, exc.response.text
        )
        if upload.is_pdf and exc.response.status_code == 400:
            raise ApiError(
                f'PDF upload failed. Please ensure your Cloudinary upload preset "{preset}" '
                "allows raw file uploads.",
                kind=ErrorKind.BAD_REQUEST,
                status=400,
                original_error=exc,
            ) from exc
        raise normalize_error(exc) from exc
    except (httpx.HTTPError, KeyError, ValueError) as exc:
        raise normalize_error(exc) from exc
    finally:
        if owns_client:
            http.close()
