"""HTTP client for the website backend.

All backend calls go through ApiClient.request: it logs the outbound
request and the completed response, and turns every failure into an
ApiError through `normalize_error`.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from cmsops.core.config import Settings
from cmsops.core.errors import ApiError, normalize_error, unwrap

logger = logging.getLogger(__name__)


def log_request(request: httpx.Request) -> None:
    """Event hook: log an outbound request (method + path)."""
    try:
        logger.info("→ %s %s", request.method, request.url.path)
    except Exception:  # noqa: BLE001
        return


def log_response(response: httpx.Response) -> None:
    """Event hook: log a completed response (status + path)."""
    try:
        logger.info("← %s %s", response.status_code, response.request.url.path)
    except Exception:  # noqa: BLE001
        return


class ApiClient:
    """Thin JSON client around httpx with a single error normalization point."""

    def __init__(
        self,
        settings: Settings,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self._http = httpx.Client(
            base_url=settings.api_base_url + "/",
            timeout=settings.timeout,
            headers={"Content-Type": "application/json"},
            event_hooks={"request": [log_request], "response": [log_response]},
            transport=transport,
        )

    def close(self) -> None:
        """Close the underlying connection pool."""
        self._http.close()

    def __enter__(self) -> ApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def request(self, method: str, path: str, *, json: Any = None) -> Any:
        """
        Send a request and return the decoded JSON body (not unwrapped).

        Raises:
            ApiError: for every failure, whatever its cause.
        """
        try:
            response = self._http.request(method, path.lstrip("/"), json=json)
            response.raise_for_status()
            if not response.content:
                return None
            return response.json()
        except ApiError:
            raise
        except Exception as exc:  # noqa: BLE001
            raise normalize_error(exc) from exc

    def call(self, method: str, path: str, *, json: Any = None) -> Any:
        """Send a request and return the unwrapped envelope payload."""
        return unwrap(self.request(method, path, json=json))

    def get(self, path: str) -> Any:
        return self.call("GET", path)

    def post(self, path: str, payload: Any) -> Any:
        return self.call("POST", path, json=payload)

    def put(self, path: str, payload: Any) -> Any:
        return self.call("PUT", path, json=payload)

    def delete(self, path: str) -> Any:
        return self.call("DELETE", path)
