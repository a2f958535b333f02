"""Normalized backend errors.

Every failure talking to the backend (or the asset host) is converted into
a single ApiError shape at one place, `normalize_error`. Code below that
point never builds user-facing messages from raw transport errors.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Sequence

import httpx

NETWORK_ERROR_MESSAGE = (
    "Network error: unable to reach the server. "
    "Please check your internet connection and try again."
)
UNEXPECTED_PREFIX = "An unexpected error occurred"
DEFAULT_ENVELOPE_FAILURE = "Request failed"
VALIDATION_TAG = "VALIDATION"


class ErrorKind(str, Enum):
    """Closed set of normalized failure categories."""

    NETWORK = "NETWORK"
    VALIDATION = "VALIDATION"
    BAD_REQUEST = "BAD_REQUEST"
    AUTHORIZATION = "AUTHORIZATION"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    RATE_LIMITED = "RATE_LIMITED"
    SERVER_UNAVAILABLE = "SERVER_UNAVAILABLE"
    SERVER_ERROR = "SERVER_ERROR"
    UNEXPECTED = "UNEXPECTED"


_STATUS_MESSAGES: dict[int, tuple[ErrorKind, str]] = {
    400: (ErrorKind.BAD_REQUEST, "Invalid request. Please check your input."),
    401: (ErrorKind.AUTHORIZATION, "Unauthorized. Please log in again."),
    403: (
        ErrorKind.AUTHORIZATION,
        "Forbidden. You do not have permission to perform this action.",
    ),
    404: (ErrorKind.NOT_FOUND, "Resource not found."),
    409: (ErrorKind.CONFLICT, "Conflict. The resource already exists or was modified."),
    422: (ErrorKind.VALIDATION, "Validation failed. Please check your input."),
    429: (ErrorKind.RATE_LIMITED, "Too many requests. Please try again later."),
    500: (ErrorKind.SERVER_UNAVAILABLE, "Server unavailable. Please try again later."),
    502: (ErrorKind.SERVER_UNAVAILABLE, "Server unavailable. Please try again later."),
    503: (ErrorKind.SERVER_UNAVAILABLE, "Server unavailable. Please try again later."),
}


class ApiError(Exception):
    """
    Normalized error raised for every failed backend interaction.

    Attributes are read-only once the error is built. `message` is always a
    non-empty, human-readable string; `details`, when set, is a non-empty
    list of per-field validation strings.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: ErrorKind = ErrorKind.UNEXPECTED,
        status: int | None = None,
        details: Sequence[str] | None = None,
        error_type: str | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(message or "An error occurred")
        self._message = message or "An error occurred"
        self._kind = kind
        self._status = status
        self._details = tuple(details) if details else None
        self._error_type = error_type
        self._original_error = original_error

    @property
    def message(self) -> str:
        return self._message

    @property
    def kind(self) -> ErrorKind:
        return self._kind

    @property
    def status(self) -> int | None:
        return self._status

    @property
    def details(self) -> list[str] | None:
        return list(self._details) if self._details else None

    @property
    def error_type(self) -> str | None:
        return self._error_type

    @property
    def original_error(self) -> BaseException | None:
        return self._original_error

    @property
    def is_validation(self) -> bool:
        """True when the details list should replace the message on display."""
        return bool(self._details) and (
            self._kind == ErrorKind.VALIDATION or self._error_type == VALIDATION_TAG
        )

    def __repr__(self) -> str:
        return (
            f"ApiError(kind={self._kind.value}, status={self._status}, "
            f"message={self._message!r})"
        )


def _details_list(raw: Any) -> list[str] | None:
    """Coerce a backend `details` payload into a non-empty list of strings."""
    if raw is None:
        return None
    if isinstance(raw, (list, tuple)):
        items = [str(d) for d in raw if d is not None and str(d) != ""]
        return items or None
    text = str(raw)
    return [text] if text else None


def _response_body(response: httpx.Response) -> Mapping[str, Any]:
    """Return the JSON object body of a response, or an empty mapping."""
    try:
        body = response.json()
    except (ValueError, httpx.ResponseNotRead):
        return {}
    return body if isinstance(body, Mapping) else {}


def _is_network_failure(exc: BaseException) -> bool:
    """True when the request went out but no response came back."""
    return isinstance(exc, httpx.TransportError) and not isinstance(
        exc, httpx.UnsupportedProtocol
    )


def status_message(status: int) -> tuple[ErrorKind, str]:
    """Return the fixed (kind, message) pair for an HTTP status code."""
    if status in _STATUS_MESSAGES:
        return _STATUS_MESSAGES[status]
    return ErrorKind.SERVER_ERROR, f"Server error ({status}). Please try again later."


def from_response(
    response: httpx.Response, original_error: BaseException | None = None
) -> ApiError:
    """Build an ApiError from an HTTP response carrying an error."""
    body = _response_body(response)
    status = response.status_code
    error_type = body.get("errorType")
    details = _details_list(body.get("details"))

    if body.get("success") is False and error_type == VALIDATION_TAG and details:
        return ApiError(
            "\n".join(details),
            kind=ErrorKind.VALIDATION,
            status=status,
            details=details,
            error_type=error_type,
            original_error=original_error,
        )

    kind, default_message = status_message(status)
    backend_message = body.get("message") or body.get("error")
    return ApiError(
        str(backend_message) if backend_message else default_message,
        kind=kind,
        status=status,
        details=details,
        error_type=error_type,
        original_error=original_error,
    )


def normalize_error(exc: BaseException) -> ApiError:
    """
    Convert any failure raised around a backend call into an ApiError.

    Classification order (first match wins):
      1) transport failure with no response -> connectivity message
      2) backend validation envelope -> details become the message
      3) HTTP status -> fixed per-status message (backend message preferred)
      4) anything else -> "unexpected error" framing of the raw message
    """
    if isinstance(exc, ApiError):
        return exc

    if _is_network_failure(exc):
        return ApiError(
            NETWORK_ERROR_MESSAGE, kind=ErrorKind.NETWORK, original_error=exc
        )

    if isinstance(exc, httpx.HTTPStatusError):
        return from_response(exc.response, original_error=exc)

    raw = str(exc) or exc.__class__.__name__
    return ApiError(
        f"{UNEXPECTED_PREFIX}: {raw}", kind=ErrorKind.UNEXPECTED, original_error=exc
    )


def unwrap(envelope: Any) -> Any:
    """
    Return the payload of a backend envelope `{success, data, message}`.

    - success true and data present -> data
    - success false -> ApiError with the envelope message
    - no `success` key -> the envelope itself, unchanged
    """
    if not isinstance(envelope, Mapping) or "success" not in envelope:
        return envelope

    if envelope["success"]:
        data = envelope.get("data")
        return data if data is not None else envelope

    error_type = envelope.get("errorType")
    details = _details_list(envelope.get("details"))
    kind = (
        ErrorKind.VALIDATION
        if error_type == VALIDATION_TAG and details
        else ErrorKind.UNEXPECTED
    )
    message = envelope.get("message") or DEFAULT_ENVELOPE_FAILURE
    raise ApiError(
        str(message), kind=kind, details=details, error_type=error_type
    )
