"""Typed failures raised by the Harvest client.

Non-2xx responses are classified by ``check_response``: 429 becomes a
``RateLimitError`` carrying the ``Rate`` snapshot from the response headers,
everything else an ``ErrorResponse`` subclass keyed off the status code.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone

import httpx

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "API rate limit exceeded"


@dataclass(frozen=True)
class Rate:
    """Rate limit snapshot taken from a single response."""

    limit: int = 0
    remaining: int = 0
    reset: datetime | None = None


@dataclass(frozen=True)
class FieldError:
    """One entry of an error envelope's ``error_description`` list."""

    field: str
    message: str


class HarvestError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(HarvestError):
    """Required client configuration is missing."""


class TransportError(HarvestError):
    """The request could not be sent or its response could not be read."""


class RequestCancelled(HarvestError):
    """The caller's context was cancelled."""


class DeadlineExceeded(RequestCancelled):
    """The caller's context deadline passed."""


class DecodeError(HarvestError):
    """A successful response did not match the expected shape."""


class RateLimitError(HarvestError):
    """The API rate limit was exceeded (HTTP 429)."""

    def __init__(self, method: str, url: str, status_code: int, rate: Rate, message: str = RATE_LIMIT_MESSAGE):
        self.method = method
        self.url = url
        self.status_code = status_code
        self.rate = rate
        self.message = message
        super().__init__(str(self))

    def __str__(self) -> str:
        reset = self.rate.reset.strftime("%H:%M:%S") if self.rate.reset else "unknown"
        return (
            f"{self.method} {self.url}: {self.status_code} {self.message} "
            f"(rate limit: {self.rate.remaining}/{self.rate.limit}, resets at {reset})"
        )


class ErrorResponse(HarvestError):
    """A non-2xx response with the error envelope parsed from its body."""

    def __init__(
        self,
        method: str,
        url: str,
        status_code: int,
        message: str = "",
        errors: list[FieldError] | None = None,
    ):
        self.method = method
        self.url = url
        self.status_code = status_code
        self.message = message
        self.errors = errors or []
        super().__init__(str(self))

    def __str__(self) -> str:
        msg = f"{self.method} {self.url}: {self.status_code} {self.message}"
        for err in self.errors:
            msg += f"\n  {err.field}: {err.message}"
        return msg


class AuthenticationError(ErrorResponse):
    pass


class AuthorizationError(ErrorResponse):
    pass


class NotFoundError(ErrorResponse):
    pass


class ValidationError(ErrorResponse):
    pass


class UnexpectedStatusError(ErrorResponse):
    pass


# status -> (error class, message, keep message from the body)
_STATUS_ERRORS: dict[int, tuple[type[ErrorResponse], str, bool]] = {
    401: (AuthenticationError, "Authentication failed. Check your access token and account ID.", False),
    403: (AuthorizationError, "Access forbidden. You don't have permission to access this resource.", False),
    404: (NotFoundError, "Resource not found.", False),
    422: (ValidationError, "Invalid request. Check your input parameters.", True),
}


def _parse_int(value: str | None) -> int:
    if value is None:
        return 0
    try:
        return int(value.strip())
    except ValueError:
        return 0


def parse_rate(headers) -> Rate:
    """Parse the X-RateLimit-* headers into a Rate snapshot.

    Missing or malformed values leave the matching field at its zero value.
    """
    reset = None
    reset_header = headers.get("X-RateLimit-Reset")
    if reset_header:
        try:
            reset = datetime.fromtimestamp(int(reset_header.strip()), tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            reset = None
    return Rate(
        limit=_parse_int(headers.get("X-RateLimit-Limit")),
        remaining=_parse_int(headers.get("X-RateLimit-Remaining")),
        reset=reset,
    )


def _parse_envelope(body: bytes) -> tuple[str, list[FieldError]]:
    """Best-effort decode of ``{"error": ..., "error_description": [...]}``."""
    if not body:
        return "", []
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return "", []
    if not isinstance(data, dict):
        return "", []

    message = data.get("error")
    if not isinstance(message, str):
        message = ""

    errors = []
    description = data.get("error_description")
    if isinstance(description, list):
        for item in description:
            if isinstance(item, dict):
                errors.append(FieldError(field=str(item.get("field", "")), message=str(item.get("message", ""))))
    elif isinstance(description, str) and not message:
        # OAuth-style errors carry a plain string description
        message = description
    return message, errors


def classify(response: httpx.Response) -> HarvestError | None:
    """Return the typed error for a response, or None when it succeeded."""
    status = response.status_code
    if 200 <= status <= 299:
        return None

    method = response.request.method
    url = str(response.request.url)

    if status == 429:
        rate = parse_rate(response.headers)
        logger.warning("Rate limit exceeded for %s %s (resets at %s)", method, url, rate.reset)
        return RateLimitError(method, url, status, rate)

    try:
        body = response.read()
    except httpx.HTTPError:
        body = b""
    message, errors = _parse_envelope(body)

    cls, default_message, keep_body_message = _STATUS_ERRORS.get(status, (UnexpectedStatusError, "", True))
    if cls is UnexpectedStatusError:
        default_message = f"Unexpected status code: {status}"
    if not keep_body_message or not message:
        message = default_message
    return cls(method, url, status, message, errors)


def check_response(response: httpx.Response) -> None:
    """Raise the typed error for a non-2xx response."""
    err = classify(response)
    if err is not None:
        raise err
