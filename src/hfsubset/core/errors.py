"""Error hierarchy of the subset pipeline.

Every failure of the core derives from `HfsubsetError`, so the CLI can catch a
single type, log one fatal message and exit non-zero. Nothing here is retried.
"""

from __future__ import annotations

from pathlib import Path


class HfsubsetError(Exception):
    """Base error for everything raised by the subset pipeline."""


class InvalidEndpoint(HfsubsetError, ValueError):
    """The base endpoint is not an absolute http(s) URL."""

    def __init__(self, endpoint: str, reason: str) -> None:
        self.endpoint = endpoint
        super().__init__(f"invalid endpoint {endpoint!r}: {reason}")


class InvalidIdentifierType(HfsubsetError, ValueError):
    """Unknown identifier type, or one the selected protocol cannot send."""


class InvalidIdentifier(HfsubsetError, ValueError):
    """An identifier cannot be converted for the selected protocol."""


class VerificationFailed(HfsubsetError):
    """The HEAD preflight did not find a usable service."""


class SubsetRequestFailed(HfsubsetError):
    """The subset request did not complete with HTTP 200."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class RequestTimeout(HfsubsetError):
    """The configured HTTP timeout expired during the transfer."""


class ResponseDecodeError(HfsubsetError):
    """The legacy response body is not valid base64."""


class FilesystemError(HfsubsetError):
    """The output file cannot be created or written."""


class IntegrityMismatch(HfsubsetError):
    """Fewer (or more) bytes reached the output file than were received."""

    def __init__(self, *, written: int, expected: int, path: Path) -> None:
        self.written = written
        self.expected = expected
        self.path = path
        super().__init__(f"wrote {written} bytes out of {expected} bytes to {path}")
