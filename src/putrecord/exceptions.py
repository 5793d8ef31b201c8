"""
Exceptions raised by the upload workflow.

The record builder itself never raises; everything here belongs to the
configuration, file, and network layers around it.
"""

from typing import Optional


class PutRecordError(Exception):
    """Base class for all putrecord errors."""


class ConfigError(PutRecordError):
    """Required configuration is missing or invalid."""


class FileReadError(PutRecordError):
    """The file to upload could not be read."""


class AuthenticationError(PutRecordError):
    """Session creation failed or no session is active."""


class MissingRkeyError(PutRecordError):
    """An update was attempted without a record key."""


class XrpcError(PutRecordError):
    """
    An XRPC call returned an error response.

    Attributes:
        status_code: HTTP status code (0 for transport failures)
        error: XRPC error name from the response body, if any
        message: Human-readable error message
    """

    def __init__(self, status_code: int, error: Optional[str] = None, message: str = ""):
        self.status_code = status_code
        self.error = error
        self.message = message
        super().__init__(self._format())

    def _format(self) -> str:
        parts = []
        if self.status_code:
            parts.append(f"HTTP {self.status_code}")
        if self.error:
            parts.append(self.error)
        text = " ".join(parts)
        if self.message:
            text = f"{text}: {self.message}" if text else self.message
        return text or "XRPC request failed"

    @property
    def is_not_found(self) -> bool:
        """Check if the error means the record does not exist."""
        return self.status_code == 404 or self.error == "RecordNotFound"
