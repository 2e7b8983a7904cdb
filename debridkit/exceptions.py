"""
Debrid Exceptions
Error hierarchy shared by every debrid client.

    DebridError
    ├── InvalidMagnet
    ├── CredentialError
    │   ├── MissingCredential
    │   └── InvalidCredential
    ├── TransportError (status_code)
    │   ├── DecodeError
    │   └── RateLimitError
    ├── ProviderError (provider, code, message)
    │   ├── AuthenticationError
    │   └── RemoteItemError
    ├── NotCached
    ├── NotReady
    ├── FileNotFound
    ├── LinkUnavailable
    └── InvalidConfiguration

Catch DebridError to handle anything raised by this package.
"""
from typing import Any, Optional


class DebridError(Exception):
    """Base exception for all debrid-related errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidMagnet(DebridError):
    """The magnet link does not carry a 40-character hex info hash."""

    def __init__(self, magnet: str):
        super().__init__("Invalid magnet link: could not extract hash")
        self.magnet = magnet


class CredentialError(DebridError):
    pass


class MissingCredential(CredentialError):
    def __init__(self, message: str = "You must set the token before calling this method"):
        super().__init__(message)


class InvalidCredential(CredentialError, ValueError):
    def __init__(self, message: str = "Token cannot be empty"):
        super().__init__(message)


class TransportError(DebridError):
    """HTTP-layer failure. status_code is None for connection errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code:
            return f"HTTP {self.status_code}: {self.message}"
        return self.message


class DecodeError(TransportError):
    """Response body was not valid JSON."""


class RateLimitError(TransportError):
    def __init__(self, message: str = "Rate limited", status_code: Optional[int] = 429):
        super().__init__(message, status_code)


class ProviderError(DebridError):
    """The remote API signaled an application error."""

    def __init__(
        self,
        message: str,
        code: Any = None,
        provider: str = "",
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.code = code
        self.provider = provider
        self.status_code = status_code

    def __str__(self) -> str:
        prefix = f"[{self.provider}] " if self.provider else ""
        if self.code not in (None, ""):
            return f"{prefix}{self.message} ({self.code})"
        return f"{prefix}{self.message}"


class AuthenticationError(ProviderError):
    """The provider rejected the token."""


class RemoteItemError(ProviderError):
    """The provider reports a failed status for the remote torrent."""


class NotCached(DebridError):
    pass


class NotReady(DebridError):
    """The remote item exists but has not finished processing."""

    def __init__(self, message: str, status: str = ""):
        super().__init__(message)
        self.status = status


class FileNotFound(DebridError):
    def __init__(self, path: str):
        super().__init__(f"File with path '{path}' not found in torrent")
        self.path = path


class LinkUnavailable(DebridError):
    def __init__(self, path: str, message: str = ""):
        super().__init__(message or f"No download link available for '{path}'")
        self.path = path


class InvalidConfiguration(DebridError):
    """No client or token configured on the facade."""
