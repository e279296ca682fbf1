from __future__ import annotations


class DirectoryError(Exception):
    """Base class for directory failures."""


class ConfigurationError(DirectoryError):
    """The stored configuration cannot be used. Never retried."""


class InvalidEncryptionMode(ConfigurationError):
    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(
            f"Invalid encryption value supplied: {value!r}. Valid values: [None, 'simple_tls', 'start_tls']"
        )


class InvalidSSLVersion(ConfigurationError):
    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Unsupported ssl_version: {value!r}")


class DirectoryUnavailable(DirectoryError):
    """Connection refused, timeout, TLS negotiation or protocol failure."""


class DirectorySearchError(DirectoryUnavailable):
    def __init__(self, base: str, message: str) -> None:
        self.base = base
        super().__init__(f"Search under {base!r} failed: {message}")


class ServiceBindError(DirectoryError):
    """The configured connection user was rejected by the server."""


class ConnectionDiscarded(DirectoryError):
    """The connection was closed by its owner and will not be reopened."""
