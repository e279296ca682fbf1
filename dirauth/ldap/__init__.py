"""LDAP directory authentication package.

Public API:
    - DirectoryConfiguration
    - DirectoryClient
    - DirectoryEntry
    - AuthenticationFailed / AUTHENTICATION_FAILED
    - EncryptionMode
"""

from .client import DirectoryClient
from .encryption import EncryptionMode, TransportSettings, resolve_transport
from .errors import (
    ConfigurationError,
    ConnectionDiscarded,
    DirectoryError,
    DirectorySearchError,
    DirectoryUnavailable,
    InvalidEncryptionMode,
    InvalidSSLVersion,
    ServiceBindError,
)
from .models import AUTHENTICATION_FAILED, AuthenticationFailed, DirectoryConfiguration, DirectoryEntry

__all__ = [
    "AUTHENTICATION_FAILED",
    "AuthenticationFailed",
    "ConfigurationError",
    "ConnectionDiscarded",
    "DirectoryClient",
    "DirectoryConfiguration",
    "DirectoryEntry",
    "DirectoryError",
    "DirectorySearchError",
    "DirectoryUnavailable",
    "EncryptionMode",
    "InvalidEncryptionMode",
    "InvalidSSLVersion",
    "ServiceBindError",
    "TransportSettings",
    "resolve_transport",
]
