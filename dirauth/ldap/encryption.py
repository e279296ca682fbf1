"""Transport encryption for directory connections.

Three modes are supported:

- ``none``: plain LDAP, simple bind in the clear.
- ``simple_tls``: TLS from the first byte (LDAPS).
- ``start_tls``: connect in the clear, then upgrade with the StartTLS extended
  operation. Only this mode uses ``ca_file``.

Certificate verification is off unless the configuration sets ``tls_verify``.
"""
from __future__ import annotations

import ssl
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from ldap3 import Tls

from .errors import InvalidEncryptionMode, InvalidSSLVersion


class EncryptionMode(str, Enum):
    NONE = "none"
    SIMPLE_TLS = "simple_tls"
    START_TLS = "start_tls"

    @classmethod
    def parse(cls, value: Any) -> "EncryptionMode":
        if isinstance(value, cls):
            return value
        if value is None or value == "":
            return cls.NONE
        if isinstance(value, str):
            for mode in cls:
                if mode.value == value:
                    return mode
        raise InvalidEncryptionMode(value)


# Stored value -> name of the ssl module constant.
SSL_VERSIONS: dict[str, str] = {
    "TLSv1": "PROTOCOL_TLSv1",
    "TLSv1_1": "PROTOCOL_TLSv1_1",
    "TLSv1_2": "PROTOCOL_TLSv1_2",
}


def resolve_ssl_version(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    const_name = SSL_VERSIONS.get(value)
    protocol = getattr(ssl, const_name, None) if const_name else None
    if protocol is None:
        raise InvalidSSLVersion(value)
    return protocol


@dataclass(frozen=True)
class TransportSettings:
    use_ssl: bool = False
    start_tls: bool = False
    tls_options: dict[str, Any] = field(default_factory=dict)

    @property
    def encrypted(self) -> bool:
        return self.use_ssl or self.start_tls

    def build_tls(self) -> Optional[Tls]:
        if not self.encrypted:
            return None
        return Tls(**self.tls_options)


def resolve_transport(
    mode: Any,
    ca_file: Optional[str] = None,
    ssl_version: Optional[str] = None,
    verify: bool = False,
) -> TransportSettings:
    """Translate stored encryption settings into ldap3 transport settings.

    Raises ConfigurationError subclasses for unknown modes or SSL versions.
    Performs no I/O.
    """
    mode = EncryptionMode.parse(mode)
    if mode is EncryptionMode.NONE:
        return TransportSettings()

    tls_options: dict[str, Any] = {
        "validate": ssl.CERT_REQUIRED if verify else ssl.CERT_NONE,
    }
    if mode is EncryptionMode.START_TLS and ca_file:
        tls_options["ca_certs_file"] = ca_file

    # ldap3 negotiates the highest common protocol when no version is given.
    version = resolve_ssl_version(ssl_version)
    if version is not None:
        tls_options["version"] = version

    return TransportSettings(
        use_ssl=mode is EncryptionMode.SIMPLE_TLS,
        start_tls=mode is EncryptionMode.START_TLS,
        tls_options=tls_options,
    )
