from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from .encryption import EncryptionMode, TransportSettings, resolve_ssl_version, resolve_transport
from .utils import join_domain_bases, split_domain_bases


@dataclass
class DirectoryConfiguration:
    host: str
    port: int
    connection_user: str
    connection_password: str = field(repr=False)
    user_id_field: str
    email_field: str
    user_object_class: str
    group_object_class: str
    domain_bases: str = ""
    encryption: Any = EncryptionMode.NONE
    ca_file: Optional[str] = None
    ssl_version: Optional[str] = None
    username_field: Optional[str] = None
    tls_verify: bool = False
    auth_attribute: str = "cn"
    connect_timeout: Optional[float] = 10.0
    receive_timeout: Optional[float] = 10.0
    _transport: TransportSettings = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not 1 <= int(self.port) <= 65535:
            raise ValueError(f"port out of range: {self.port}")
        self.port = int(self.port)
        # Resolved here so a bad mode or version never reaches the network.
        self.encryption = EncryptionMode.parse(self.encryption)
        resolve_ssl_version(self.ssl_version)
        self._transport = resolve_transport(
            self.encryption,
            ca_file=self.ca_file,
            ssl_version=self.ssl_version,
            verify=self.tls_verify,
        )

    @property
    def transport(self) -> TransportSettings:
        return self._transport

    @property
    def domain_bases_list(self) -> List[str]:
        return split_domain_bases(self.domain_bases)

    @domain_bases_list.setter
    def domain_bases_list(self, bases: List[str]) -> None:
        self.domain_bases = join_domain_bases(bases)


class DirectoryEntry:
    """Identity view over a raw directory entry.

    ``raw`` maps attribute names to lists of values, as returned by
    DirectoryClient.search. Attribute names are matched case-insensitively.
    """

    def __init__(self, raw: dict[str, list[Any]], config: DirectoryConfiguration) -> None:
        self.raw = raw
        self.config = config
        self._by_name = {k.lower(): v for k, v in raw.items()}

    def values(self, field_name: Optional[str]) -> list[Any]:
        if not field_name:
            return []
        return list(self._by_name.get(field_name.lower()) or [])

    def _first(self, field_name: Optional[str]) -> Any:
        vals = self.values(field_name)
        return vals[0] if vals else None

    @property
    def dn(self) -> Optional[str]:
        return self._first("dn")

    @property
    def user_id(self) -> Any:
        return self._first(self.config.user_id_field)

    @property
    def username(self) -> Any:
        return self._first(self.config.username_field)

    @property
    def email(self) -> Any:
        return self._first(self.config.email_field)

    def __repr__(self) -> str:
        return f"DirectoryEntry(dn={self.dn!r}, user_id={self.user_id!r})"


@dataclass(frozen=True)
class AuthenticationFailed:
    """Negative authentication result.

    The same value is returned for an unknown user and for a wrong password.
    """

    message: str = "Invalid username or password."


AUTHENTICATION_FAILED = AuthenticationFailed()
