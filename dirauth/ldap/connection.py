from __future__ import annotations

import logging
import threading
from typing import Any, Optional

from ldap3 import ALL_ATTRIBUTES, SUBTREE, Connection
from ldap3.core.exceptions import LDAPException

from .errors import ConnectionDiscarded, DirectorySearchError, DirectoryUnavailable, ServiceBindError
from .utils import normalize_entry

log = logging.getLogger(__name__)

DEFAULT_FILTER = "(objectClass=*)"

# LDAP result codes that still mean "the search ran".
_RESULT_SUCCESS = 0
_RESULT_SIZE_LIMIT_EXCEEDED = 4
_RESULT_NO_SUCH_OBJECT = 32


class DirectoryConnection:
    """One ldap3 connection for one credential pair.

    Nothing touches the network until ``bind()``. Operations on the same
    instance are serialized. Once closed, the connection refuses to reopen.
    """

    def __init__(self, conn: Connection, *, start_tls: bool = False, address: str = "") -> None:
        self._conn = conn
        self._start_tls = start_tls
        self._address = address
        self._lock = threading.RLock()
        self._discarded = False

    @property
    def user(self) -> Optional[str]:
        return self._conn.user

    @property
    def bound(self) -> bool:
        return bool(self._conn.bound)

    def bind(self) -> bool:
        """Open the socket if needed and bind. False means the credential was rejected."""
        with self._lock:
            self._check_discarded()
            try:
                if self._conn.closed:
                    self._conn.open()
                    if self._start_tls and not self._conn.start_tls():
                        raise DirectoryUnavailable(f"StartTLS negotiation with {self._address} failed")
                ok = bool(self._conn.bind())
            except LDAPException as e:
                log.warning("LDAP connection to %s failed: %s", self._address, e)
                raise DirectoryUnavailable(f"Cannot reach directory at {self._address}: {e}") from e
            if not ok:
                res = dict(self._conn.result or {})
                log.debug("Bind as %s rejected: %s", self.user, res.get("description"))
            return ok

    def search(self, base: str, search_filter: Optional[str] = None) -> list[dict[str, list[Any]]]:
        with self._lock:
            self._check_discarded()
            if not self.bound and not self.bind():
                raise ServiceBindError(f"Bind as {self.user} was rejected by {self._address}")
            flt = search_filter or DEFAULT_FILTER
            try:
                self._conn.search(
                    search_base=base,
                    search_filter=flt,
                    search_scope=SUBTREE,
                    attributes=ALL_ATTRIBUTES,
                )
            except LDAPException as e:
                log.warning("LDAP search under %s failed: %s", base, e)
                raise DirectorySearchError(base, str(e)) from e

            res = dict(self._conn.result or {})
            code = res.get("result", _RESULT_SUCCESS)
            if code == _RESULT_NO_SUCH_OBJECT:
                log.debug("Search base %s does not exist", base)
                return []
            if code not in (_RESULT_SUCCESS, _RESULT_SIZE_LIMIT_EXCEEDED):
                raise DirectorySearchError(base, str(res.get("description") or code))

            entries = []
            for item in self._conn.response or []:
                if item.get("type") != "searchResEntry":
                    continue
                entry = normalize_entry(item.get("dn", ""), item.get("attributes"))
                if entry:
                    entries.append(entry)
            log.debug("Search under %s with %s returned %d entries", base, flt, len(entries))
            return entries

    def close(self) -> None:
        with self._lock:
            self._discarded = True
            if self._conn.closed:
                return
            try:
                self._conn.unbind()
            except LDAPException:
                log.debug("Unbind from %s failed", self._address, exc_info=True)

    @property
    def discarded(self) -> bool:
        return self._discarded

    def _check_discarded(self) -> None:
        if self._discarded:
            raise ConnectionDiscarded(f"Connection to {self._address} as {self.user} was closed")

    def __enter__(self) -> "DirectoryConnection":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
