from __future__ import annotations

import logging
import threading
from typing import Any, Optional, Union

from ldap3 import NONE, Connection, Server

from .connection import DirectoryConnection
from .errors import ConnectionDiscarded, DirectoryUnavailable
from .models import AUTHENTICATION_FAILED, AuthenticationFailed, DirectoryConfiguration, DirectoryEntry
from .utils import candidate_dn, eq_filter

log = logging.getLogger(__name__)


class DirectoryClient:
    """Authentication and lookups against one configured directory."""

    def __init__(self, cfg: DirectoryConfiguration) -> None:
        self.cfg = cfg
        self._conn: Optional[DirectoryConnection] = None
        self._conn_lock = threading.Lock()

    @property
    def address(self) -> str:
        return f"{self.cfg.host}:{self.cfg.port}"

    def connect(self, user: Optional[str] = None, password: Optional[str] = None) -> DirectoryConnection:
        """Build an unbound connection, by default as the configured connection user."""
        if user is None:
            user = self.cfg.connection_user
            password = self.cfg.connection_password
        transport = self.cfg.transport
        server = Server(
            host=self.cfg.host,
            port=self.cfg.port,
            use_ssl=transport.use_ssl,
            tls=transport.build_tls(),
            get_info=NONE,
            connect_timeout=self.cfg.connect_timeout,
        )
        # Simple bind; the password travels in the clear when no encryption is configured.
        conn = Connection(
            server,
            user=user,
            password=password,
            auto_bind=False,
            raise_exceptions=False,
            receive_timeout=self.cfg.receive_timeout,
        )
        return DirectoryConnection(conn, start_tls=transport.start_tls, address=self.address)

    def connection(self) -> DirectoryConnection:
        """Shared connection used for searches, created on first use."""
        conn = self._conn
        if conn is not None:
            return conn
        with self._conn_lock:
            if self._conn is None:
                self._conn = self.connect()
            return self._conn

    def reset_connection(self) -> None:
        with self._conn_lock:
            conn, self._conn = self._conn, None
        if conn is not None:
            conn.close()

    def _drop_connection(self, conn: DirectoryConnection) -> None:
        with self._conn_lock:
            if self._conn is conn:
                self._conn = None
        conn.close()

    def test_connection(self) -> bool:
        """Re-create the shared connection and report whether its bind succeeds."""
        self.reset_connection()
        ok = self.connection().bind()
        log.info("LDAP test connection to %s as %s: %s", self.address, self.cfg.connection_user, "ok" if ok else "rejected")
        return ok

    def search(self, base: str, search_filter: Optional[str] = None) -> list[dict[str, list[Any]]]:
        conn = self.connection()
        try:
            return conn.search(base, search_filter)
        except ConnectionDiscarded:
            # Reset by another caller while we held it.
            return self.search(base, search_filter)
        except DirectoryUnavailable:
            # Next search starts from a fresh socket.
            self._drop_connection(conn)
            raise

    def search_in_domain_bases(self, search_filter: Optional[str]) -> list[dict[str, list[Any]]]:
        results: list[dict[str, list[Any]]] = []
        for base in self.cfg.domain_bases_list:
            results.extend(e for e in self.search(base, search_filter) if e)
        return results

    def users(self, object_class: Optional[str] = None) -> list[dict[str, list[Any]]]:
        return self.search_in_domain_bases(eq_filter("objectClass", object_class or self.cfg.user_object_class))

    def groups(self, object_class: Optional[str] = None) -> list[dict[str, list[Any]]]:
        return self.search_in_domain_bases(eq_filter("objectClass", object_class or self.cfg.group_object_class))

    def authenticate(self, username: str, password: str) -> Union[DirectoryEntry, AuthenticationFailed]:
        """Check ``username``/``password`` against each domain base in order.

        ``username`` is the bare value of the auth attribute (e.g. ``jdoe``),
        not a DN. The first base whose candidate DN binds is searched with
        the shared connection and its first match is returned.

        Returns AUTHENTICATION_FAILED for unknown users and wrong passwords
        alike. Raises DirectoryUnavailable when the server cannot be reached.
        """
        if not username or not password:
            log.info("LDAP authentication rejected: empty username or password")
            return AUTHENTICATION_FAILED

        attr = self.cfg.auth_attribute
        matched_base = None
        for base in self.cfg.domain_bases_list:
            # Only tests the credential; this connection is not kept.
            with self.connect(candidate_dn(attr, username, base), password) as conn:
                if conn.bind():
                    matched_base = base
                    break

        if matched_base is None:
            log.info("LDAP authentication failed for %s", username)
            return AUTHENTICATION_FAILED

        results = self.search(matched_base, eq_filter(attr, username))
        if not results:
            log.info("LDAP bind for %s under %s succeeded but no entry was found", username, matched_base)
            return AUTHENTICATION_FAILED

        if len(results) > 1:
            log.debug("LDAP search for %s under %s returned %d entries, using the first", username, matched_base, len(results))
        log.info("LDAP authentication succeeded for %s under %s", username, matched_base)
        return DirectoryEntry(results[0], self.cfg)
