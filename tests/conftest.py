"""Test fixtures."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from dirauth.db import Base
from dirauth.env_settings import get_env
from dirauth.ldap import DirectoryClient, DirectoryConfiguration
from dirauth.models import LdapConfiguration  # noqa: F401  (registers tables)

from .support.ldap import FakeDirectory, patch_ldap

TEST_SECRET_KEY = "test-secret-key"
ADMIN_DN = "cn=admin,dc=example"
ADMIN_PASSWORD = "admin-password"


@pytest.fixture(autouse=True)
def environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Set default values of environment variables for testing."""
    monkeypatch.setenv("DIRAUTH_SECRET_KEY", TEST_SECRET_KEY)
    monkeypatch.setenv("LDAP_CONNECT_TIMEOUT_S", "3")
    monkeypatch.setenv("LDAP_RECEIVE_TIMEOUT_S", "4")
    get_env.cache_clear()
    yield
    get_env.cache_clear()


@pytest.fixture
def config() -> DirectoryConfiguration:
    return DirectoryConfiguration(
        host="ldap.example.com",
        port=389,
        connection_user=ADMIN_DN,
        connection_password=ADMIN_PASSWORD,
        user_id_field="uid",
        username_field="displayName",
        email_field="mail",
        user_object_class="inetOrgPerson",
        group_object_class="groupOfNames",
        domain_bases="ou=staff,ou=contractors",
    )


@pytest.fixture
def mock_ldap() -> Iterator[FakeDirectory]:
    with patch_ldap() as directory:
        directory.add_entry("dc=example", ADMIN_DN, {"cn": ["admin"]}, password=ADMIN_PASSWORD)
        directory.add_base("ou=staff")
        directory.add_base("ou=contractors")
        yield directory


@pytest.fixture
def client(config: DirectoryConfiguration, mock_ldap: FakeDirectory) -> DirectoryClient:
    return DirectoryClient(config)


@pytest.fixture
def db() -> Iterator[Session]:
    engine = create_engine(
        "sqlite://",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine, future=True)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()
