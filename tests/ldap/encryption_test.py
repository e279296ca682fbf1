"""Tests for transport encryption settings."""

from __future__ import annotations

import ssl

import pytest
from ldap3 import Tls

from dirauth.ldap import EncryptionMode, InvalidEncryptionMode, resolve_transport
from dirauth.ldap.encryption import resolve_ssl_version
from dirauth.ldap.errors import ConfigurationError, InvalidSSLVersion


@pytest.mark.parametrize("value", [None, "", "none", EncryptionMode.NONE])
def test_no_encryption(value: object) -> None:
    transport = resolve_transport(value, ca_file="/etc/ca.pem", ssl_version="TLSv1_2")
    assert not transport.use_ssl
    assert not transport.start_tls
    assert not transport.encrypted
    assert transport.build_tls() is None


def test_simple_tls_ignores_ca_file() -> None:
    transport = resolve_transport("simple_tls", ca_file="/etc/ca.pem")
    assert transport.use_ssl
    assert not transport.start_tls
    assert transport.tls_options == {"validate": ssl.CERT_NONE}


def test_start_tls_uses_ca_file() -> None:
    transport = resolve_transport("start_tls", ca_file="/etc/ca.pem")
    assert not transport.use_ssl
    assert transport.start_tls
    assert transport.tls_options == {
        "validate": ssl.CERT_NONE,
        "ca_certs_file": "/etc/ca.pem",
    }


def test_verify_flag_requires_certificates() -> None:
    transport = resolve_transport(EncryptionMode.START_TLS, verify=True)
    assert transport.tls_options["validate"] == ssl.CERT_REQUIRED


def test_ssl_version_override() -> None:
    transport = resolve_transport("simple_tls", ssl_version="TLSv1_2")
    assert transport.tls_options["version"] == ssl.PROTOCOL_TLSv1_2
    assert resolve_ssl_version(None) is None
    assert resolve_ssl_version("") is None


def test_unknown_ssl_version() -> None:
    with pytest.raises(InvalidSSLVersion):
        resolve_transport("start_tls", ssl_version="SSLv2")


@pytest.mark.parametrize("value", ["ssl", "START_TLS", "simple-tls", "tls", 1])
def test_invalid_mode(value: object) -> None:
    with pytest.raises(InvalidEncryptionMode) as excinfo:
        resolve_transport(value)
    assert excinfo.value.value == value
    assert isinstance(excinfo.value, ConfigurationError)
    assert repr(value) in str(excinfo.value)


def test_build_tls() -> None:
    tls = resolve_transport("simple_tls").build_tls()
    assert isinstance(tls, Tls)
    assert tls.validate == ssl.CERT_NONE
