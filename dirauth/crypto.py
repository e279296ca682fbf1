"""Encryption at rest for directory connection passwords."""
from __future__ import annotations

import base64
import hashlib
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken

from .env_settings import get_env
from .ldap.errors import ConfigurationError


def _fernet(secret_key: Optional[str] = None) -> Fernet:
    secret = (secret_key or get_env().secret_key).encode("utf-8")
    key = base64.urlsafe_b64encode(hashlib.sha256(secret).digest())
    return Fernet(key)


def encrypt_secret(value: str, secret_key: Optional[str] = None) -> str:
    if not value:
        return ""
    return _fernet(secret_key).encrypt(value.encode("utf-8")).decode("utf-8")


def decrypt_secret(token: str, secret_key: Optional[str] = None) -> str:
    """Decrypt a stored secret.

    Raises ConfigurationError when the token was written with another key.
    An empty password here would make the service bind anonymous.
    """
    if not token:
        return ""
    try:
        return _fernet(secret_key).decrypt(token.encode("utf-8")).decode("utf-8")
    except InvalidToken as e:
        raise ConfigurationError("Stored connection password cannot be decrypted with the current secret key") from e
