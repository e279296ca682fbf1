from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ...ldap.encryption import SSL_VERSIONS, EncryptionMode
from ...ldap.models import DirectoryConfiguration
from ...ldap.utils import split_domain_bases


class LdapConfigSchema(BaseModel):
    """Validated shape of a stored directory configuration.

    ``connection_password`` is the plaintext secret; storage decides how to
    persist it.
    """

    host: str = Field(min_length=1, max_length=255)
    port: int = Field(default=389, ge=1, le=65535)
    encryption: Optional[str] = Field(default=None)
    ca_file: Optional[str] = Field(default=None)
    ssl_version: Optional[str] = Field(default=None)
    tls_verify: bool = Field(default=False)

    connection_user: str = Field(min_length=1)
    connection_password: str = Field(min_length=1, repr=False)

    user_id_field: str = Field(min_length=1, max_length=128)
    username_field: Optional[str] = Field(default=None, max_length=128)
    email_field: str = Field(min_length=1, max_length=128)
    auth_attribute: str = Field(default="cn", min_length=1, max_length=128)

    domain_bases: str = Field(default="")
    user_object_class: str = Field(min_length=1, max_length=128)
    group_object_class: str = Field(min_length=1, max_length=128)

    @field_validator(
        "host", "connection_user", "user_id_field", "email_field",
        "auth_attribute", "user_object_class", "group_object_class",
        mode="before",
    )
    @classmethod
    def _strip(cls, v: str) -> str:
        return (v or "").strip()

    @field_validator("ca_file", "ssl_version", "username_field", "encryption", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        s = (v or "").strip()
        return s or None

    @field_validator("encryption")
    @classmethod
    def _validate_encryption(cls, v: Optional[str]) -> Optional[str]:
        if v is None or v == EncryptionMode.NONE.value:
            return None
        if v not in (EncryptionMode.SIMPLE_TLS.value, EncryptionMode.START_TLS.value):
            raise ValueError(f"encryption must be one of: simple_tls, start_tls (got {v!r})")
        return v

    @field_validator("ssl_version")
    @classmethod
    def _validate_ssl_version(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in SSL_VERSIONS:
            raise ValueError(f"ssl_version must be one of: {', '.join(SSL_VERSIONS)} (got {v!r})")
        return v

    @model_validator(mode="after")
    def _validate_domain_bases(self) -> "LdapConfigSchema":
        if not split_domain_bases(self.domain_bases):
            raise ValueError("At least one domain base is required.")
        return self

    def to_config(
        self,
        connect_timeout: Optional[float] = None,
        receive_timeout: Optional[float] = None,
    ) -> DirectoryConfiguration:
        timeouts = {}
        if connect_timeout is not None:
            timeouts["connect_timeout"] = connect_timeout
        if receive_timeout is not None:
            timeouts["receive_timeout"] = receive_timeout
        return DirectoryConfiguration(
            host=self.host,
            port=self.port,
            connection_user=self.connection_user,
            connection_password=self.connection_password,
            user_id_field=self.user_id_field,
            email_field=self.email_field,
            user_object_class=self.user_object_class,
            group_object_class=self.group_object_class,
            domain_bases=self.domain_bases,
            encryption=self.encryption,
            ca_file=self.ca_file,
            ssl_version=self.ssl_version,
            username_field=self.username_field,
            tls_verify=self.tls_verify,
            auth_attribute=self.auth_attribute,
            **timeouts,
        )
