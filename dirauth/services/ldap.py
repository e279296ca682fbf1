from __future__ import annotations

import logging

from pydantic import ValidationError
from sqlalchemy.orm import Session

from ..crypto import decrypt_secret
from ..env_settings import get_env
from ..ldap import ConfigurationError, DirectoryClient, DirectoryConfiguration
from ..models import LdapConfiguration
from ..repo import get_ldap_configuration
from .settings.schema import LdapConfigSchema

log = logging.getLogger(__name__)


def directory_config_from_record(rec: LdapConfiguration) -> DirectoryConfiguration:
    """Validate a stored record and build the runtime configuration.

    Raises ConfigurationError when the record is incomplete or invalid.
    """
    try:
        schema = LdapConfigSchema(
            host=rec.host,
            port=rec.port,
            encryption=rec.encryption,
            ca_file=rec.ca_file,
            ssl_version=rec.ssl_version,
            tls_verify=bool(rec.tls_verify),
            connection_user=rec.connection_user,
            connection_password=decrypt_secret(rec.connection_password_enc),
            user_id_field=rec.user_id_field,
            username_field=rec.username_field,
            email_field=rec.email_field,
            auth_attribute=rec.auth_attribute or "cn",
            domain_bases=rec.domain_bases or "",
            user_object_class=rec.user_object_class,
            group_object_class=rec.group_object_class,
        )
    except ValidationError as e:
        # Field names and messages only; the input values may contain the secret.
        problems = "; ".join(f"{'.'.join(map(str, err['loc'])) or 'record'}: {err['msg']}" for err in e.errors())
        raise ConfigurationError(f"Invalid LDAP configuration {rec.id}: {problems}") from e

    env = get_env()
    return schema.to_config(
        connect_timeout=env.ldap_connect_timeout_s,
        receive_timeout=env.ldap_receive_timeout_s,
    )


def load_directory_client(db: Session, organization_id: str) -> DirectoryClient | None:
    """DirectoryClient for an organization, or None if it has no configuration."""
    rec = get_ldap_configuration(db, organization_id)
    if rec is None:
        log.debug("No LDAP configuration for organization %s", organization_id)
        return None
    return DirectoryClient(directory_config_from_record(rec))
