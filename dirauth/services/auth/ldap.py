from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from ...ldap import AuthenticationFailed, ConfigurationError, DirectoryClient, DirectoryError, ServiceBindError
from ...repo import add_login_audit
from .backend import AuthResult

log = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid username or password."
UNAVAILABLE_MESSAGE = "Directory server is unavailable, try again later."
MISCONFIGURED_MESSAGE = "Directory authentication is not configured correctly."


def authenticate(
    username: str,
    password: str,
    client: DirectoryClient,
    db: Session | None = None,
    organization_id: str = "",
) -> AuthResult:
    """Authenticate against the directory and map the entry to session data.

    Args:
        username: Bare user name, not a DN
        password: Password
        client: Client of the organization's directory
        db: When given, the attempt is written to the login audit

    Returns:
        AuthResult: ``result_code`` is ``ok``, ``invalid``, ``unavailable`` or ``error``
    """
    try:
        outcome = client.authenticate(username, password)
    except (ConfigurationError, ServiceBindError) as e:
        log.error("LDAP configuration error for %s: %s", client.address, e)
        result = AuthResult(success=False, error_message=MISCONFIGURED_MESSAGE, result_code="error")
        details = str(e)
    except DirectoryError as e:
        log.error("LDAP directory %s unavailable: %s", client.address, e)
        result = AuthResult(success=False, error_message=UNAVAILABLE_MESSAGE, result_code="unavailable")
        details = str(e)
    else:
        if isinstance(outcome, AuthenticationFailed):
            result = AuthResult(success=False, error_message=INVALID_CREDENTIALS_MESSAGE, result_code="invalid")
            details = ""
        else:
            result = AuthResult(
                success=True,
                user_data={
                    "user_id": outcome.user_id,
                    "username": outcome.username or username,
                    "email": outcome.email,
                    "dn": outcome.dn,
                    "auth": "ldap",
                },
                result_code="ok",
            )
            details = outcome.dn or ""

    if db is not None:
        add_login_audit(
            db,
            username=username,
            success=result.success,
            result_code=result.result_code,
            organization_id=organization_id,
            details=details,
        )
    return result
