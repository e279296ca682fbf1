from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from .db import make_sessionmaker
from .models import LdapConfiguration, LoginAudit


@contextmanager
def db_session(factory: sessionmaker | None = None) -> Iterator[Session]:
    db = (factory or make_sessionmaker())()
    try:
        yield db
    finally:
        db.close()


def get_ldap_configuration(db: Session, organization_id: str) -> LdapConfiguration | None:
    """Most recently updated configuration of an organization."""
    return db.scalar(
        select(LdapConfiguration)
        .where(LdapConfiguration.organization_id == organization_id)
        .order_by(LdapConfiguration.updated_at.desc())
        .limit(1)
    )


def add_login_audit(
    db: Session,
    username: str,
    success: bool,
    result_code: str,
    organization_id: str = "",
    details: str = "",
) -> None:
    db.add(
        LoginAudit(
            organization_id=organization_id,
            username=username[:128],
            auth_type="ldap",
            success=success,
            result_code=result_code,
            details=details[:512],
        )
    )
    db.commit()
