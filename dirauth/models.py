from __future__ import annotations

import uuid
from datetime import datetime
from sqlalchemy import String, DateTime, Boolean, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from .db import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class LdapConfiguration(Base):
    """Stored directory settings of an organization.

    Rows are managed by the administration flow; this package only reads them.
    """

    __tablename__ = "ldap_configurations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    organization_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)

    host: Mapped[str] = mapped_column(String(255), nullable=False)          # host or ip
    port: Mapped[int] = mapped_column(Integer, default=389, nullable=False)  # 389, 636 (LDAPS)
    encryption: Mapped[str | None] = mapped_column(String(16), nullable=True)  # NULL|simple_tls|start_tls
    ca_file: Mapped[str | None] = mapped_column(String(1024), nullable=True)   # start_tls only
    ssl_version: Mapped[str | None] = mapped_column(String(16), nullable=True)  # e.g. TLSv1_1
    tls_verify: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    connection_user: Mapped[str] = mapped_column(String(512), nullable=False)  # full DN of the search user
    connection_password_enc: Mapped[str] = mapped_column(String(2048), default="", nullable=False)

    user_id_field: Mapped[str] = mapped_column(String(128), nullable=False)   # e.g. uid, sAMAccountName
    username_field: Mapped[str | None] = mapped_column(String(128), nullable=True)
    email_field: Mapped[str] = mapped_column(String(128), nullable=False)
    auth_attribute: Mapped[str] = mapped_column(String(128), default="cn", nullable=False)

    domain_bases: Mapped[str] = mapped_column(Text, default="", nullable=False)  # comma-separated
    user_object_class: Mapped[str] = mapped_column(String(128), nullable=False)
    group_object_class: Mapped[str] = mapped_column(String(128), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)


class LoginAudit(Base):
    __tablename__ = "login_audit"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ts: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    organization_id: Mapped[str] = mapped_column(String(36), default="", nullable=False)
    username: Mapped[str] = mapped_column(String(128), nullable=False)
    auth_type: Mapped[str] = mapped_column(String(16), default="ldap", nullable=False)
    success: Mapped[bool] = mapped_column(Boolean, nullable=False)

    result_code: Mapped[str] = mapped_column(String(32), default="", nullable=False)  # ok|invalid|unavailable|error
    details: Mapped[str] = mapped_column(String(512), default="", nullable=False)
