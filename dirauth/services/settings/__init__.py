"""Validation of stored directory settings."""

from .schema import LdapConfigSchema

__all__ = ["LdapConfigSchema"]
