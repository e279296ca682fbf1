"""Application-facing services on top of dirauth.ldap."""
