from .backend import AuthResult
from .ldap import authenticate

__all__ = ["AuthResult", "authenticate"]
