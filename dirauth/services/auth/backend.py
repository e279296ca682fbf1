from __future__ import annotations

from dataclasses import dataclass


@dataclass
class AuthResult:
    """Outcome of a login attempt."""
    success: bool
    user_data: dict | None = None
    error_message: str = ""
    result_code: str = ""  # ok|invalid|unavailable|error
