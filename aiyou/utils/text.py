"""
Text processing utilities.

Provides helpers for masking sensitive values (email addresses, bearer
tokens and password fields) before they reach log output.
"""

from __future__ import annotations

import re


_EMAIL = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
_BEARER = re.compile(r"(Bearer\s+)[A-Za-z0-9\-._~+/]+=*")
_PASSWORD = re.compile(r'("password"\s*:\s*)"[^"]*"')

EMAIL_MASK = "[EMAIL REDACTED]"
TOKEN_MASK = "[TOKEN REDACTED]"
PASSWORD_MASK = "[PASSWORD REDACTED]"


def mask_sensitive_info(text: str) -> str:
    """
    Mask sensitive information in the given text.

    Rules:
    - Email addresses become "[EMAIL REDACTED]".
    - The credential after "Bearer " becomes "[TOKEN REDACTED]".
    - The value of a JSON "password" field becomes "[PASSWORD REDACTED]".
    - Idempotent: masking twice yields the same result.
    """
    if not text:
        return text

    s = _EMAIL.sub(EMAIL_MASK, text)
    s = _BEARER.sub(rf"\1{TOKEN_MASK}", s)
    s = _PASSWORD.sub(rf'\1"{PASSWORD_MASK}"', s)
    return s
