"""Security utilities - crypto and cookies.

Re-exports all security-related functions for convenience.
"""

from src.saas_admin.core.security.cookies import (
    clear_pointer_cookie,
    clear_session_cookie,
    set_pointer_cookie,
    set_session_cookie,
)
from src.saas_admin.core.security.crypto import (
    ACCESS_TOKEN_TYPE,
    DUMMY_PASSWORD_HASH,
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)

__all__ = [
    # Crypto
    "ACCESS_TOKEN_TYPE",
    "DUMMY_PASSWORD_HASH",
    "create_access_token",
    "decode_token",
    "hash_password",
    "verify_password",
    # Cookies
    "clear_pointer_cookie",
    "clear_session_cookie",
    "set_pointer_cookie",
    "set_session_cookie",
]
