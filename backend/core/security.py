# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Central security module.  All cryptographic primitives and auth guards live
here.  No other module should touch raw crypto directly.

Responsibilities
----------------
1. Password hashing / verification          (passlib pbkdf2_sha256)
2. Session token minting                    (secrets.token_urlsafe)
3. FastAPI dependency guards                (get_current_user, require_admin,
                                             require_active_user)
"""

import secrets
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import APIKeyCookie, APIKeyHeader
from passlib.hash import pbkdf2_sha256 as _pbkdf2  # pure Python, no binary deps

from core.config import settings

# ---------------------------------------------------------------------------
# 1.  pbkdf2_sha256 – password hashing
# ---------------------------------------------------------------------------
# The salt is embedded in the hash string, so hashing the same plaintext twice
# yields two different strings.  Never compare hashes for equality; always go
# through verify_password().
# ---------------------------------------------------------------------------


def hash_password(plain: str) -> str:
    """
    Hash a plaintext password with PBKDF2-SHA256.

    The round count comes from ``settings.password_hash_rounds``; the result
    is the full passlib string e.g. ``"$pbkdf2-sha256$600000$..."``.
    """
    return _pbkdf2.using(rounds=settings.password_hash_rounds).hash(plain)


def verify_password(plain: str, stored_hash: str) -> bool:
    """
    Constant-time verification of a plaintext password against a hash
    produced by :func:`hash_password`.  A malformed hash never verifies.
    """
    try:
        return _pbkdf2.verify(plain, stored_hash)
    except ValueError:
        return False


# ---------------------------------------------------------------------------
# 2.  Session tokens
# ---------------------------------------------------------------------------

TOKEN_PREFIX = "Bearer "


def new_session_token() -> str:
    """Return a fresh opaque token (256 bits of entropy, URL-safe)."""
    return secrets.token_urlsafe(32)


def strip_token_prefix(raw: str) -> str:
    """Accept both ``"Bearer <token>"`` and the bare token."""
    raw = raw.lstrip()
    if raw[:len(TOKEN_PREFIX)].lower() == TOKEN_PREFIX.lower():
        return raw[len(TOKEN_PREFIX):].strip()
    return raw.rstrip()


# ---------------------------------------------------------------------------
# 3.  FastAPI dependency guards
# ---------------------------------------------------------------------------

# The header is read raw so that a bare token without the "Bearer " prefix is
# accepted as well; the cookie mirrors the token for browser clients.
authorization_header = APIKeyHeader(name="Authorization", auto_error=False)
session_cookie = APIKeyCookie(name=settings.session_cookie_name, auto_error=False)


def get_directory(request: Request):
    """Dependency: the UserDirectory owned by this application instance."""
    return request.app.state.directory


def get_sessions(request: Request):
    """Dependency: the SessionStore owned by this application instance."""
    return request.app.state.sessions


def get_current_token(
    header: Optional[str] = Depends(authorization_header),
    cookie: Optional[str] = Depends(session_cookie),
) -> str:
    """
    Dependency: the presented credential.  The Authorization header wins over
    the session cookie.  Raises 401 when neither is present.
    """
    raw = header or cookie
    token = strip_token_prefix(raw) if raw else ""
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Current user not authorized!",
        )
    return token


def get_current_user(
    token: str = Depends(get_current_token),
    sessions=Depends(get_sessions),
):
    """
    Dependency: resolve the token to the current User record.

    Raises 401 if the token is unknown or its login no longer resolves.
    Revoked users are returned; the narrower guards below decide what they
    may still do.
    """
    user = sessions.resolve_token(token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Current user not authorized!",
        )
    return user


def require_active_user(current_user=Depends(get_current_user)):
    """
    Dependency: wraps :func:`get_current_user` and rejects revoked accounts
    with 403.  Used by the self-service endpoints.
    """
    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User revoked!",
        )
    return current_user


def require_admin(current_user=Depends(require_active_user)):
    """
    Dependency: an active account with the admin flag.  Raises 403 otherwise.
    """
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Current user not admin!",
        )
    return current_user
