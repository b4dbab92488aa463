# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Session store – opaque token → login mapping.

The store keeps login strings only, never User objects: a record that is
renamed or deleted simply stops resolving.  Records are looked up through the
``lookup`` callable supplied by the owning directory.

Locking
-------
``_lock`` guards the token map and is never held while calling ``lookup``,
so the directory may call into the store while holding its own lock.
"""

import threading
from typing import Callable, Dict, Optional

from core.exceptions import InvalidCredentialsError
from core.logger import logger
from core.security import new_session_token, strip_token_prefix, verify_password
from models.user import User, canonical_login


class SessionStore:
    def __init__(self, lookup: Callable[[str], Optional[User]]):
        self._lookup = lookup
        self._tokens: Dict[str, str] = {}
        self._lock = threading.Lock()

    def authenticate(self, login: str, password: str) -> str:
        """
        Verify the credentials and mint a new token for the login.

        Raises InvalidCredentialsError for an unknown login, a revoked
        account, or a wrong password.  The caller cannot tell them apart.
        """
        user = self._lookup(login)
        if user is None or not user.is_active or not verify_password(password, user.password_hash):
            logger.warning("Login failed | login=%s", login)
            raise InvalidCredentialsError(login)

        token = new_session_token()
        with self._lock:
            self._tokens[token] = user.login
        logger.info("Login succeeded | login=%s", user.login)
        return token

    def resolve_token(self, token: str) -> Optional[User]:
        """Return the current record behind *token*, or None."""
        token = strip_token_prefix(token)
        with self._lock:
            login = self._tokens.get(token)
        if login is None:
            return None
        return self._lookup(login)

    def logout(self, user: User) -> int:
        """Drop every token of *user*.  Returns how many were removed."""
        return self.revoke_login(user.login)

    def invalidate_on_rename(self, old_login: str) -> int:
        return self.revoke_login(old_login)

    def revoke_login(self, login: str) -> int:
        login = canonical_login(login)
        with self._lock:
            stale = [t for t, owner in self._tokens.items() if owner == login]
            for token in stale:
                del self._tokens[token]
        if stale:
            logger.info("Sessions closed | login=%s count=%d", login, len(stale))
        return len(stale)

    def active_sessions(self, login: str) -> int:
        login = canonical_login(login)
        with self._lock:
            return sum(1 for owner in self._tokens.values() if owner == login)
