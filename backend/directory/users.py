# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
User directory – the authoritative, in-memory collection of user records.

Rules enforced here
-------------------
* Logins are unique case-insensitively across active *and* revoked records;
  a soft-deleted login keeps blocking re-creation until it is hard-deleted.
* ``revoked_on`` / ``revoked_by`` and ``modified_on`` / ``modified_by`` are
  always written as pairs.
* An update only stamps ``modified_*`` when at least one field really
  changed; otherwise the outcome is ``ChangeResult.no_change``.
* Privilege checks are NOT made here – the routers do that before calling in.

Every read-modify-write runs under a single re-entrant lock; password hashing
happens outside it.  The session store is called while that lock is held,
never the other way round.
"""

import threading
from datetime import date, datetime, timezone
from typing import Dict, List, Optional, Tuple

from core.config import settings
from core.exceptions import DuplicateLoginError, UserNotFoundError
from core.logger import logger
from core.security import hash_password, verify_password
from directory.sessions import SessionStore
from models.user import ChangeResult, Gender, User, UserPatch, canonical_login

SYSTEM_LOGIN = "system"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _years_after(birthday: date, years: int) -> Optional[date]:
    """
    *birthday* shifted by *years*; 29 February falls back to 28 February.
    None when the result lies beyond ``date.max``.
    """
    year = birthday.year + years
    if year > date.max.year:
        return None
    try:
        return birthday.replace(year=year)
    except ValueError:
        return birthday.replace(year=year, day=28)


def _is_older_than(birthday: Optional[date], age: int, today: date) -> bool:
    if birthday is None:
        return False
    threshold = _years_after(birthday, age)
    return threshold is not None and threshold <= today


class UserDirectory:
    def __init__(self, bootstrap: bool = True):
        self._users: Dict[str, User] = {}
        self._lock = threading.RLock()
        self.sessions = SessionStore(self.find)
        if bootstrap:
            self._bootstrap_admin()

    def _bootstrap_admin(self) -> None:
        self.create_user(
            SYSTEM_LOGIN,
            settings.bootstrap_admin_login,
            settings.bootstrap_admin_password,
            name=settings.bootstrap_admin_name,
            gender=Gender.unknown,
            is_admin=True,
        )

    # -- Lookup --------------------------------------------------------------

    def find(self, login: str) -> Optional[User]:
        with self._lock:
            return self._users.get(canonical_login(login))

    def is_login_unique(self, login: str) -> bool:
        with self._lock:
            return canonical_login(login) not in self._users

    def list_active(self) -> List[str]:
        """Logins of non-revoked users, oldest account first."""
        with self._lock:
            users = [u for u in self._users.values() if u.is_active]
        return [u.login for u in sorted(users, key=lambda u: u.created_on)]

    def list_older_than(self, age: int, today: Optional[date] = None) -> List[str]:
        """Logins of users with a birthday at least *age* years ago."""
        today = today or date.today()
        with self._lock:
            users = [u for u in self._users.values() if _is_older_than(u.birthday, age, today)]
        return [u.login for u in sorted(users, key=lambda u: u.created_on)]

    # -- Create --------------------------------------------------------------

    def create_user(
        self,
        creator_login: str,
        login: str,
        password: str,
        name: str,
        gender: Gender = Gender.unknown,
        birthday: Optional[date] = None,
        is_admin: bool = False,
    ) -> User:
        """
        Add a record.  Callers are expected to have checked
        :meth:`is_login_unique` already; the check is repeated under the lock
        and a clash raises DuplicateLoginError.
        """
        key = canonical_login(login)
        password_hash = hash_password(password)
        with self._lock:
            if key in self._users:
                raise DuplicateLoginError(login)
            user = User(
                login=key,
                password_hash=password_hash,
                name=name,
                gender=gender,
                birthday=birthday,
                is_admin=is_admin,
                created_on=_now(),
                created_by=creator_login,
            )
            self._users[key] = user
        logger.info("User created | login=%s by=%s admin=%s", key, creator_login, is_admin)
        return user

    # -- Update --------------------------------------------------------------

    def _password_change(self, user: User, password: Optional[str]) -> Tuple[str, Optional[str]]:
        """
        Return ``(seen_hash, new_hash)`` for a patch password.  ``new_hash``
        is None when no password was supplied or it already verifies against
        ``seen_hash``.  Runs without the lock; PBKDF2 is slow.
        """
        seen_hash = user.password_hash
        if password is None or verify_password(password, seen_hash):
            return seen_hash, None
        return seen_hash, hash_password(password)

    def update_user(self, user: User, patch: UserPatch, acting_login: str) -> ChangeResult:
        """
        Apply *patch* to *user*.

        The login is handled first: a rename to a taken login raises
        DuplicateLoginError before anything is written.  Every other supplied
        field is applied only if it differs from the current value.  A
        password that already verifies against the stored hash counts as
        unchanged.

        The password is verified and hashed before the lock is taken.  If the
        stored hash changed in the meantime the password step is redone.
        """
        while True:
            seen_hash, new_hash = self._password_change(user, patch.password)
            with self._lock:
                if self._users.get(user.login) is not user:
                    raise UserNotFoundError(user.login)
                if user.password_hash != seen_hash:
                    continue

                new_login = None
                if patch.login is not None and canonical_login(patch.login) != user.login:
                    new_login = canonical_login(patch.login)
                    if new_login in self._users:
                        raise DuplicateLoginError(patch.login)

                changed = self._apply(user, patch, new_login, new_hash)
                if not changed:
                    return ChangeResult.no_change

                user.modified_on = _now()
                user.modified_by = acting_login
                break

        logger.info(
            "User updated | login=%s by=%s fields=%s", user.login, acting_login, ",".join(changed)
        )
        return ChangeResult.modified

    def _apply(
        self, user: User, patch: UserPatch, new_login: Optional[str], new_hash: Optional[str]
    ) -> List[str]:
        """Write the differing fields; caller holds the lock.  Returns their names."""
        changed = []
        if new_login is not None:
            old_login = user.login
            self.sessions.invalidate_on_rename(old_login)
            del self._users[old_login]
            user.login = new_login
            self._users[new_login] = user
            changed.append("login")
        if patch.name is not None and patch.name != user.name:
            user.name = patch.name
            changed.append("name")
        if new_hash is not None:
            user.password_hash = new_hash
            changed.append("password")
        if patch.birthday is not None and patch.birthday != user.birthday:
            user.birthday = patch.birthday
            changed.append("birthday")
        if patch.gender is not None and patch.gender != user.gender:
            user.gender = patch.gender
            changed.append("gender")
        return changed

    # -- Revoke / restore / delete -------------------------------------------

    def revoke_user(self, login: str, revoked_by: str) -> bool:
        """
        Soft delete.  Revoking an already revoked user refreshes both
        ``revoked_on`` and ``revoked_by``.
        """
        with self._lock:
            user = self._users.get(canonical_login(login))
            if user is None:
                return False
            user.revoked_on = _now()
            user.revoked_by = revoked_by
        logger.info("User revoked | login=%s by=%s", user.login, revoked_by)
        return True

    def restore_user(self, login: str) -> bool:
        with self._lock:
            user = self._users.get(canonical_login(login))
            if user is None:
                return False
            user.revoked_on = None
            user.revoked_by = None
        logger.info("User restored | login=%s", user.login)
        return True

    def delete_user(self, login: str) -> bool:
        """Hard delete.  Irreversible; the login becomes free again."""
        key = canonical_login(login)
        with self._lock:
            user = self._users.pop(key, None)
            if user is None:
                return False
            self.sessions.revoke_login(key)
        logger.info("User deleted | login=%s", key)
        return True
