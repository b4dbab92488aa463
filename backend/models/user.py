# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""In-memory user record and the value types of the update protocol."""

import enum
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Optional


class Gender(str, enum.Enum):
    female = "female"
    male = "male"
    unknown = "unknown"


class ChangeResult(str, enum.Enum):
    """Outcome of an update: a real field change, or a semantically empty patch."""

    modified = "modified"
    no_change = "no_change"


def canonical_login(login: str) -> str:
    """Logins are stored and compared lower-cased."""
    return login.lower()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class User:
    login: str
    password_hash: str
    name: str = "Unknown"
    gender: Gender = Gender.unknown
    birthday: Optional[date] = None
    is_admin: bool = False
    created_on: datetime = field(default_factory=_utcnow)
    created_by: str = "system"
    modified_on: Optional[datetime] = None
    modified_by: Optional[str] = None
    # revoked_on / revoked_by are always set and cleared together
    revoked_on: Optional[datetime] = None
    revoked_by: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.revoked_on is None


@dataclass
class UserPatch:
    """
    Optional replacement values for an update.  ``None`` means "not supplied".
    The admin flag is never patchable.
    """

    login: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None
    gender: Optional[Gender] = None
    birthday: Optional[date] = None
