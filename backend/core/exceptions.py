# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Domain exceptions raised by the directory and session store.

The routers translate these into ``HTTPException`` responses; nothing below
the HTTP layer knows about status codes.
"""


class UserDirectoryError(Exception):
    """Base class for every error raised by the core."""


class InvalidCredentialsError(UserDirectoryError):
    """Unknown login, wrong password, or revoked account at login time."""

    def __init__(self, login: str):
        self.login = login
        super().__init__("Invalid login or password")


class DuplicateLoginError(UserDirectoryError):
    """The login is already taken (case-insensitively)."""

    def __init__(self, login: str):
        self.login = login
        super().__init__(f"User with login '{login}' already exists")


class UserNotFoundError(UserDirectoryError):
    """The target login does not resolve to a record."""

    def __init__(self, login: str):
        self.login = login
        super().__init__(f"User '{login}' not found")
