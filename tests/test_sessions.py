import pytest
from fastapi import HTTPException

from core.exceptions import InvalidCredentialsError
from core.security import get_current_token, hash_password, verify_password
from models.user import Gender


def test_hash_is_salted_and_verifies():
    first = hash_password("s3cret")
    second = hash_password("s3cret")

    assert first != second
    assert verify_password("s3cret", first)
    assert verify_password("s3cret", second)
    assert not verify_password("other", first)


def test_malformed_hash_never_verifies():
    assert not verify_password("s3cret", "not-a-hash")


def test_authenticate_bootstrap_admin(directory):
    token = directory.sessions.authenticate("admin", "12345")

    assert token
    assert directory.sessions.resolve_token(token).login == "admin"


def test_authenticate_wrong_password_fails(directory):
    with pytest.raises(InvalidCredentialsError):
        directory.sessions.authenticate("admin", "wrong")


def test_authenticate_unknown_login_fails(directory):
    with pytest.raises(InvalidCredentialsError):
        directory.sessions.authenticate("nobody", "12345")


def test_authenticate_revoked_user_fails(directory):
    directory.create_user("admin", "alice", "pw", name="Alice", gender=Gender.female)
    directory.revoke_user("alice", "admin")

    with pytest.raises(InvalidCredentialsError):
        directory.sessions.authenticate("alice", "pw")


def test_authenticate_ignores_login_case(directory):
    token = directory.sessions.authenticate("ADMIN", "12345")

    assert directory.sessions.resolve_token(token).login == "admin"


def test_tokens_are_unique_per_login(directory):
    first = directory.sessions.authenticate("admin", "12345")
    second = directory.sessions.authenticate("admin", "12345")

    assert first != second
    assert directory.sessions.active_sessions("admin") == 2


def test_resolve_strips_bearer_prefix(directory):
    token = directory.sessions.authenticate("admin", "12345")

    assert directory.sessions.resolve_token(f"Bearer {token}").login == "admin"


def test_resolve_unknown_token(directory):
    assert directory.sessions.resolve_token("no-such-token") is None


def test_resolve_after_hard_delete(directory):
    directory.create_user("admin", "bob", "pw", name="Bob", gender=Gender.male)
    token = directory.sessions.authenticate("bob", "pw")

    directory.delete_user("bob")

    assert directory.sessions.resolve_token(token) is None
    assert directory.sessions.active_sessions("bob") == 0


def test_logout_removes_every_token(directory):
    admin = directory.find("admin")
    first = directory.sessions.authenticate("admin", "12345")
    second = directory.sessions.authenticate("admin", "12345")

    assert directory.sessions.logout(admin) == 2
    assert directory.sessions.resolve_token(first) is None
    assert directory.sessions.resolve_token(second) is None


def test_logout_is_idempotent(directory):
    admin = directory.find("admin")
    directory.sessions.authenticate("admin", "12345")

    directory.sessions.logout(admin)

    assert directory.sessions.logout(admin) == 0


def test_logout_keeps_other_users_sessions(directory):
    directory.create_user("admin", "alice", "pw", name="Alice", gender=Gender.female)
    alice_token = directory.sessions.authenticate("alice", "pw")
    directory.sessions.authenticate("admin", "12345")

    directory.sessions.logout(directory.find("admin"))

    assert directory.sessions.resolve_token(alice_token).login == "alice"


def test_current_token_strips_prefix():
    assert get_current_token(header="Bearer abc", cookie=None) == "abc"
    assert get_current_token(header="abc", cookie=None) == "abc"
    assert get_current_token(header=None, cookie="Bearer from-cookie") == "from-cookie"
    assert get_current_token(header="Bearer header", cookie="cookie") == "header"


@pytest.mark.parametrize("header", [None, "", "Bearer ", "Bearer    ", "   "])
def test_current_token_missing_is_unauthorized(header):
    with pytest.raises(HTTPException) as exc:
        get_current_token(header=header, cookie=None)

    assert exc.value.status_code == 401
