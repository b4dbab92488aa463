# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Admin endpoints – user lifecycle management.

Every endpoint in this router is guarded by ``require_admin``.  A request
that carries a valid token but belongs to a non-admin (or revoked) account
receives 403 before any business logic runs.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from core.exceptions import DuplicateLoginError, UserNotFoundError
from core.security import get_directory, require_admin
from models.user import User
from admin.schemas import CreateUserRequest, LoginListResponse
from auth.router import update_result
from auth.schemas import UpdateResultResponse, UserProfileResponse, UserUpdateRequest

router = APIRouter(prefix="/admin", tags=["admin"])


def _existing_user(login: str, directory) -> User:
    """Load a record by login or raise 404."""
    user = directory.find(login)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found!")
    return user


# ---------------------------------------------------------------------------
# GET /admin/users/active  – logins of non-revoked users
# ---------------------------------------------------------------------------


@router.get("/users/active", response_model=LoginListResponse)
def list_active_users(
    admin: User = Depends(require_admin),
    directory=Depends(get_directory),
):
    """Logins of every active user, ordered by creation time."""
    return LoginListResponse(users=directory.list_active())


# ---------------------------------------------------------------------------
# GET /admin/users/older?age=N  – users at least N years old
# ---------------------------------------------------------------------------


@router.get("/users/older", response_model=LoginListResponse)
def list_older_users(
    age: int = Query(..., ge=0, description="Minimum age in whole years"),
    admin: User = Depends(require_admin),
    directory=Depends(get_directory),
):
    """Users without a birthday are never included."""
    return LoginListResponse(users=directory.list_older_than(age))


# ---------------------------------------------------------------------------
# GET /admin/users/{login}
# ---------------------------------------------------------------------------


@router.get("/users/{login}", response_model=UserProfileResponse)
def get_user(
    login: str,
    admin: User = Depends(require_admin),
    directory=Depends(get_directory),
):
    return UserProfileResponse.model_validate(_existing_user(login, directory))


# ---------------------------------------------------------------------------
# POST /admin/users  – create a new user
# ---------------------------------------------------------------------------


@router.post("/users", response_model=UserProfileResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    body: CreateUserRequest,
    admin: User = Depends(require_admin),
    directory=Depends(get_directory),
):
    """
    Create a user account.  The login must be unique case-insensitively,
    including against revoked accounts.
    """
    if not directory.is_login_unique(body.login):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User with such login already exists!",
        )

    try:
        user = directory.create_user(
            admin.login,
            body.login,
            body.password,
            name=body.name,
            gender=body.gender,
            birthday=body.birthday,
            is_admin=body.is_admin,
        )
    except DuplicateLoginError:
        # Lost a race against a concurrent create with the same login
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User with such login already exists!",
        )
    return UserProfileResponse.model_validate(user)


# ---------------------------------------------------------------------------
# PATCH /admin/users/{login}  – update any user
# ---------------------------------------------------------------------------


@router.patch("/users/{login}", response_model=UpdateResultResponse)
def update_user(
    login: str,
    body: UserUpdateRequest,
    admin: User = Depends(require_admin),
    directory=Depends(get_directory),
):
    """
    Apply a partial update.  ``modified_by`` is stamped with the admin's
    login.  The admin flag cannot be changed here.
    """
    target = _existing_user(login, directory)
    try:
        result = directory.update_user(target, body.to_patch(), admin.login)
    except DuplicateLoginError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    except UserNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found!")
    return update_result(result)


# ---------------------------------------------------------------------------
# DELETE /admin/users/{login}?hard=false  – soft or hard delete
# ---------------------------------------------------------------------------


@router.delete("/users/{login}")
def delete_user(
    login: str,
    hard: bool = Query(False, description="Remove the record permanently"),
    admin: User = Depends(require_admin),
    directory=Depends(get_directory),
):
    """
    Soft delete (default) sets ``revoked_on`` / ``revoked_by``; the user can
    no longer log in but the login stays reserved.  ``hard=true`` removes the
    record and its sessions for good.
    """
    if hard:
        found = directory.delete_user(login)
    else:
        found = directory.revoke_user(login, admin.login)
    if not found:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found!")
    return {"detail": "User was deleted!"}


# ---------------------------------------------------------------------------
# POST /admin/users/{login}/restore  – undo a soft delete
# ---------------------------------------------------------------------------


@router.post("/users/{login}/restore")
def restore_user(
    login: str,
    admin: User = Depends(require_admin),
    directory=Depends(get_directory),
):
    """Clear ``revoked_on`` / ``revoked_by`` so the user can log in again."""
    if not directory.restore_user(login):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found!")
    return {"detail": "User was restored!"}
