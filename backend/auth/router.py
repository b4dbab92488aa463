# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Auth endpoints – login, logout, and the self-service profile.

Security notes
--------------
* Login returns the *same* error message whether the login doesn't exist,
  the account is revoked, or the password is wrong.  This prevents
  user-enumeration attacks.
* The token is returned in the body and mirrored into an HttpOnly cookie;
  either transport is accepted by ``get_current_user``.
* Self-service endpoints reject revoked accounts with 403 even though their
  token still resolves.
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from core.config import settings
from core.exceptions import DuplicateLoginError, InvalidCredentialsError, UserNotFoundError
from core.logger import logger
from core.security import (
    get_current_user,
    get_directory,
    get_sessions,
    require_active_user,
)
from models.user import ChangeResult, User
from auth.schemas import (
    LoginRequest,
    LoginResponse,
    UpdateResultResponse,
    UserProfileResponse,
    UserUpdateRequest,
)

router = APIRouter(prefix="/auth", tags=["auth"])

# Generic message used for every failed login
_LOGIN_FAIL = "Invalid credentials."


def update_result(result: ChangeResult) -> UpdateResultResponse:
    """Map an update outcome to the response body shared with the admin router."""
    if result is ChangeResult.modified:
        return UpdateResultResponse(result=result, detail="User was updated!")
    return UpdateResultResponse(result=result, detail="Nothing to update")


# ---------------------------------------------------------------------------
# POST /auth/login
# ---------------------------------------------------------------------------


@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, response: Response, sessions=Depends(get_sessions)):
    """Authenticate and return an opaque session token."""
    try:
        token = sessions.authenticate(body.login, body.password)
    except InvalidCredentialsError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=_LOGIN_FAIL)

    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.session_idle_minutes * 60,
        httponly=True,
        samesite="lax",
    )
    return LoginResponse(access_token=token, token_type="bearer")


# ---------------------------------------------------------------------------
# POST /auth/logout
# ---------------------------------------------------------------------------


@router.post("/logout")
def logout(
    response: Response,
    current_user: User = Depends(get_current_user),
    sessions=Depends(get_sessions),
):
    """Close every session of the current user.  Safe to repeat."""
    sessions.logout(current_user)
    response.delete_cookie(settings.session_cookie_name)
    return {"detail": "Logged out!"}


# ---------------------------------------------------------------------------
# GET /auth/me
# ---------------------------------------------------------------------------


@router.get("/me", response_model=UserProfileResponse)
def me(current_user: User = Depends(require_active_user)):
    """Return the authenticated user's profile (no secrets)."""
    return UserProfileResponse.model_validate(current_user)


# ---------------------------------------------------------------------------
# PATCH /auth/me
# ---------------------------------------------------------------------------


@router.patch("/me", response_model=UpdateResultResponse)
def update_me(
    body: UserUpdateRequest,
    current_user: User = Depends(require_active_user),
    directory=Depends(get_directory),
):
    """
    Edit the caller's own profile.  Renaming the login closes every session
    of the old login, including the one used for this request.
    """
    acting_login = current_user.login
    try:
        result = directory.update_user(current_user, body.to_patch(), acting_login)
    except DuplicateLoginError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    except UserNotFoundError:
        # Hard-deleted between token resolution and the update
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Current user not authorized!",
        )

    if result is ChangeResult.no_change:
        logger.info("Self update without changes | login=%s", acting_login)
    return update_result(result)
