# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models shared by the auth and admin endpoints."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from models.user import ChangeResult, Gender, UserPatch


# -- Requests --------------------------------------------------------------


class LoginRequest(BaseModel):
    login: str
    password: str


class UserUpdateRequest(BaseModel):
    """Every field is optional; ``null`` or absent means "leave as is"."""

    login: Optional[str] = Field(default=None, min_length=1)
    password: Optional[str] = None
    name: Optional[str] = None
    gender: Optional[Gender] = None
    birthday: Optional[date] = None

    def to_patch(self) -> UserPatch:
        return UserPatch(
            login=self.login,
            password=self.password,
            name=self.name,
            gender=self.gender,
            birthday=self.birthday,
        )


# -- Responses -------------------------------------------------------------


class LoginResponse(BaseModel):
    access_token: str
    token_type: str  # always "bearer"


class UserProfileResponse(BaseModel):
    login: str
    name: str
    gender: Gender
    birthday: Optional[date] = None
    is_active: bool
    is_admin: bool
    created_on: datetime
    created_by: str
    modified_on: Optional[datetime] = None
    modified_by: Optional[str] = None
    revoked_on: Optional[datetime] = None
    revoked_by: Optional[str] = None

    model_config = {"from_attributes": True}


class UpdateResultResponse(BaseModel):
    result: ChangeResult
    detail: str
