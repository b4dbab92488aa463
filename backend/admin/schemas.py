# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the admin endpoints."""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from models.user import Gender


# -- Requests --------------------------------------------------------------


class CreateUserRequest(BaseModel):
    login: str = Field(min_length=1)
    password: str
    name: str
    gender: Gender
    birthday: Optional[date] = None
    is_admin: bool = False


# -- Responses -------------------------------------------------------------


class LoginListResponse(BaseModel):
    users: List[str]
