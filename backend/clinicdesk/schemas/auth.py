from enum import Enum
from typing import Optional

from pydantic import BaseModel


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    PHARMACIST = "PHARMACIST"


class AdminCredentials(BaseModel):
    username: str
    password: str


class LoginRequest(BaseModel):
    username: str
    password: str
    role: UserRole = UserRole.ADMIN


class LoginResponse(BaseModel):
    ok: bool = True
    role: UserRole
    name: Optional[str] = None
