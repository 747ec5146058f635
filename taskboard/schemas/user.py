from typing import Optional, List
from datetime import datetime
from taskboard.models.user import UserRole, Department
from taskboard.schemas.common import CamelModel


class LoginRequest(CamelModel):
    username: Optional[str] = None
    password: Optional[str] = None


class UserCreate(CamelModel):
    username: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None
    role: UserRole = UserRole.EMPLOYEE
    department: Optional[Department] = None


class UserUpdate(CamelModel):
    name: Optional[str] = None
    role: Optional[UserRole] = None
    department: Optional[Department] = None
    password: Optional[str] = None
    is_active: Optional[bool] = None


class UserBasic(CamelModel):
    id: int
    name: str
    username: str
    role: UserRole
    department: Optional[Department] = None


class UserOut(CamelModel):
    id: int
    username: str
    name: str
    role: UserRole
    department: Optional[Department] = None
    avatar: Optional[str] = None
    is_active: bool
    created_at: datetime


class UserEnvelope(CamelModel):
    user: UserOut


class UserList(CamelModel):
    users: List[UserOut]
