from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from apptnu.models.enums import UserRole
from apptnu.schemas.common import EmailText


class CreateUserRequest(BaseModel):
    email: EmailText
    password: str = Field(min_length=8, max_length=128)
    role: UserRole = UserRole.MEMBER


class LoginRequest(BaseModel):
    email: EmailText
    password: str


class UserInfo(BaseModel):
    """ユーザー情報 (password_hash は返さない)"""

    id: int
    email: str
    role: UserRole
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    user: UserInfo
    # セッション/トークン発行は未実装のため常にNone
    token: Optional[str] = None
