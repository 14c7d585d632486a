"""RPC: アカウント作成・ログイン"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from apptnu.core.database import get_db
from apptnu.core.rate_limit import limiter, CREATE_USER_RATE_LIMIT, LOGIN_RATE_LIMIT
from apptnu.schemas.auth import CreateUserRequest, LoginRequest, UserInfo, AuthResponse
from apptnu.services import auth_service

router = APIRouter(prefix="/api/rpc", tags=["auth"])


@router.post("/createUser", response_model=UserInfo)
@limiter.limit(CREATE_USER_RATE_LIMIT)
async def create_user(request: Request, req: CreateUserRequest, db: Session = Depends(get_db)):
    """アカウント作成"""
    return auth_service.create_user(db=db, email=req.email, password=req.password, role=req.role)


@router.post("/login", response_model=AuthResponse)
@limiter.limit(LOGIN_RATE_LIMIT)
async def login(request: Request, req: LoginRequest, db: Session = Depends(get_db)):
    """ログイン (トークンは発行しない)"""
    user = auth_service.login(db, req.email, req.password)
    return AuthResponse(user=UserInfo.model_validate(user))
