"""RPC: 会員"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from apptnu.core.database import get_db
from apptnu.schemas.member import CreateMemberRequest, UpdateMemberRequest, MemberInfo
from apptnu.services import member_service

router = APIRouter(prefix="/api/rpc", tags=["members"])


@router.post("/createMember", response_model=MemberInfo)
async def create_member(req: CreateMemberRequest, db: Session = Depends(get_db)):
    """会員作成 (登録ウィザード ステップ1)"""
    return member_service.create_member(db, req)


@router.get("/getMemberByUserId", response_model=Optional[MemberInfo])
async def get_member_by_user_id(user_id: int = Query(...), db: Session = Depends(get_db)):
    """ユーザーIDから会員取得。未登録ならnull"""
    return member_service.get_member_by_user_id(db, user_id)


@router.get("/getAllMembers", response_model=list[MemberInfo])
async def get_all_members(db: Session = Depends(get_db)):
    """会員一覧"""
    return member_service.get_all_members(db)


@router.post("/updateMember", response_model=MemberInfo)
async def update_member(req: UpdateMemberRequest, db: Session = Depends(get_db)):
    """会員の部分更新"""
    return member_service.update_member(db, req)
