"""RPC: 登録・支払い確認・書類"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from apptnu.core.database import get_db
from apptnu.schemas.member import MemberInfo
from apptnu.schemas.registration import (
    CreateRegistrationRequest,
    UpdatePaymentStatusRequest,
    UploadDocumentRequest,
    RegistrationInfo,
    MemberWithRegistrations,
)
from apptnu.services import registration_service

router = APIRouter(prefix="/api/rpc", tags=["registrations"])


@router.post("/createRegistration", response_model=RegistrationInfo)
async def create_registration(req: CreateRegistrationRequest, db: Session = Depends(get_db)):
    """登録作成 (登録ウィザード ステップ2 / 更新申請)"""
    return registration_service.create_registration(db, req)


@router.get("/getRegistrationsByMemberId", response_model=list[RegistrationInfo])
async def get_registrations_by_member_id(member_id: int = Query(...), db: Session = Depends(get_db)):
    return registration_service.get_registrations_by_member_id(db, member_id)


@router.get("/getAllRegistrations", response_model=list[RegistrationInfo])
async def get_all_registrations(db: Session = Depends(get_db)):
    return registration_service.get_all_registrations(db)


@router.post("/updatePaymentStatus", response_model=RegistrationInfo)
async def update_payment_status(req: UpdatePaymentStatusRequest, db: Session = Depends(get_db)):
    """支払い状態更新 (管理者)"""
    return registration_service.update_payment_status(db, req)


@router.post("/uploadDocument", response_model=RegistrationInfo)
async def upload_document(req: UploadDocumentRequest, db: Session = Depends(get_db)):
    """領収書・証明書URL登録 (管理者)"""
    return registration_service.upload_document(db, req)


@router.get("/getMemberWithRegistrations", response_model=Optional[MemberWithRegistrations])
async def get_member_with_registrations(user_id: int = Query(...), db: Session = Depends(get_db)):
    """会員ダッシュボード用: 会員情報 + 登録履歴"""
    result = registration_service.get_member_with_registrations(db, user_id)
    if result is None:
        return None
    member, registrations = result
    return MemberWithRegistrations(
        member=MemberInfo.model_validate(member),
        registrations=[RegistrationInfo.model_validate(r) for r in registrations],
    )
