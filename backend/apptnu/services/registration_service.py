"""登録 (新規・更新) と支払い確認・書類発行のビジネスロジック"""
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import Optional

from apptnu.core.database import utcnow
from apptnu.core.errors import NotFoundError, MemberNotFound
from apptnu.core.logging import get_logger
from apptnu.models.member import Member
from apptnu.models.registration import Registration
from apptnu.models.enums import PaymentStatus, DocumentType
from apptnu.schemas.registration import (
    CreateRegistrationRequest,
    UpdatePaymentStatusRequest,
    UploadDocumentRequest,
)
from apptnu.services import member_service

logger = get_logger(__name__)

# 書類種別 → 保存先カラム
DOCUMENT_FIELDS = {
    DocumentType.RECEIPT: "receipt_url",
    DocumentType.CERTIFICATE: "certificate_url",
}


def create_registration(db: Session, data: CreateRegistrationRequest) -> Registration:
    """登録作成。支払い状態・管理者メモ・書類は入力に関わらず初期値"""
    if member_service.get_member_by_id(db, data.member_id) is None:
        logger.warning(f"登録作成失敗 (会員不存在): member_id={data.member_id}")
        raise MemberNotFound(data.member_id)

    registration = Registration(
        member_id=data.member_id,
        registration_type=data.registration_type,
        payment_proof_url=data.payment_proof_url,
        payment_status=PaymentStatus.PENDING,
        admin_notes=None,
        receipt_url=None,
        certificate_url=None,
    )
    db.add(registration)
    try:
        db.commit()
    except IntegrityError as e:
        # 存在確認後に会員が削除された場合
        db.rollback()
        logger.warning(f"登録作成失敗 (外部キー): member_id={data.member_id}")
        raise MemberNotFound(data.member_id) from e
    db.refresh(registration)
    logger.info(
        f"登録作成: id={registration.id}, member_id={registration.member_id}, "
        f"type={registration.registration_type.value}"
    )
    return registration


def get_registration_by_id(db: Session, registration_id: int) -> Optional[Registration]:
    return db.query(Registration).filter(Registration.id == registration_id).first()


def get_registrations_by_member_id(db: Session, member_id: int) -> list[Registration]:
    return (
        db.query(Registration)
        .filter(Registration.member_id == member_id)
        .order_by(Registration.id)
        .all()
    )


def get_all_registrations(db: Session) -> list[Registration]:
    return db.query(Registration).order_by(Registration.id).all()


def get_member_with_registrations(db: Session, user_id: int) -> Optional[tuple[Member, list[Registration]]]:
    """ユーザーの会員情報と登録一覧。会員未登録ならNone (登録は検索しない)"""
    member = member_service.get_member_by_user_id(db, user_id)
    if member is None:
        return None
    return member, get_registrations_by_member_id(db, member.id)


def _require_registration(db: Session, registration_id: int) -> Registration:
    registration = get_registration_by_id(db, registration_id)
    if not registration:
        logger.warning(f"登録が見つかりません: id={registration_id}")
        raise NotFoundError(f"Registrasi dengan id {registration_id} tidak ditemukan")
    return registration


def update_payment_status(db: Session, data: UpdatePaymentStatusRequest) -> Registration:
    """
    支払い状態の更新 (管理者用)
    admin_notes はリクエストに含まれる場合のみ上書き (null はクリア)。
    遷移の検証は行わない。
    """
    registration = _require_registration(db, data.registration_id)

    registration.payment_status = data.payment_status
    if data.admin_notes_provided:
        registration.admin_notes = data.admin_notes
    registration.updated_at = utcnow()
    db.commit()
    db.refresh(registration)
    logger.info(
        f"支払い状態更新: id={registration.id}, status={registration.payment_status.value}, "
        f"notes_updated={data.admin_notes_provided}"
    )
    return registration


def upload_document(db: Session, data: UploadDocumentRequest) -> Registration:
    """領収書または証明書のURLを設定。支払い状態は問わない"""
    registration = _require_registration(db, data.registration_id)

    setattr(registration, DOCUMENT_FIELDS[data.document_type], data.document_url)
    registration.updated_at = utcnow()
    db.commit()
    db.refresh(registration)
    logger.info(f"書類登録: id={registration.id}, type={data.document_type.value}")
    return registration
