"""会員ビジネスロジック"""
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import Optional

from apptnu.core.database import utcnow
from apptnu.core.errors import NotFoundError, ForeignKeyViolation, UniqueConstraintViolation
from apptnu.core.logging import get_logger
from apptnu.models.member import Member
from apptnu.models.user import User
from apptnu.models.enums import MembershipStatus
from apptnu.schemas.member import CreateMemberRequest, UpdateMemberRequest

logger = get_logger(__name__)


def create_member(db: Session, data: CreateMemberRequest) -> Member:
    """会員作成。membership_status は常にPending"""
    fields = data.model_dump()
    fields["membership_status"] = MembershipStatus.PENDING
    member = Member(**fields)
    db.add(member)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        # 外部キー違反か一意制約違反かを親行の有無で判定
        if db.get(User, data.user_id) is None:
            logger.warning(f"会員作成失敗 (ユーザー不存在): user_id={data.user_id}")
            raise ForeignKeyViolation(f"Pengguna dengan id {data.user_id} tidak ditemukan") from e
        logger.warning(f"会員作成失敗 (既に登録済み): user_id={data.user_id}")
        raise UniqueConstraintViolation("Data anggota untuk pengguna ini sudah ada") from e
    db.refresh(member)
    logger.info(f"会員作成: id={member.id}, user_id={member.user_id}, university={member.university_name}")
    return member


def get_member_by_user_id(db: Session, user_id: int) -> Optional[Member]:
    return db.query(Member).filter(Member.user_id == user_id).first()


def get_member_by_id(db: Session, member_id: int) -> Optional[Member]:
    return db.query(Member).filter(Member.id == member_id).first()


def get_all_members(db: Session) -> list[Member]:
    """全会員 (登録順)"""
    return db.query(Member).order_by(Member.id).all()


def update_member(db: Session, data: UpdateMemberRequest) -> Member:
    """
    会員の部分更新 (管理者用)
    指定フィールドのみ上書き。ステータス遷移の検証は行わない。
    """
    member = get_member_by_id(db, data.id)
    if not member:
        logger.warning(f"会員更新失敗 (不存在): id={data.id}")
        raise NotFoundError(f"Anggota dengan id {data.id} tidak ditemukan")

    changes = data.changes()
    for field, value in changes.items():
        setattr(member, field, value)
    member.updated_at = utcnow()
    db.commit()
    db.refresh(member)
    logger.info(f"会員更新: id={member.id}, fields={sorted(changes)}")
    return member
