from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship

from apptnu.core.database import Base, utcnow
from apptnu.models.types import Timestamp
from apptnu.models.enums import (
    Province,
    RepositoryStatus,
    AccreditationStatus,
    MembershipStatus,
    enum_column,
)


class Member(Base):
    __tablename__ = "members"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
        comment="1ユーザーにつき1会員",
    )

    # 機関・図書館情報
    university_name = Column(Text, nullable=False, comment="大学名")
    library_head_name = Column(Text, nullable=False, comment="図書館長名")
    library_head_phone = Column(String(20), nullable=False)
    pic_name = Column(Text, nullable=False, comment="担当者 (PIC) 名")
    pic_phone = Column(String(20), nullable=False)
    institution_address = Column(Text, nullable=False)
    province = Column(enum_column(Province, "province"), nullable=False)
    institution_email = Column(String(255), nullable=False)
    library_website_url = Column(Text, nullable=True)
    opac_url = Column(Text, nullable=True, comment="OPAC URL")
    repository_status = Column(
        enum_column(RepositoryStatus, "repository_status"),
        nullable=False,
        comment="リポジトリ連携: Belum=未, Sudah=済",
    )
    book_collection_count = Column(Integer, nullable=False, comment="蔵書数")
    accreditation_status = Column(enum_column(AccreditationStatus, "accreditation_status"), nullable=False)

    # 管理者のみが変更 (遷移チェックなし)
    membership_status = Column(
        enum_column(MembershipStatus, "membership_status"),
        nullable=False,
        default=MembershipStatus.PENDING,
    )

    created_at = Column(Timestamp, nullable=False, default=utcnow)
    updated_at = Column(Timestamp, nullable=False, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="member")
    registrations = relationship(
        "Registration",
        back_populates="member",
        order_by="Registration.id",
        passive_deletes=True,
    )
