from sqlalchemy import Column, Integer, Text, ForeignKey
from sqlalchemy.orm import relationship

from apptnu.core.database import Base, utcnow
from apptnu.models.types import Timestamp
from apptnu.models.enums import RegistrationType, PaymentStatus, enum_column


class Registration(Base):
    __tablename__ = "registrations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    member_id = Column(Integer, ForeignKey("members.id", ondelete="CASCADE"), nullable=False, index=True)
    registration_type = Column(
        enum_column(RegistrationType, "registration_type"),
        nullable=False,
        comment="Pendaftaran Baru=新規, Perpanjangan=更新",
    )
    payment_proof_url = Column(Text, nullable=True, comment="振込証明URL (外部ホスト)")
    payment_status = Column(
        enum_column(PaymentStatus, "payment_status"),
        nullable=False,
        default=PaymentStatus.PENDING,
    )
    admin_notes = Column(Text, nullable=True)
    receipt_url = Column(Text, nullable=True, comment="領収書URL")
    certificate_url = Column(Text, nullable=True, comment="会員証明書URL")
    created_at = Column(Timestamp, nullable=False, default=utcnow)
    updated_at = Column(Timestamp, nullable=False, default=utcnow, onupdate=utcnow)

    member = relationship("Member", back_populates="registrations")
