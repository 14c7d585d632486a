from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from apptnu.core.database import Base, utcnow
from apptnu.models.types import Timestamp, case_sensitive_string
from apptnu.models.enums import UserRole, enum_column


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(case_sensitive_string(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(enum_column(UserRole, "user_role"), nullable=False, default=UserRole.MEMBER)
    created_at = Column(Timestamp, nullable=False, default=utcnow)
    updated_at = Column(Timestamp, nullable=False, default=utcnow, onupdate=utcnow)

    member = relationship("Member", back_populates="user", uselist=False, passive_deletes=True)
