# 全モデルをインポート (Alembic autogenerate用)
from apptnu.models.user import User
from apptnu.models.member import Member
from apptnu.models.registration import Registration

__all__ = [
    "User",
    "Member",
    "Registration",
]
