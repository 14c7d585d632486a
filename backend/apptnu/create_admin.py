"""初期管理者アカウント作成スクリプト: python -m apptnu.create_admin"""
import argparse

from apptnu.core.database import SessionLocal
from apptnu.core.errors import UniqueConstraintViolation
from apptnu.models.enums import UserRole
from apptnu.services import auth_service

ADMIN_EMAIL = "admin@apptnu.or.id"
ADMIN_PASSWORD = "admin12345"


def create_admin(db, email: str, password: str) -> bool:
    """管理者を作成。既に存在すればFalse"""
    try:
        auth_service.create_user(db=db, email=email, password=password, role=UserRole.ADMIN)
    except UniqueConstraintViolation:
        return False
    return True


def main():
    parser = argparse.ArgumentParser(description="APPTNU 管理者アカウント作成")
    parser.add_argument("--email", default=ADMIN_EMAIL)
    parser.add_argument("--password", default=ADMIN_PASSWORD)
    args = parser.parse_args()

    db = SessionLocal()
    try:
        if create_admin(db, args.email, args.password):
            print(f"管理者作成完了: email={args.email}")
        else:
            print(f"既に存在します: {args.email}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
