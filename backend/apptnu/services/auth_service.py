"""アカウント・認証ビジネスロジック"""
import bcrypt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import Optional

from apptnu.models.user import User
from apptnu.models.enums import UserRole
from apptnu.core.errors import UniqueConstraintViolation, InvalidCredentials
from apptnu.core.logging import get_logger

logger = get_logger(__name__)

# bcryptは72バイトを超える入力を受け付けない
_BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """パスワードをbcryptでハッシュ化"""
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """パスワードを検証"""
    try:
        return bcrypt.checkpw(_password_bytes(password), hashed.encode("utf-8"))
    except ValueError:
        # 保存値がbcrypt形式でない
        return False


def create_user(
    db: Session,
    email: str,
    password: str,
    role: UserRole = UserRole.MEMBER,
) -> User:
    """新規ユーザー作成"""
    if get_user_by_email(db, email):
        logger.warning(f"ユーザー作成失敗 (メール重複): email={email}")
        raise UniqueConstraintViolation("Email sudah terdaftar")

    user = User(
        email=email,
        password_hash=hash_password(password),
        role=role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # 同時登録による重複
        db.rollback()
        logger.warning(f"ユーザー作成失敗 (一意制約): email={email}")
        raise UniqueConstraintViolation("Email sudah terdaftar") from e
    db.refresh(user)
    logger.info(f"ユーザー作成: id={user.id}, email={email}, role={user.role.value}")
    return user


def login(db: Session, email: str, password: str) -> User:
    """メール・パスワード照合。失敗理由は呼び出し側に区別させない"""
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        logger.warning(f"ログイン失敗: email={email}")
        raise InvalidCredentials()
    logger.info(f"ログイン: user_id={user.id}")
    return user


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()
