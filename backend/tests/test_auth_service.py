import pytest

from apptnu.core.errors import UniqueConstraintViolation, InvalidCredentials
from apptnu.models.enums import UserRole
from apptnu.models.user import User
from apptnu.services import auth_service

from conftest import TEST_PASSWORD


def test_create_user_hashes_password(db_session):
    """Test user creation stores a salted hash, not the password"""
    user = auth_service.create_user(db_session, email="lib@uni.edu", password="password123")

    assert user.id is not None
    assert user.email == "lib@uni.edu"
    assert user.role == UserRole.MEMBER
    assert user.password_hash != "password123"
    assert auth_service.verify_password("password123", user.password_hash)
    assert user.created_at is not None


def test_create_user_with_admin_role(db_session):
    user = auth_service.create_user(db_session, email="admin@uni.edu", password="password123", role=UserRole.ADMIN)
    assert user.role == UserRole.ADMIN


def test_create_user_duplicate_email(db_session, make_user):
    make_user(email="dup@uni.edu")

    with pytest.raises(UniqueConstraintViolation):
        auth_service.create_user(db_session, email="dup@uni.edu", password="password123")

    assert db_session.query(User).filter(User.email == "dup@uni.edu").count() == 1


def test_email_match_is_case_sensitive(db_session, make_user):
    make_user(email="Case@uni.edu")
    assert auth_service.get_user_by_email(db_session, "case@uni.edu") is None
    assert auth_service.get_user_by_email(db_session, "Case@uni.edu") is not None


def test_login_success(db_session, make_user):
    user = make_user(email="member@uni.edu")

    result = auth_service.login(db_session, "member@uni.edu", TEST_PASSWORD)

    assert result.id == user.id


def test_login_wrong_password_and_unknown_email_are_indistinguishable(db_session, make_user):
    make_user(email="member@uni.edu")

    with pytest.raises(InvalidCredentials) as wrong_password:
        auth_service.login(db_session, "member@uni.edu", "wrongpassword")
    with pytest.raises(InvalidCredentials) as unknown_email:
        auth_service.login(db_session, "nobody@uni.edu", TEST_PASSWORD)

    assert wrong_password.value.detail == unknown_email.value.detail
    assert wrong_password.value.status_code == unknown_email.value.status_code == 401


def test_verify_password_rejects_non_bcrypt_hash():
    assert auth_service.verify_password("password123", "not-a-bcrypt-hash") is False
