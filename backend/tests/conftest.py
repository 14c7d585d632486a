"""
APPTNU Portal - Test Configuration and Fixtures
"""
import os

import pytest
from fastapi.testclient import TestClient

# アプリ読み込み前にテスト用環境を設定
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DEBUG"] = "false"

from apptnu.main import app
from apptnu.core.database import Base, build_engine, get_db
from apptnu.client.rpc import RpcClient
from apptnu.models.user import User
from apptnu.models.member import Member
from apptnu.models.registration import Registration
from apptnu.models.enums import (
    UserRole,
    Province,
    RepositoryStatus,
    AccreditationStatus,
    MembershipStatus,
    RegistrationType,
    PaymentStatus,
)
from apptnu.services.auth_service import hash_password
from sqlalchemy.orm import sessionmaker

TEST_PASSWORD = "password123"
# bcryptは遅いので1回だけハッシュ化
TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD)

test_engine = build_engine("sqlite://")
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db_session():
    """テストごとに空のDBを用意"""
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db_session):
    """get_db をテスト用セッションに差し替えたクライアント"""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def rpc(client) -> RpcClient:
    return RpcClient(client)


def member_fields(**overrides) -> dict:
    """createMember 入力 (user_id以外)"""
    fields = {
        "university_name": "Universitas Test",
        "library_head_name": "Dr. Test Kepala",
        "library_head_phone": "08123456789",
        "pic_name": "Test PIC",
        "pic_phone": "08987654321",
        "institution_address": "Jalan Test No. 123",
        "province": "Jawa Timur",
        "institution_email": "library@test.ac.id",
        "library_website_url": "https://library.test.ac.id",
        "opac_url": "https://opac.test.ac.id",
        "repository_status": "Sudah",
        "book_collection_count": 50000,
        "accreditation_status": "Akreditasi A",
    }
    fields.update(overrides)
    return fields


@pytest.fixture
def make_user(db_session):
    counter = {"n": 0}

    def _make(email=None, role=UserRole.MEMBER) -> User:
        counter["n"] += 1
        user = User(
            email=email or f"user{counter['n']}@test.ac.id",
            password_hash=TEST_PASSWORD_HASH,
            role=role,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make


@pytest.fixture
def make_member(db_session, make_user):
    def _make(user=None, **overrides) -> Member:
        user = user or make_user()
        fields = member_fields(**overrides)
        member = Member(
            user_id=user.id,
            university_name=fields["university_name"],
            library_head_name=fields["library_head_name"],
            library_head_phone=fields["library_head_phone"],
            pic_name=fields["pic_name"],
            pic_phone=fields["pic_phone"],
            institution_address=fields["institution_address"],
            province=Province(fields["province"]),
            institution_email=fields["institution_email"],
            library_website_url=fields["library_website_url"],
            opac_url=fields["opac_url"],
            repository_status=RepositoryStatus(fields["repository_status"]),
            book_collection_count=fields["book_collection_count"],
            accreditation_status=AccreditationStatus(fields["accreditation_status"]),
            membership_status=MembershipStatus(fields.get("membership_status", "Pending")),
        )
        db_session.add(member)
        db_session.commit()
        db_session.refresh(member)
        return member

    return _make


@pytest.fixture
def make_registration(db_session, make_member):
    def _make(member=None, **overrides) -> Registration:
        member = member or make_member()
        registration = Registration(
            member_id=member.id,
            registration_type=overrides.get("registration_type", RegistrationType.PENDAFTARAN_BARU),
            payment_proof_url=overrides.get("payment_proof_url", "https://files.test/proof.jpg"),
            payment_status=overrides.get("payment_status", PaymentStatus.PENDING),
            admin_notes=overrides.get("admin_notes"),
            receipt_url=overrides.get("receipt_url"),
            certificate_url=overrides.get("certificate_url"),
        )
        db_session.add(registration)
        db_session.commit()
        db_session.refresh(registration)
        return registration

    return _make
