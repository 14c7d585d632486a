"""RPCエンドポイントのHTTPレベルのテスト"""
from datetime import datetime

from apptnu.models.member import Member
from apptnu.models.registration import Registration

from conftest import member_fields, TEST_PASSWORD


def create_user(client, email="lib@uni.edu", password="password123"):
    return client.post("/api/rpc/createUser", json={"email": email, "password": password})


# ========== createUser / login ==========

def test_create_user(client):
    response = create_user(client)

    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "lib@uni.edu"
    assert data["role"] == "Member"
    assert "password_hash" not in data
    assert "password" not in data


def test_create_user_duplicate_email(client):
    create_user(client)

    response = create_user(client, password="anotherpass")

    assert response.status_code == 409
    assert response.json()["code"] == "CONFLICT"


def test_create_user_invalid_input(client):
    response = create_user(client, email="not-an-email")
    assert response.status_code == 422
    body = response.json()
    assert body["code"] == "BAD_REQUEST"
    assert "Email" in body["detail"]

    response = create_user(client, password="short")
    assert response.status_code == 422
    assert "minimal 8 karakter" in response.json()["detail"]


def test_login(client, make_user):
    user = make_user(email="member@uni.edu")

    response = client.post("/api/rpc/login", json={"email": "member@uni.edu", "password": TEST_PASSWORD})

    assert response.status_code == 200
    data = response.json()
    assert data["user"]["id"] == user.id
    assert data["user"]["role"] == "Member"
    assert "password_hash" not in data["user"]
    assert data["token"] is None


def test_login_failures_share_response(client, make_user):
    make_user(email="member@uni.edu")

    wrong_password = client.post("/api/rpc/login", json={"email": "member@uni.edu", "password": "wrongpass"})
    unknown_email = client.post("/api/rpc/login", json={"email": "nobody@uni.edu", "password": TEST_PASSWORD})

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["code"] == "UNAUTHORIZED"


# ========== 会員 ==========

def test_create_member_ignores_membership_status(client, make_user):
    user = make_user()

    response = client.post(
        "/api/rpc/createMember",
        json={"user_id": user.id, "membership_status": "Active", **member_fields()},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["membership_status"] == "Pending"
    assert data["province"] == "Jawa Timur"
    assert data["user_id"] == user.id


def test_create_member_unknown_user(client, db_session):
    response = client.post("/api/rpc/createMember", json={"user_id": 999, **member_fields()})

    assert response.status_code == 409
    assert response.json()["code"] == "CONFLICT"
    assert db_session.query(Member).count() == 0


def test_create_member_negative_collection_count(client, make_user):
    user = make_user()

    response = client.post(
        "/api/rpc/createMember",
        json={"user_id": user.id, **member_fields(book_collection_count=-5)},
    )

    assert response.status_code == 422
    assert "Jumlah koleksi buku" in response.json()["detail"]


def test_create_member_invalid_url(client, make_user):
    user = make_user()

    response = client.post(
        "/api/rpc/createMember",
        json={"user_id": user.id, **member_fields(opac_url="bukan url")},
    )

    assert response.status_code == 422
    assert "URL OPAC harus berupa URL yang valid" in response.json()["detail"]


def test_get_member_by_user_id(client, make_member, make_user):
    member = make_member()

    response = client.get("/api/rpc/getMemberByUserId", params={"user_id": member.user_id})
    assert response.status_code == 200
    assert response.json()["id"] == member.id

    other = make_user()
    response = client.get("/api/rpc/getMemberByUserId", params={"user_id": other.id})
    assert response.status_code == 200
    assert response.json() is None


def test_get_all_members(client, make_member):
    assert client.get("/api/rpc/getAllMembers").json() == []

    first = make_member()
    second = make_member()

    data = client.get("/api/rpc/getAllMembers").json()
    assert [m["id"] for m in data] == [first.id, second.id]


def test_update_member(client, make_member):
    member = make_member()
    before = client.get("/api/rpc/getMemberByUserId", params={"user_id": member.user_id}).json()

    response = client.post(
        "/api/rpc/updateMember",
        json={"id": member.id, "membership_status": "Active", "opac_url": None},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["membership_status"] == "Active"
    assert data["opac_url"] is None
    assert data["library_website_url"] == before["library_website_url"]
    assert data["university_name"] == before["university_name"]
    assert datetime.fromisoformat(data["updated_at"]) > datetime.fromisoformat(before["updated_at"])


def test_update_member_null_on_required_field(client, make_member):
    member = make_member()

    response = client.post("/api/rpc/updateMember", json={"id": member.id, "university_name": None})

    assert response.status_code == 422
    assert "tidak boleh null" in response.json()["detail"]


def test_update_member_not_found(client):
    response = client.post("/api/rpc/updateMember", json={"id": 999, "pic_name": "Baru"})

    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


# ========== 登録 ==========

def test_create_registration_forces_defaults(client, make_member):
    member = make_member()

    response = client.post(
        "/api/rpc/createRegistration",
        json={
            "member_id": member.id,
            "registration_type": "Pendaftaran Baru",
            "payment_proof_url": "https://files.uni.edu/proof.jpg",
            "payment_status": "Confirmed",
            "receipt_url": "https://files.uni.edu/receipt.pdf",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["payment_status"] == "Pending"
    assert data["receipt_url"] is None
    assert data["certificate_url"] is None
    assert data["admin_notes"] is None


def test_create_registration_unknown_member(client, db_session):
    response = client.post(
        "/api/rpc/createRegistration",
        json={"member_id": 999, "registration_type": "Perpanjangan", "payment_proof_url": None},
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Anggota dengan id 999 tidak ditemukan"
    assert db_session.query(Registration).count() == 0


def test_create_registration_invalid_type(client, make_member):
    member = make_member()

    response = client.post(
        "/api/rpc/createRegistration",
        json={"member_id": member.id, "registration_type": "Lainnya", "payment_proof_url": None},
    )

    assert response.status_code == 422
    assert "Jenis pendaftaran" in response.json()["detail"]


def test_update_payment_status_and_upload_document(client, make_registration):
    registration = make_registration()

    response = client.post(
        "/api/rpc/updatePaymentStatus",
        json={"registration_id": registration.id, "payment_status": "Confirmed", "admin_notes": "OK"},
    )
    assert response.status_code == 200
    assert response.json()["payment_status"] == "Confirmed"
    assert response.json()["admin_notes"] == "OK"

    response = client.post(
        "/api/rpc/uploadDocument",
        json={
            "registration_id": registration.id,
            "document_type": "certificate",
            "document_url": "https://files.uni.edu/cert.pdf",
        },
    )
    assert response.status_code == 200
    assert response.json()["certificate_url"] == "https://files.uni.edu/cert.pdf"
    assert response.json()["receipt_url"] is None


def test_upload_document_invalid_type(client, make_registration):
    registration = make_registration()

    response = client.post(
        "/api/rpc/uploadDocument",
        json={"registration_id": registration.id, "document_type": "invoice", "document_url": "https://x.id/a.pdf"},
    )

    assert response.status_code == 422


def test_registration_not_found(client):
    response = client.post(
        "/api/rpc/updatePaymentStatus",
        json={"registration_id": 999, "payment_status": "Confirmed"},
    )
    assert response.status_code == 404

    response = client.post(
        "/api/rpc/uploadDocument",
        json={"registration_id": 999, "document_type": "receipt", "document_url": "https://x.id/a.pdf"},
    )
    assert response.status_code == 404


def test_get_member_with_registrations(client, make_member, make_registration, make_user):
    member = make_member()
    registration = make_registration(member=member)
    make_registration(member=make_member())

    response = client.get("/api/rpc/getMemberWithRegistrations", params={"user_id": member.user_id})

    assert response.status_code == 200
    data = response.json()
    assert data["member"]["id"] == member.id
    assert [r["id"] for r in data["registrations"]] == [registration.id]

    lonely = make_user()
    response = client.get("/api/rpc/getMemberWithRegistrations", params={"user_id": lonely.id})
    assert response.status_code == 200
    assert response.json() is None


def test_query_missing_parameter(client):
    response = client.get("/api/rpc/getRegistrationsByMemberId")

    assert response.status_code == 422
    assert "ID anggota wajib diisi" in response.json()["detail"]


def test_create_user_keeps_email_as_submitted(client):
    response = create_user(client, email="Lib@UNI.Edu")

    assert response.status_code == 200
    assert response.json()["email"] == "Lib@UNI.Edu"

    # 照合は完全一致
    ok = client.post("/api/rpc/login", json={"email": "Lib@UNI.Edu", "password": "password123"})
    assert ok.status_code == 200
    other_case = client.post("/api/rpc/login", json={"email": "lib@uni.edu", "password": "password123"})
    assert other_case.status_code == 401


def test_create_member_keeps_institution_email_as_submitted(client, make_user):
    user = make_user()

    response = client.post(
        "/api/rpc/createMember",
        json={"user_id": user.id, **member_fields(institution_email="Perpus@Kampus.AC.ID")},
    )

    assert response.status_code == 200
    assert response.json()["institution_email"] == "Perpus@Kampus.AC.ID"
