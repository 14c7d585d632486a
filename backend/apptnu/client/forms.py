"""画面用ヘルパー: 表示ラベル、簡易入力チェック、RPCペイロード組み立て"""
from typing import Optional

from apptnu.models.enums import (
    UserRole,
    Province,
    RepositoryStatus,
    AccreditationStatus,
    MembershipStatus,
    RegistrationType,
    PaymentStatus,
    DocumentType,
)

PROVINCES = [p.value for p in Province]
REPOSITORY_STATUSES = [s.value for s in RepositoryStatus]
ACCREDITATION_STATUSES = [s.value for s in AccreditationStatus]
MEMBERSHIP_STATUSES = [s.value for s in MembershipStatus]
REGISTRATION_TYPES = [t.value for t in RegistrationType]
PAYMENT_STATUSES = [s.value for s in PaymentStatus]
DOCUMENT_TYPES = [t.value for t in DocumentType]

DOCUMENT_LABELS = {
    DocumentType.RECEIPT.value: "Kwitansi",
    DocumentType.CERTIFICATE.value: "Sertifikat",
}

_MEMBERSHIP_ICONS = {
    MembershipStatus.PENDING.value: "⏳",
    MembershipStatus.ACTIVE.value: "✅",
    MembershipStatus.INACTIVE.value: "💤",
    MembershipStatus.REJECTED.value: "❌",
}

_PAYMENT_ICONS = {
    PaymentStatus.PENDING.value: "⏳",
    PaymentStatus.CONFIRMED.value: "✅",
    PaymentStatus.REJECTED.value: "❌",
}

# 失敗時の汎用メッセージ (サーバーのエラー内容は表示しない)
MSG_LOGIN_FAILED = "Email atau password tidak valid"
MSG_SIGNUP_FAILED = "Gagal membuat akun. Email mungkin sudah terdaftar."
MSG_MEMBER_SAVE_FAILED = "Gagal menyimpan data anggota. Pastikan semua field telah diisi dengan benar."
MSG_REGISTRATION_SAVE_FAILED = "Gagal menyimpan data pendaftaran. Silakan coba lagi."
MSG_LOAD_MEMBERS_FAILED = "Gagal memuat data anggota"
MSG_LOAD_REGISTRATIONS_FAILED = "Gagal memuat data registrasi"
MSG_PAYMENT_UPDATE_FAILED = "Gagal memperbarui status pembayaran"
MSG_DOCUMENT_UPLOAD_FAILED = "Gagal mengupload dokumen"
MSG_MEMBER_UPDATE_FAILED = "Gagal memperbarui data anggota"
MSG_TOO_MANY_REQUESTS = "Terlalu banyak percobaan. Silakan coba lagi dalam satu menit."

RATE_LIMITED_CODE = "TOO_MANY_REQUESTS"

# ステップ1の必須テキスト項目 → 表示名
MEMBER_TEXT_FIELDS = {
    "university_name": "Nama Perguruan Tinggi",
    "library_head_name": "Nama Kepala Perpustakaan",
    "library_head_phone": "No. HP Kepala Perpustakaan",
    "pic_name": "Nama PIC",
    "pic_phone": "No. HP PIC",
    "institution_address": "Alamat Institusi",
    "institution_email": "Email Institusi",
}


def status_badge(status: str, kind: str = "membership") -> str:
    """ステータス表示 (未知の値はPendingのアイコン)"""
    icons = _PAYMENT_ICONS if kind == "payment" else _MEMBERSHIP_ICONS
    return f"{icons.get(status, '⏳')} {status}"


def auth_error_message(code: str, is_login: bool) -> str:
    """ログイン/アカウント作成の失敗メッセージ。レート制限だけは区別して表示"""
    if code == RATE_LIMITED_CODE:
        return MSG_TOO_MANY_REQUESTS
    return MSG_LOGIN_FAILED if is_login else MSG_SIGNUP_FAILED


def landing_view(user: Optional[dict], member: Optional[dict]) -> str:
    """
    表示画面の決定 (ロール判定はクライアントのみ)
    auth / admin / register / dashboard
    """
    if not user:
        return "auth"
    if user.get("role") == UserRole.ADMIN.value:
        return "admin"
    if member is None:
        return "register"
    return "dashboard"


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def check_member_form(form: dict) -> list[str]:
    """ステップ1の簡易チェック。厳密な検証はサーバー側"""
    errors = []
    for field, label in MEMBER_TEXT_FIELDS.items():
        if not (form.get(field) or "").strip():
            errors.append(f"{label} harus diisi")
    email = (form.get("institution_email") or "").strip()
    if email and "@" not in email:
        errors.append("Email institusi harus valid")
    count = form.get("book_collection_count")
    if count is None or int(count) < 0:
        errors.append("Jumlah koleksi buku tidak boleh negatif")
    return errors


def build_member_payload(user_id: int, form: dict) -> dict:
    """createMember 用ペイロード。空のURLはnull"""
    payload = {"user_id": user_id}
    for field in MEMBER_TEXT_FIELDS:
        payload[field] = (form.get(field) or "").strip()
    payload.update(
        province=form.get("province", Province.JAWA_TIMUR.value),
        library_website_url=_blank_to_none(form.get("library_website_url")),
        opac_url=_blank_to_none(form.get("opac_url")),
        repository_status=form.get("repository_status", RepositoryStatus.BELUM.value),
        book_collection_count=int(form.get("book_collection_count") or 0),
        accreditation_status=form.get("accreditation_status", AccreditationStatus.BELUM_AKREDITASI.value),
    )
    return payload


def build_registration_payload(member_id: int, registration_type: str, payment_proof_url: Optional[str]) -> dict:
    return {
        "member_id": member_id,
        "registration_type": registration_type,
        "payment_proof_url": _blank_to_none(payment_proof_url),
    }


def registration_summary(registrations: list[dict]) -> dict:
    """会員ダッシュボードの集計"""
    latest = max(registrations, key=lambda r: r["id"]) if registrations else None
    return {
        "total": len(registrations),
        "confirmed": sum(1 for r in registrations if r["payment_status"] == PaymentStatus.CONFIRMED.value),
        "pending": sum(1 for r in registrations if r["payment_status"] == PaymentStatus.PENDING.value),
        "latest": latest,
    }


def available_documents(registrations: list[dict]) -> list[dict]:
    """発行済み書類の一覧 (登録ID, 種別ラベル, URL)"""
    documents = []
    for r in registrations:
        for doc_type, field in ((DocumentType.RECEIPT.value, "receipt_url"), (DocumentType.CERTIFICATE.value, "certificate_url")):
            if r.get(field):
                documents.append({
                    "registration_id": r["id"],
                    "registration_type": r["registration_type"],
                    "label": DOCUMENT_LABELS[doc_type],
                    "url": r[field],
                })
    return documents
