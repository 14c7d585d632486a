"""ドメイン例外: ハンドラーが送出し、main.py の例外ハンドラーでRPCエラーに変換する"""
from typing import Optional


class PortalError(Exception):
    """ポータル共通の基底例外"""

    status_code = 500
    code = "INTERNAL_SERVER_ERROR"
    default_detail = "Terjadi kesalahan pada server"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFoundError(PortalError):
    """ID指定の参照・更新対象が存在しない"""

    status_code = 404
    code = "NOT_FOUND"
    default_detail = "Data tidak ditemukan"


class MemberNotFound(NotFoundError):
    """createRegistration: member_id に対応する会員が存在しない"""

    def __init__(self, member_id: int):
        self.member_id = member_id
        super().__init__(f"Anggota dengan id {member_id} tidak ditemukan")


class UniqueConstraintViolation(PortalError):
    status_code = 409
    code = "CONFLICT"
    default_detail = "Data sudah terdaftar"


class ForeignKeyViolation(PortalError):
    status_code = 409
    code = "CONFLICT"
    default_detail = "Data induk yang dirujuk tidak ditemukan"


class InvalidCredentials(PortalError):
    """ログイン失敗 (メール不存在とパスワード不一致を区別しない)"""

    status_code = 401
    code = "UNAUTHORIZED"
    default_detail = "Email atau password tidak valid"


class ValidationError(PortalError):
    """入力検証エラー (RequestValidationError をこの形で返す)"""

    status_code = 422
    code = "BAD_REQUEST"
    default_detail = "Data tidak valid"
