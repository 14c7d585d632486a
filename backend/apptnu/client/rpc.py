"""RPCクライアント: /api/rpc/<手続き名> を呼び出す (クエリ=GET, ミューテーション=POST)"""
from typing import Any, Optional

import httpx

from apptnu.core.logging import get_logger

logger = get_logger(__name__)

RPC_PATH = "/api/rpc"

# update_payment_status: admin_notes の「未指定」を表す
_UNSET: Any = object()


def _forwarded_for(client_ip: Optional[str]) -> Optional[dict]:
    return {"X-Forwarded-For": client_ip} if client_ip else None


class RpcError(Exception):
    """RPC呼び出し失敗 (HTTPエラーまたは接続失敗)"""

    def __init__(self, status_code: int, code: str, detail: str):
        self.status_code = status_code
        self.code = code
        self.detail = detail
        super().__init__(f"[{status_code} {code}] {detail}")


class RpcClient:
    """
    ポータルAPIのクライアント。再試行は行わない。

    Args:
        http: base_url 設定済みの httpx.Client (テストでは FastAPI の TestClient を渡せる)
    """

    def __init__(self, http: httpx.Client):
        self.http = http

    @classmethod
    def from_url(cls, base_url: str, timeout: float = 10.0) -> "RpcClient":
        return cls(httpx.Client(base_url=base_url, timeout=timeout))

    def query(self, name: str, **params) -> Any:
        return self._call("GET", name, params=params or None)

    def mutate(self, name: str, headers: Optional[dict] = None, **payload) -> Any:
        return self._call("POST", name, json=payload, headers=headers)

    def _call(self, method: str, name: str, **kwargs) -> Any:
        try:
            response = self.http.request(method, f"{RPC_PATH}/{name}", **kwargs)
        except httpx.TransportError as e:
            logger.error(f"RPC接続失敗: {name}: {e}")
            raise RpcError(0, "CONNECTION_ERROR", "Tidak dapat terhubung ke server") from e

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = {}
            raise RpcError(
                response.status_code,
                body.get("code", "HTTP_ERROR"),
                body.get("detail", response.text),
            )
        return response.json()

    # --- アカウント ---
    # client_ip: 画面を操作している利用者のIP。サーバー側のレート制限は利用者単位になる
    def create_user(self, email: str, password: str, role: str = "Member", client_ip: Optional[str] = None) -> dict:
        return self.mutate("createUser", headers=_forwarded_for(client_ip), email=email, password=password, role=role)

    def login(self, email: str, password: str, client_ip: Optional[str] = None) -> dict:
        return self.mutate("login", headers=_forwarded_for(client_ip), email=email, password=password)

    # --- 会員 ---
    def create_member(self, **fields) -> dict:
        return self.mutate("createMember", **fields)

    def get_member_by_user_id(self, user_id: int) -> Optional[dict]:
        return self.query("getMemberByUserId", user_id=user_id)

    def get_all_members(self) -> list[dict]:
        return self.query("getAllMembers")

    def update_member(self, member_id: int, **fields) -> dict:
        return self.mutate("updateMember", id=member_id, **fields)

    # --- 登録 ---
    def create_registration(self, member_id: int, registration_type: str, payment_proof_url: Optional[str]) -> dict:
        return self.mutate(
            "createRegistration",
            member_id=member_id,
            registration_type=registration_type,
            payment_proof_url=payment_proof_url,
        )

    def get_registrations_by_member_id(self, member_id: int) -> list[dict]:
        return self.query("getRegistrationsByMemberId", member_id=member_id)

    def get_all_registrations(self) -> list[dict]:
        return self.query("getAllRegistrations")

    def update_payment_status(self, registration_id: int, payment_status: str, admin_notes: Optional[str] = _UNSET) -> dict:
        payload = {"registration_id": registration_id, "payment_status": payment_status}
        if admin_notes is not _UNSET:
            payload["admin_notes"] = admin_notes
        return self.mutate("updatePaymentStatus", **payload)

    def upload_document(self, registration_id: int, document_type: str, document_url: str) -> dict:
        return self.mutate(
            "uploadDocument",
            registration_id=registration_id,
            document_type=document_type,
            document_url=document_url,
        )

    def get_member_with_registrations(self, user_id: int) -> Optional[dict]:
        return self.query("getMemberWithRegistrations", user_id=user_id)

    def healthcheck(self) -> dict:
        return self.query("healthcheck")
