from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from apptnu.models.enums import RegistrationType, PaymentStatus, DocumentType
from apptnu.schemas.common import UrlStr
from apptnu.schemas.member import MemberInfo


class CreateRegistrationRequest(BaseModel):
    """登録ウィザード ステップ2"""

    member_id: int
    registration_type: RegistrationType
    payment_proof_url: Optional[str]


class UpdatePaymentStatusRequest(BaseModel):
    registration_id: int
    payment_status: PaymentStatus
    # 未指定=変更なし / null=クリア / 文字列=設定
    admin_notes: Optional[str] = None

    @property
    def admin_notes_provided(self) -> bool:
        return "admin_notes" in self.model_fields_set


class UploadDocumentRequest(BaseModel):
    registration_id: int
    document_type: DocumentType
    document_url: UrlStr


class RegistrationInfo(BaseModel):
    id: int
    member_id: int
    registration_type: RegistrationType
    payment_proof_url: Optional[str] = None
    payment_status: PaymentStatus
    admin_notes: Optional[str] = None
    receipt_url: Optional[str] = None
    certificate_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class MemberWithRegistrations(BaseModel):
    member: MemberInfo
    registrations: list[RegistrationInfo]

    model_config = {"from_attributes": True}
