from pydantic import BaseModel, Field, model_validator
from typing import Optional
from datetime import datetime

from apptnu.models.enums import (
    Province,
    RepositoryStatus,
    AccreditationStatus,
    MembershipStatus,
)
from apptnu.schemas.common import UrlStr, EmailText


class CreateMemberRequest(BaseModel):
    """登録ウィザード ステップ1 (membership_status は受け付けない)"""

    user_id: int
    university_name: str = Field(min_length=1)
    library_head_name: str = Field(min_length=1)
    library_head_phone: str = Field(min_length=1, max_length=20)
    pic_name: str = Field(min_length=1)
    pic_phone: str = Field(min_length=1, max_length=20)
    institution_address: str = Field(min_length=1)
    province: Province
    institution_email: EmailText
    library_website_url: Optional[UrlStr] = None
    opac_url: Optional[UrlStr] = None
    repository_status: RepositoryStatus
    book_collection_count: int = Field(ge=0)
    accreditation_status: AccreditationStatus


# NOT NULLカラム: 部分更新で明示的なnullを拒否する
NON_NULLABLE_MEMBER_FIELDS = frozenset({
    "university_name",
    "library_head_name",
    "library_head_phone",
    "pic_name",
    "pic_phone",
    "institution_address",
    "province",
    "institution_email",
    "repository_status",
    "book_collection_count",
    "accreditation_status",
    "membership_status",
})


class UpdateMemberRequest(BaseModel):
    """
    会員の部分更新
    未指定のフィールドは変更しない。URL系はnullでクリア可能。
    """

    id: int
    university_name: Optional[str] = Field(default=None, min_length=1)
    library_head_name: Optional[str] = Field(default=None, min_length=1)
    library_head_phone: Optional[str] = Field(default=None, min_length=1, max_length=20)
    pic_name: Optional[str] = Field(default=None, min_length=1)
    pic_phone: Optional[str] = Field(default=None, min_length=1, max_length=20)
    institution_address: Optional[str] = Field(default=None, min_length=1)
    province: Optional[Province] = None
    institution_email: Optional[EmailText] = None
    library_website_url: Optional[UrlStr] = None
    opac_url: Optional[UrlStr] = None
    repository_status: Optional[RepositoryStatus] = None
    book_collection_count: Optional[int] = Field(default=None, ge=0)
    accreditation_status: Optional[AccreditationStatus] = None
    membership_status: Optional[MembershipStatus] = None

    @model_validator(mode="after")
    def reject_null_for_required_columns(self):
        for name in self.model_fields_set & NON_NULLABLE_MEMBER_FIELDS:
            if getattr(self, name) is None:
                raise ValueError(f"{name} tidak boleh null")
        return self

    def changes(self) -> dict:
        """指定されたフィールドのみ (id除く)"""
        return self.model_dump(exclude_unset=True, exclude={"id"})


class MemberInfo(BaseModel):
    id: int
    user_id: int
    university_name: str
    library_head_name: str
    library_head_phone: str
    pic_name: str
    pic_phone: str
    institution_address: str
    province: Province
    institution_email: str
    library_website_url: Optional[str] = None
    opac_url: Optional[str] = None
    repository_status: RepositoryStatus
    book_collection_count: int
    accreditation_status: AccreditationStatus
    membership_status: MembershipStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
