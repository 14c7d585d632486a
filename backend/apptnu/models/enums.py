"""列挙型: DBカラムとpydanticスキーマで共有 (値は表示文字列のまま保存)"""
import enum

from sqlalchemy import Enum as SAEnum


class UserRole(str, enum.Enum):
    ADMIN = "Admin"
    MEMBER = "Member"


class Province(str, enum.Enum):
    JAWA_TIMUR = "Jawa Timur"
    JAWA_BARAT = "Jawa Barat"
    JAWA_TENGAH = "Jawa Tengah"


class RepositoryStatus(str, enum.Enum):
    BELUM = "Belum"
    SUDAH = "Sudah"


class AccreditationStatus(str, enum.Enum):
    AKREDITASI_A = "Akreditasi A"
    AKREDITASI_B = "Akreditasi B"
    BELUM_AKREDITASI = "Belum Akreditasi"


class MembershipStatus(str, enum.Enum):
    PENDING = "Pending"
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    REJECTED = "Rejected"


class RegistrationType(str, enum.Enum):
    PENDAFTARAN_BARU = "Pendaftaran Baru"
    PERPANJANGAN = "Perpanjangan"


class PaymentStatus(str, enum.Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    REJECTED = "Rejected"


class DocumentType(str, enum.Enum):
    RECEIPT = "receipt"
    CERTIFICATE = "certificate"


def enum_column(enum_cls: type[enum.Enum], name: str) -> SAEnum:
    """メンバー名ではなく値 ("Jawa Timur" 等) で保存するEnum型"""
    return SAEnum(
        enum_cls,
        name=name,
        values_callable=lambda e: [m.value for m in e],
        validate_strings=True,
    )
