from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from apptnu.core.config import settings
from apptnu.core.errors import PortalError, ValidationError
from apptnu.core.logging import setup_logging, get_logger
from apptnu.core.middleware import SecurityHeadersMiddleware, RequestLogMiddleware
from apptnu.core.rate_limit import limiter, rate_limit_exceeded_handler
from apptnu.routers import health, auth, members, registrations

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """アプリケーションライフサイクル管理"""
    setup_logging(debug=settings.DEBUG)
    logger.info("アプリケーション起動")
    yield
    logger.info("アプリケーション終了")


app = FastAPI(
    title=settings.SITE_NAME,
    lifespan=lifespan,
    docs_url="/api/docs" if settings.DEBUG else None,
    redoc_url="/api/redoc" if settings.DEBUG else None,
)

# レート制限設定
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)


# --- ドメイン例外 → RPCエラー ---
@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail, "code": exc.code})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.error(f"未処理エラー: {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"detail": PortalError.default_detail, "code": PortalError.code},
    )


# --- バリデーションエラーのインドネシア語化 ---
_FIELD_ID = {
    "email": "Email",
    "password": "Password",
    "role": "Peran",
    "user_id": "ID pengguna",
    "member_id": "ID anggota",
    "registration_id": "ID registrasi",
    "id": "ID",
    "university_name": "Nama perguruan tinggi",
    "library_head_name": "Nama kepala perpustakaan",
    "library_head_phone": "No. HP kepala perpustakaan",
    "pic_name": "Nama PIC",
    "pic_phone": "No. HP PIC",
    "institution_address": "Alamat institusi",
    "province": "Provinsi",
    "institution_email": "Email institusi",
    "library_website_url": "URL website perpustakaan",
    "opac_url": "URL OPAC",
    "repository_status": "Status repositori",
    "book_collection_count": "Jumlah koleksi buku",
    "accreditation_status": "Status akreditasi",
    "membership_status": "Status keanggotaan",
    "registration_type": "Jenis pendaftaran",
    "payment_proof_url": "URL bukti pembayaran",
    "payment_status": "Status pembayaran",
    "admin_notes": "Catatan admin",
    "document_type": "Jenis dokumen",
    "document_url": "URL dokumen",
}


def _translate_error(err: dict) -> str:
    t = err.get("type", "")
    ctx = err.get("ctx", {}) or {}
    loc = err.get("loc", [])
    field = str(loc[-1]) if loc else ""
    # Optional[...] の内側エラーは loc 末尾が型名になる
    if field not in _FIELD_ID and len(loc) >= 2:
        field = str(loc[-2])
    fi = _FIELD_ID.get(field, field)

    if "email" in t or (t == "value_error" and "valid email" in err.get("msg", "")):
        return f"{fi} harus berupa alamat email yang valid"
    if t.startswith("url"):
        return f"{fi} harus berupa URL yang valid"
    if t == "string_too_short":
        if ctx.get("min_length") == 1:
            return f"{fi} harus diisi"
        return f"{fi} minimal {ctx.get('min_length', '')} karakter"
    if t == "string_too_long":
        return f"{fi} maksimal {ctx.get('max_length', '')} karakter"
    if t == "missing":
        return f"{fi} wajib diisi"
    if t in ("int_parsing", "int_type", "int_from_float"):
        return f"{fi} harus berupa angka bulat"
    if t == "greater_than_equal":
        return f"{fi} tidak boleh kurang dari {ctx.get('ge', '')}"
    if t == "enum":
        return f"{fi} harus salah satu dari: {ctx.get('expected', '')}"
    if t == "string_type":
        return f"{fi} harus berupa teks"
    if t == "value_error" and ctx.get("error"):
        return str(ctx["error"])
    return f"{fi}: nilai tidak valid"


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    error = ValidationError("; ".join(_translate_error(e) for e in exc.errors()))
    return JSONResponse(status_code=error.status_code, content={"detail": error.detail, "code": error.code})


# ミドルウェア (登録順序: 後に登録したものが先に実行される)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLogMiddleware)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ルーター登録
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(members.router)
app.include_router(registrations.router)
