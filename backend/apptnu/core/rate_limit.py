"""レート制限設定（slowapi使用）"""
from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from starlette.requests import Request
from starlette.responses import JSONResponse

from apptnu.core.config import settings


def get_client_ip(request: Request) -> str:
    """
    クライアントIPアドレスを取得
    プロキシ経由の場合はX-Forwarded-Forヘッダーを参照
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return get_remote_address(request)


limiter = Limiter(
    key_func=get_client_ip,
    storage_uri="memory://",
    enabled=settings.RATE_LIMIT_ENABLED,
)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """レート制限超過時のエラーハンドラ"""
    return JSONResponse(
        status_code=429,
        content={
            "detail": "Terlalu banyak permintaan. Silakan coba lagi beberapa saat lagi.",
            "code": "TOO_MANY_REQUESTS",
            "retry_after": exc.detail,
        },
    )


CREATE_USER_RATE_LIMIT = "3/minute"   # アカウント作成: 3回/分
LOGIN_RATE_LIMIT = "5/minute"         # ログイン: 5回/分
