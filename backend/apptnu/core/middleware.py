"""HTTPミドルウェア: セキュリティヘッダー付与とリクエストログ"""
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from apptnu.core.logging import get_logger

logger = get_logger("apptnu.request")

RPC_PREFIX = "/api/rpc/"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    セキュリティ関連のHTTPヘッダーを付与するミドルウェア
    APIはJSONのみ返すため、CSPはすべて拒否で固定
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if not request.url.path.startswith("/api/docs"):
            response.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none'"
        return response


class RequestLogMiddleware(BaseHTTPMiddleware):
    """RPC呼び出しごとに手続き名・ステータス・処理時間を記録"""

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        if not path.startswith(RPC_PREFIX):
            return await call_next(request)

        procedure = path[len(RPC_PREFIX):]
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # 例外は外側のハンドラーで500になる
            self._log(request.method, procedure, 500, started)
            raise
        self._log(request.method, procedure, response.status_code, started)
        return response

    @staticmethod
    def _log(method: str, procedure: str, status: int, started: float):
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
        if status >= 500:
            log = logger.error
        elif status >= 400:
            log = logger.warning
        else:
            log = logger.info
        log(
            f"RPC {method} {procedure} -> {status}",
            extra={
                "procedure": procedure,
                "extra_data": {"status": status, "elapsed_ms": elapsed_ms},
            },
        )
