from datetime import datetime, timezone

from fastapi import APIRouter
from apptnu.core.database import check_db_connection

router = APIRouter()


@router.get("/health")
@router.get("/api/health")
async def health_check():
    """ヘルスチェックエンドポイント"""
    db_ok = check_db_connection()
    return {
        "status": "ok" if db_ok else "degraded",
        "db": "connected" if db_ok else "disconnected",
    }


@router.get("/api/rpc/healthcheck", tags=["health"])
async def healthcheck():
    """RPC疎通確認 (DBには触れない)"""
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
