from datetime import datetime, timezone

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from sqlalchemy.pool import StaticPool
from apptnu.core.config import settings


def _engine_options(url: str) -> dict:
    """接続先ごとのエンジン設定"""
    if url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        # インメモリDBは全セッションで1接続を共有
        if url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
        return options
    return {
        "pool_size": 10,
        "max_overflow": 20,
        "pool_recycle": 3600,
        "pool_pre_ping": True,
    }


def build_engine(url: str, echo: bool = False) -> Engine:
    engine = create_engine(url, echo=echo, **_engine_options(url))
    if url.startswith("sqlite"):
        # SQLiteは外部キー制約がデフォルト無効
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG and not settings.is_sqlite)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    """UTC現在時刻 (naive, マイクロ秒精度)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_db():
    """FastAPI依存関数: DBセッション取得"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connection() -> bool:
    """DB接続チェック"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
