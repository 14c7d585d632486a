"""MySQL向けのカラム型 (SQLite等では通常の型)"""
from sqlalchemy import DateTime, String
from sqlalchemy.dialects import mysql

# MySQLのDATETIMEは秒単位のため fsp=6 でマイクロ秒まで保持
Timestamp = DateTime().with_variant(mysql.DATETIME(fsp=6), "mysql")


def case_sensitive_string(length: int) -> String:
    """utf8mb4 の既定照合順序は大文字小文字を区別しないため、MySQLではバイナリ照合"""
    return String(length).with_variant(mysql.VARCHAR(length, collation="utf8mb4_bin"), "mysql")
