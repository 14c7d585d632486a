from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """アプリケーション設定"""

    # データベース
    DATABASE_URL: str = "mysql+pymysql://apptnu:apptnupassword@db:3306/apptnu?charset=utf8mb4"

    # サービス設定
    SITE_NAME: str = "APPTNU"
    ALLOWED_ORIGINS: str = "http://localhost:8501,http://localhost:3000"

    # サーバー
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 2022

    # クライアント (Streamlit) から見たAPIのURL
    API_URL: str = "http://localhost:2022"

    # レート制限
    RATE_LIMIT_ENABLED: bool = True

    # 環境
    ENV: str = "development"
    DEBUG: bool = True

    @property
    def allowed_origins_list(self) -> list[str]:
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
