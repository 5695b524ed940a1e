from pydantic import ConfigDict
from pydantic_settings import BaseSettings
from typing import Literal


class Settings(BaseSettings):
    # 環境設定
    ENVIRONMENT: Literal["development", "testing", "production"] = "development"

    # アプリケーション設定
    APP_NAME: str = "Bloqqer"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = True

    # ロギング設定
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_FILE_PATH: str = "logs/bloqqer.log"

    # データベース設定
    DATABASE_URL: str = "sqlite+aiosqlite:///./bloqqer.db"
    SQLALCHEMY_ECHO: bool = False

    # JWT設定（共有秘密鍵による署名）
    JWT_SECRET_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_ISSUER: str = "bloqqer"
    JWT_AUDIENCE: str = "bloqqer-clients"
    JWT_EXPIRE_MINUTES: int = 60

    # ユーザー登録設定
    REGISTRATION_CONFIRMATION_EXPIRE_HOURS: int = 24
    REGISTRATION_CONFIRMATION_URL: str = "http://localhost:3000/register/confirm"

    # CORS設定
    CORS_ORIGINS: list[str] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = True
    CORS_ALLOW_METHODS: list[str] = ["*"]
    CORS_ALLOW_HEADERS: list[str] = ["*"]

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True
    )


settings = Settings()
