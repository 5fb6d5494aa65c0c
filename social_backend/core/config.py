from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, ValidationInfo, field_validator
from pathlib import Path
from functools import lru_cache
from typing import List, Optional

# 패키지 루트 디렉토리
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """
    애플리케이션 환경 설정 모델
    - 환경 변수 및 config/settings.env 파일을 자동 로드
    """
    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / "config" / "settings.env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Security & JWT
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRES_MINUTES: int = Field(
        60 * 72,
        description="액세스 토큰 만료 시간(분)",
    )
    BCRYPT_ROUNDS: int = Field(
        12,
        ge=4,
        le=31,
        description="bcrypt 해시 cost",
    )

    # Database
    DB_USER:     str = "root"
    DB_PASSWORD: str = ""
    DB_HOST:     str = "127.0.0.1"
    DB_PORT:     int = 3306
    DB_NAME:     str = "sosmed"
    DATABASE_URL: Optional[str] = Field(
        None,
        description="전체 DB 연결 URL (우선순위: env > 자동 조합)",
        validate_default=True,
    )

    # 첨부파일
    PUBLIC_DIR: str = Field(
        "public",
        description="/public 경로로 서빙되는 정적 파일 디렉토리",
    )
    UPLOAD_DIR: str = Field(
        "public/uploads",
        description="업로드 파일 저장 디렉토리 (PUBLIC_DIR 하위)",
    )
    DEFAULT_PHOTO_PROFILE: str = "public/default/images/user.png"

    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
    ]

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def _assemble_database_url(cls, v: Optional[str], info: ValidationInfo) -> str:
        """
        DATABASE_URL이 설정되어 있으면 그대로 사용하고, 없으면 개별 DB 설정값으로 URL을 조합
        """
        if v:
            return v
        values = info.data
        user = values.get("DB_USER")
        pw   = values.get("DB_PASSWORD")
        host = values.get("DB_HOST")
        port = values.get("DB_PORT")
        name = values.get("DB_NAME")
        return f"mysql+asyncmy://{user}:{pw}@{host}:{port}/{name}?charset=utf8mb4"

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """
        SQLAlchemy가 기대하는 이름의 DB 연결 문자열을 반환
        """
        return self.DATABASE_URL  # 항상 존재함


@lru_cache()
def get_settings() -> Settings:
    """
    Settings 인스턴스를 싱글톤으로 반환
    최초 호출 시 객체를 생성하고, 이후 캐싱된 인스턴스를 반환
    """
    return Settings()

# 전역 설정 인스턴스
settings = get_settings()
