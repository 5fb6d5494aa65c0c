from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

# ─── 사용자 관련 요청/응답 스키마 정의 ───────────────────────────────────

class UserSummary(BaseModel):
    """
    피드/댓글/메시지 작성자 표시용 요약 모델
    """
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    fullname: str
    photo_profile: Optional[str] = None


class UserResponse(BaseModel):
    """
    사용자 프로필 응답 모델 (비밀번호 해시 제외)
    """
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="사용자 고유 ID")
    fullname: str = Field(..., description="표시 이름")
    username: str = Field(..., description="사용자 이름")
    email: str = Field(..., description="이메일")
    photo_profile: Optional[str] = Field(None, description="프로필 사진 경로")
    gender: Optional[str] = Field(None, description="성별")
    birth_date: Optional[date] = Field(None, description="생년월일")
    created_at: datetime
    updated_at: datetime


class ProfileUpdateRequest(BaseModel):
    """
    프로필 수정 요청 모델 (multipart form에서 생성)
    - 빈 문자열로 들어온 값은 '변경 없음'으로 취급
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    fullname: Optional[str] = Field(None, max_length=255)
    username: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    gender: Optional[str] = Field(None, max_length=50)
    birth_date: Optional[date] = Field(None, description="YYYY-MM-DD")

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def changes(self) -> dict:
        """
        실제로 값이 들어온 필드만 반환
        """
        return self.model_dump(exclude_none=True)


class PasswordChangeRequest(BaseModel):
    """
    비밀번호 변경 요청 모델
    """
    old_password: str = Field(..., min_length=1, description="현재 비밀번호")
    new_password: str = Field(..., min_length=6, description="새 비밀번호")
