from pydantic import BaseModel, EmailStr, Field
from pydantic import ConfigDict

# ─── 인증 관련 요청/응답 스키마 정의 ─────────────────────────────────────

class RegisterRequest(BaseModel):
    """
    회원가입 요청 모델
    - 표시 이름, 유저명, 이메일, 비밀번호를 포함
    """
    model_config = ConfigDict(
        extra="ignore",
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "fullname": "Budi Santoso",
                "username": "budi",
                "email":    "budi@example.com",
                "password": "securepassword",
            }
        },
    )

    fullname: str      = Field(..., min_length=1, max_length=255, description="표시 이름")
    username: str      = Field(..., min_length=1, max_length=100, description="사용자 이름")
    email:    EmailStr = Field(..., description="이메일 주소")
    password: str      = Field(..., min_length=6, description="비밀번호")


class LoginRequest(BaseModel):
    """
    로그인 요청 모델
    - login 필드에는 이메일 또는 username 모두 사용 가능
    """
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)
    login:    str = Field(..., min_length=1, description="이메일 또는 username")
    password: str = Field(..., min_length=1, description="비밀번호")


class TokenResponse(BaseModel):
    """
    인증 토큰 응답 모델
    """
    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "message": "로그인 성공",
                "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "token_type": "bearer"
            }
        },
    )

    message: str = Field(..., description="응답 메시지")
    access_token: str = Field(..., description="Access Token")
    token_type: str = Field(default="bearer", description="토큰 타입 (기본 bearer)")


class MessageResponse(BaseModel):
    """
    단순 메시지 응답 모델
    - API 처리 결과를 간단한 메시지로 반환할 때 사용
    """
    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {"message": "Operation successful"}
        },
    )

    message: str = Field(..., description="응답 메시지")
