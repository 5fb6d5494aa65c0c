from datetime import date

from sqlalchemy import Column, Date, Integer, String

from social_backend.core.database import Base
from social_backend.models.mixins import SoftDeleteMixin, TimestampMixin


class User(TimestampMixin, SoftDeleteMixin, Base):
    """
    서비스 사용자(User) 모델
    - 로그인 자격 증명과 프로필 정보를 저장
    - 피드/댓글/메시지/팔로우/채팅방 멤버십은 각 테이블에서 user_id로 참조
    - 탈퇴 시 soft delete 되어 기존 게시물의 참조 이력은 유지
    """
    __tablename__ = "users"

    id: int = Column(
        Integer,
        primary_key=True,
        index=True,
        doc="사용자 고유 ID"
    )
    fullname: str = Column(
        String(255),
        nullable=False,
        default="",
        doc="표시 이름"
    )
    username: str = Column(
        String(100),
        unique=True,
        nullable=False,
        doc="서비스 내 사용자 이름(로그인 ID)"
    )
    email: str = Column(
        String(100),
        unique=True,
        nullable=False,
        doc="사용자 이메일(로그인 ID)"
    )
    password: str = Column(
        String(255),
        nullable=False,
        doc="해시 처리된 비밀번호"
    )
    photo_profile: str = Column(
        String(255),
        nullable=True,
        doc="프로필 사진 첨부파일 경로"
    )
    gender: str = Column(
        String(50),
        nullable=True,
        doc="성별"
    )
    birth_date: date = Column(
        Date,
        nullable=True,
        doc="생년월일"
    )
