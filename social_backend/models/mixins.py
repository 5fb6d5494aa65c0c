from datetime import datetime, timezone

from sqlalchemy import Column, DateTime


def utcnow() -> datetime:
    """
    DB에 저장할 UTC 기준 naive datetime 반환
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


# 믹스인 컬럼에는 타입 어노테이션을 달지 않음 (SQLAlchemy 2.x declarative가 Mapped[]로 해석하려 함)
class TimestampMixin:
    """
    생성/수정 시각 컬럼
    - 서버 기본값 대신 파이썬 측 기본값을 사용해 flush 후에도 속성이 만료되지 않게 함
    """
    created_at = Column(
        DateTime,
        nullable=False,
        default=utcnow,
        doc="생성 시각(UTC)"
    )
    updated_at = Column(
        DateTime,
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        doc="마지막 수정 시각(UTC)"
    )


class SoftDeleteMixin:
    """
    soft delete 지원 컬럼
    - deleted_at이 설정된 행은 이후 조회에서 제외
    """
    deleted_at = Column(
        DateTime,
        nullable=True,
        index=True,
        doc="삭제 처리 시각(UTC), NULL이면 활성 상태"
    )

    def soft_delete(self) -> None:
        self.deleted_at = utcnow()
