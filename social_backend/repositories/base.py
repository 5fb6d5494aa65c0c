import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from social_backend.repositories.exceptions import DatabaseCommitError
from social_backend.utils.exceptions import ConflictError

logger = logging.getLogger(__name__)


class BaseRepository:
    """Repository 베이스 클래스"""

    def __init__(self, session: AsyncSession):
        """
        session: 비동기 SQLAlchemy 세션
        """
        self.session = session

    async def commit(self, conflict_message: Optional[str] = None) -> None:
        """
        트랜잭션 커밋 (예외 처리 포함)
        - 제약조건 위반은 conflict_message가 주어지면 ConflictError로 변환
        - 그 외 DB 오류는 롤백 후 DatabaseCommitError
        """
        try:
            await self.session.commit()
            logger.debug("DB 커밋 성공")
        except IntegrityError as e:
            await self.session.rollback()
            if conflict_message:
                logger.warning("제약조건 위반으로 커밋 취소: %s", e.orig)
                raise ConflictError(conflict_message) from e
            logger.error("DB 커밋 실패: %s", e)
            raise DatabaseCommitError(f"DB 커밋 중 오류 발생: {e.orig}") from e
        except SQLAlchemyError as e:
            logger.error("DB 커밋 실패: %s", e)
            await self.session.rollback()
            raise DatabaseCommitError(f"DB 커밋 중 오류 발생: {e}") from e

    async def flush(self) -> None:
        """
        커밋 전 중간 flush (자동 생성 ID 확보, 삭제 선반영 등)
        """
        try:
            await self.session.flush()
        except SQLAlchemyError as e:
            logger.error("DB flush 실패: %s", e)
            await self.session.rollback()
            raise DatabaseCommitError(f"DB 반영 중 오류 발생: {e}") from e
