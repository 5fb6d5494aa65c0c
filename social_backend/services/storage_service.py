import logging
import re
import uuid
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from social_backend.utils.exceptions import StorageError

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class FileStorage:
    """
    업로드 파일 저장소
    - upload_dir 아래에 파일을 저장하고, DB에 기록할 경로(ref)를 반환
    - ref는 "<upload_dir>/<파일명>" 형태로 /public 정적 경로와 대응
    """
    def __init__(self, upload_dir: str):
        self.upload_dir = Path(upload_dir)

    @staticmethod
    def is_present(upload: Optional[UploadFile]) -> bool:
        """
        파일 파트가 실제 파일을 담고 있는지 (빈 파일 입력 제외)
        """
        return upload is not None and bool(upload.filename)

    def _unique_name(self, filename: str) -> str:
        """
        타임스탬프 + 랜덤 접미사를 붙인 안전한 파일명 생성
        """
        base = _UNSAFE_CHARS.sub("_", Path(filename).name).strip("._") or "file"
        stamp = datetime.now().strftime("%Y%m%d%H%M%S")
        return f"{stamp}_{uuid.uuid4().hex[:8]}_{base}"

    def _write(self, path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    async def save(self, upload: UploadFile) -> str:
        """
        업로드 파일을 디스크에 기록하고 ref 반환
        Raises:
            StorageError: 파일 쓰기 실패
        """
        name = self._unique_name(upload.filename or "")
        path = self.upload_dir / name
        data = await upload.read()
        try:
            await run_in_threadpool(self._write, path, data)
        except OSError as e:
            logger.error("파일 저장 실패 (%s): %s", path, e)
            raise StorageError("파일을 저장하지 못했습니다.") from e
        logger.info("파일 저장 완료: %s (%d bytes)", path, len(data))
        return path.as_posix()

    async def save_many(self, uploads: Iterable[UploadFile]) -> List[str]:
        """
        여러 파일을 순서대로 저장
        - 중간에 실패하면 이미 저장한 파일을 정리하고 예외를 다시 발생
        """
        saved: List[str] = []
        try:
            for upload in uploads:
                if self.is_present(upload):
                    saved.append(await self.save(upload))
        except StorageError:
            await self.discard(saved)
            raise
        return saved

    async def discard(self, refs: Iterable[str]) -> None:
        """
        저장된 파일을 최대한 삭제 (실패는 로그만 남김)
        """
        for ref in refs:
            if not ref:
                continue
            try:
                await run_in_threadpool(Path(ref).unlink, True)
                logger.info("파일 정리 완료: %s", ref)
            except OSError as e:
                logger.warning("파일 정리 실패 (%s): %s", ref, e)
