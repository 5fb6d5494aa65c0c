"""
JWT 블랙리스트 모듈

서버 메모리 기반으로 JWT ID(jti)를 관리
- 로그아웃 시 jti를 블랙리스트에 추가하여 토큰을 무효화.
- 인증 처리 시 블랙리스트에 등재된 jti는 인증 거부 대상

단일 인스턴스 서비스 기준이므로 재시작하면 초기화됨
"""

from typing import Set

# 서버 메모리에 저장되는 JWT 블랙리스트
jwt_blocklist: Set[str] = set()
