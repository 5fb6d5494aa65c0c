from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from social_backend.core.database import get_db_session
from social_backend.dependencies import get_current_user
from social_backend.models.user import User
from social_backend.routers.serializers import to_user_summary
from social_backend.schemas.auth_schema import MessageResponse
from social_backend.schemas.user_schema import UserSummary
from social_backend.services.follow_service import FollowService

router = APIRouter(tags=["Follow"])


@router.post(
    "/follow/{user_id}",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def follow_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    """
    사용자 팔로우
    - 이미 팔로우 중이면 409, 자기 자신이면 400
    """
    target = await FollowService(db).follow(current_user, user_id)
    return MessageResponse(message=f"{target.username}님을 팔로우했습니다.")


@router.delete("/follow/{user_id}", response_model=MessageResponse)
async def unfollow_user(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    """
    사용자 언팔로우 (팔로우 관계가 없어도 성공)
    """
    target = await FollowService(db).unfollow(current_user, user_id)
    return MessageResponse(message=f"{target.username}님을 언팔로우했습니다.")


@router.get("/followers", response_model=List[UserSummary])
async def list_followers(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[UserSummary]:
    users = await FollowService(db).list_followers(current_user)
    return [to_user_summary(user) for user in users]


@router.get("/following", response_model=List[UserSummary])
async def list_following(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[UserSummary]:
    users = await FollowService(db).list_following(current_user)
    return [to_user_summary(user) for user in users]
