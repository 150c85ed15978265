from __future__ import annotations

from fastapi import APIRouter, Depends

from ..dependencies import get_requester
from ..schemas.common import MessageResponse
from ..schemas.relations import FollowResponse
from ..schemas.users import UserResponse
from ...models.requester import Requester
from ...services.follows_service import FollowsService, get_follows_service


router = APIRouter()


@router.get(
    "/{user_id}/following",
    response_model=list[UserResponse],
    summary="유저가 팔로우하는 유저 목록",
)
def list_following(
    user_id: str,
    requester: Requester = Depends(get_requester),
    service: FollowsService = Depends(get_follows_service),
) -> list[UserResponse]:
    return [UserResponse.from_domain(u) for u in service.following(requester, user_id)]


@router.get(
    "/{user_id}/followers",
    response_model=list[UserResponse],
    summary="유저를 팔로우하는 유저 목록",
)
def list_followers(
    user_id: str,
    requester: Requester = Depends(get_requester),
    service: FollowsService = Depends(get_follows_service),
) -> list[UserResponse]:
    return [UserResponse.from_domain(u) for u in service.followers(requester, user_id)]


@router.post(
    "/{user_id}/follows/{followed_id}",
    response_model=FollowResponse,
    summary="유저 팔로우",
)
def follow_user(
    user_id: str,
    followed_id: str,
    requester: Requester = Depends(get_requester),
    service: FollowsService = Depends(get_follows_service),
) -> FollowResponse:
    return FollowResponse.from_domain(service.follow(requester, user_id, followed_id))


@router.delete(
    "/{user_id}/follows/{followed_id}",
    response_model=MessageResponse,
    summary="유저 언팔로우",
)
def unfollow_user(
    user_id: str,
    followed_id: str,
    requester: Requester = Depends(get_requester),
    service: FollowsService = Depends(get_follows_service),
) -> MessageResponse:
    service.unfollow(requester, user_id, followed_id)
    return MessageResponse(message="follow_deleted")
