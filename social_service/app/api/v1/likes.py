from __future__ import annotations

from fastapi import APIRouter, Depends

from ..dependencies import get_requester
from ..schemas.common import MessageResponse
from ..schemas.relations import LikeResponse
from ..schemas.tuits import TuitResponse
from ..schemas.users import UserResponse
from ...models.requester import Requester
from ...services.likes_service import LikesService, get_likes_service


router = APIRouter()


@router.get(
    "/tuits/{tuit_id}/likes",
    response_model=list[UserResponse],
    summary="tuit 에 좋아요를 누른 유저 목록",
)
def list_users_who_liked(
    tuit_id: str,
    _: Requester = Depends(get_requester),
    service: LikesService = Depends(get_likes_service),
) -> list[UserResponse]:
    return [UserResponse.from_domain(u) for u in service.users_who_liked(tuit_id)]


@router.get(
    "/users/{user_id}/likes",
    response_model=list[TuitResponse],
    summary="유저가 좋아요한 tuit 목록",
)
def list_liked_tuits(
    user_id: str,
    requester: Requester = Depends(get_requester),
    service: LikesService = Depends(get_likes_service),
) -> list[TuitResponse]:
    return [TuitResponse.from_domain(t) for t in service.tuits_liked_by(requester, user_id)]


@router.post(
    "/users/{user_id}/likes/{tuit_id}",
    response_model=LikeResponse,
    summary="tuit 좋아요",
)
def like_tuit(
    user_id: str,
    tuit_id: str,
    requester: Requester = Depends(get_requester),
    service: LikesService = Depends(get_likes_service),
) -> LikeResponse:
    return LikeResponse.from_domain(service.like(requester, user_id, tuit_id))


@router.delete(
    "/users/{user_id}/likes/{tuit_id}",
    response_model=MessageResponse,
    summary="tuit 좋아요 취소",
)
def unlike_tuit(
    user_id: str,
    tuit_id: str,
    requester: Requester = Depends(get_requester),
    service: LikesService = Depends(get_likes_service),
) -> MessageResponse:
    service.unlike(requester, user_id, tuit_id)
    return MessageResponse(message="like_deleted")
