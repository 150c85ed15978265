from __future__ import annotations

from fastapi import Depends

from common.models.user import User
from common.mongo.types import canonical_id

from ..exceptions import Forbidden, NotFound
from ..models.like import Like
from ..models.requester import Requester
from ..models.tuit import Tuit
from ..repositories.factories import (
    get_like_repository,
    get_tuit_repository,
    get_user_repository,
)
from ..repositories.interfaces import (
    LikeRepositoryInterface,
    TuitRepositoryInterface,
    UserRepositoryInterface,
)


class LikesService:
    """좋아요 관리 비즈니스 로직."""

    def __init__(
        self,
        like_repo: LikeRepositoryInterface,
        user_repo: UserRepositoryInterface,
        tuit_repo: TuitRepositoryInterface,
    ) -> None:
        self._repo = like_repo
        self._user_repo = user_repo
        self._tuit_repo = tuit_repo

    def users_who_liked(self, tuit_id: str) -> list[User]:
        likes = self._repo.find_all_by_tuit(canonical_id(tuit_id))
        return self._user_repo.find_by_ids([like.liked_by for like in likes])

    def tuits_liked_by(self, requester: Requester, user_id: str) -> list[Tuit]:
        likes = self._repo.find_all_by_user(requester.resolve(user_id))
        return self._tuit_repo.find_by_ids([like.tuit for like in likes])

    def like(self, requester: Requester, user_id: str, tuit_id: str) -> Like:
        user_id = self._authorize(requester, user_id)
        user = self._user_repo.find_by_id(user_id)
        if user is None or user.id is None:
            raise NotFound("user not found")
        tuit = self._tuit_repo.find_by_id(canonical_id(tuit_id))
        if tuit is None or tuit.id is None:
            raise NotFound("tuit not found")
        return self._repo.create(user_id=user.id, tuit_id=tuit.id)

    def unlike(self, requester: Requester, user_id: str, tuit_id: str) -> None:
        user_id = self._authorize(requester, user_id)
        if not self._repo.delete(tuit_id=canonical_id(tuit_id), user_id=user_id):
            raise NotFound("like not found")

    @staticmethod
    def _authorize(requester: Requester, user_id: str) -> str:
        user_id = requester.resolve(user_id)
        if not requester.can_act_for(user_id):
            raise Forbidden("only the user or an admin can change these likes")
        return user_id


def get_likes_service(
    like_repo: LikeRepositoryInterface = Depends(get_like_repository),
    user_repo: UserRepositoryInterface = Depends(get_user_repository),
    tuit_repo: TuitRepositoryInterface = Depends(get_tuit_repository),
) -> LikesService:
    """FastAPI DI용 LikesService 팩토리."""

    return LikesService(like_repo=like_repo, user_repo=user_repo, tuit_repo=tuit_repo)
