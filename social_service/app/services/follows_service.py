from __future__ import annotations

from fastapi import Depends

from common.models.user import User

from ..exceptions import BadRequest, Forbidden, NotFound
from ..models.follow import Follow
from ..models.requester import Requester
from ..repositories.factories import get_follow_repository, get_user_repository
from ..repositories.interfaces import FollowRepositoryInterface, UserRepositoryInterface


class FollowsService:
    """팔로우 관계 관리 비즈니스 로직.

    - 관계는 방향성이 있다: follower 가 followed 를 팔로우한다.
    - 자기 자신은 팔로우할 수 없다.
    """

    def __init__(
        self,
        follow_repo: FollowRepositoryInterface,
        user_repo: UserRepositoryInterface,
    ) -> None:
        self._repo = follow_repo
        self._user_repo = user_repo

    def following(self, requester: Requester, user_id: str) -> list[User]:
        """user_id 가 팔로우하는 유저 목록."""

        follows = self._repo.find_following(requester.resolve(user_id))
        return self._user_repo.find_by_ids([f.user_followed for f in follows])

    def followers(self, requester: Requester, user_id: str) -> list[User]:
        """user_id 를 팔로우하는 유저 목록."""

        follows = self._repo.find_followers(requester.resolve(user_id))
        return self._user_repo.find_by_ids([f.user_following for f in follows])

    def follow(self, requester: Requester, user_id: str, followed_id: str) -> Follow:
        user_id = self._authorize(requester, user_id)
        followed_id = requester.resolve(followed_id)
        if user_id == followed_id:
            raise BadRequest("users cannot follow themselves")
        follower = self._user_repo.find_by_id(user_id)
        if follower is None or follower.id is None:
            raise NotFound("user not found")
        followed = self._user_repo.find_by_id(followed_id)
        if followed is None or followed.id is None:
            raise NotFound("followed user not found")
        return self._repo.create(follower_id=follower.id, followed_id=followed.id)

    def unfollow(self, requester: Requester, user_id: str, followed_id: str) -> None:
        user_id = self._authorize(requester, user_id)
        followed_id = requester.resolve(followed_id)
        if not self._repo.delete(follower_id=user_id, followed_id=followed_id):
            raise NotFound("follow not found")

    @staticmethod
    def _authorize(requester: Requester, user_id: str) -> str:
        user_id = requester.resolve(user_id)
        if not requester.can_act_for(user_id):
            raise Forbidden("only the user or an admin can change these follows")
        return user_id


def get_follows_service(
    follow_repo: FollowRepositoryInterface = Depends(get_follow_repository),
    user_repo: UserRepositoryInterface = Depends(get_user_repository),
) -> FollowsService:
    """FastAPI DI용 FollowsService 팩토리."""

    return FollowsService(follow_repo=follow_repo, user_repo=user_repo)
