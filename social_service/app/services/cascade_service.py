"""유저/tuit 삭제 시 연관 도큐먼트를 정리하는 cascade 삭제 서비스.

MongoDB 멀티 도큐먼트 트랜잭션 없이 정해진 순서대로 삭제한다. 어느 단계에서든
저장소 오류가 나면 그 시점까지의 삭제는 그대로 두고 StoreUnavailable 로 실패한다.
모든 단계가 "남아 있는 것을 지운다" 이므로 같은 요청을 다시 보내면 정리가 이어진다.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import Depends
from pymongo.errors import PyMongoError

from common.mongo.types import canonical_id

from ..exceptions import Forbidden, NotFound, StoreUnavailable
from ..models.cascade import CascadeCounts, TuitCascadeResult, UserCascadeResult
from ..models.requester import Requester
from ..repositories.factories import (
    get_bookmark_repository,
    get_follow_repository,
    get_like_repository,
    get_tuit_repository,
    get_user_repository,
)
from ..repositories.interfaces import (
    BookmarkRepositoryInterface,
    FollowRepositoryInterface,
    LikeRepositoryInterface,
    TuitRepositoryInterface,
    UserRepositoryInterface,
)
from .locks import KeyedLock, get_cascade_locks


logger = logging.getLogger(__name__)


class CascadeService:
    """cascade 삭제 오케스트레이션.

    - Repository 인터페이스에만 의존한다.
    - 같은 루트 엔티티에 대한 cascade 는 KeyedLock 으로 프로세스 내에서 직렬화한다.
    - 권한/존재 확인은 항상 첫 삭제보다 먼저 끝난다.
    """

    def __init__(
        self,
        user_repo: UserRepositoryInterface,
        tuit_repo: TuitRepositoryInterface,
        bookmark_repo: BookmarkRepositoryInterface,
        like_repo: LikeRepositoryInterface,
        follow_repo: FollowRepositoryInterface,
        locks: KeyedLock | None = None,
    ) -> None:
        self._user_repo = user_repo
        self._tuit_repo = tuit_repo
        self._bookmark_repo = bookmark_repo
        self._like_repo = like_repo
        self._follow_repo = follow_repo
        self._locks = locks or KeyedLock()

    def delete_user(self, requester: Requester, user_id: str) -> UserCascadeResult:
        """유저와 유저를 참조하는 모든 follow/bookmark/like/tuit 을 삭제한다.

        순서:
            1. 유저를 팔로우하는 관계
            2. 유저가 팔로우하는 관계
            3. 유저가 만든 북마크
            4. 유저가 작성한 tuit 조회
            5. 각 tuit 을 참조하는 북마크와 좋아요
            6. 유저가 누른 좋아요
            7. 유저가 작성한 tuit
            8. 유저 도큐먼트
        """

        user_id = requester.resolve(user_id)
        if not requester.can_act_for(user_id):
            raise Forbidden("only the user or an admin can delete this user")

        with self._locks.hold(f"user:{user_id}"):
            with self._step("user", user_id, "lookup"):
                user = self._user_repo.find_by_id(user_id)
            if user is None:
                raise NotFound("user not found")

            self._log_started("user", user_id, requester)
            counts = CascadeCounts()

            with self._step("user", user_id, "followers"):
                for follow in self._follow_repo.find_followers(user_id):
                    if self._follow_repo.delete(follow.user_following, follow.user_followed):
                        counts.follows += 1

            with self._step("user", user_id, "following"):
                for follow in self._follow_repo.find_following(user_id):
                    if self._follow_repo.delete(follow.user_following, follow.user_followed):
                        counts.follows += 1

            with self._step("user", user_id, "bookmarks"):
                for bookmark in self._bookmark_repo.find_all_by_user(user_id):
                    if self._bookmark_repo.delete(
                        bookmark.bookmarked_tuit, bookmark.bookmarked_by
                    ):
                        counts.bookmarks += 1

            with self._step("user", user_id, "tuits_lookup"):
                tuits = self._tuit_repo.find_by_author(user_id)

            for tuit in tuits:
                assert tuit.id is not None
                self._purge_tuit_references("user", user_id, tuit.id, counts)

            with self._step("user", user_id, "likes"):
                counts.likes += self._like_repo.delete_by_user(user_id)

            with self._step("user", user_id, "tuits"):
                counts.tuits += self._tuit_repo.delete_by_author(user_id)

            with self._step("user", user_id, "user"):
                deleted = self._user_repo.delete_by_id(user_id)
            if not deleted:
                # 다른 프로세스가 먼저 지운 경우. 연관 도큐먼트 정리는 이미 끝났다.
                logger.warning(
                    "user vanished during cascade",
                    extra={"cascade": "user", "root_id": user_id},
                )
                raise NotFound("user not found")

            self._log_completed("user", user_id, counts)
            return UserCascadeResult(user=user, deleted=counts)

    def delete_users_by_username(
        self, requester: Requester, username: str
    ) -> list[UserCascadeResult]:
        """username 이 일치하는 모든 유저를 cascade 삭제한다. (관리자 전용)"""

        if not requester.is_admin:
            raise Forbidden("only an admin can delete users by username")

        with self._step("user", username, "lookup"):
            users = self._user_repo.find_by_username(username)

        results: list[UserCascadeResult] = []
        for user in users:
            assert user.id is not None
            results.append(self.delete_user(requester, user.id))
        return results

    def delete_tuit(self, requester: Requester, tuit_id: str) -> TuitCascadeResult:
        """tuit 한 건과 그 tuit 을 참조하는 북마크/좋아요를 삭제한다.

        작성자의 다른 tuit 은 건드리지 않는다. 작성자 단위 삭제는
        delete_tuits_by_author 를 사용한다.
        """

        tuit_id = canonical_id(tuit_id)
        with self._locks.hold(f"tuit:{tuit_id}"):
            with self._step("tuit", tuit_id, "lookup"):
                tuit = self._tuit_repo.find_by_id(tuit_id)
                author = (
                    self._user_repo.find_by_id(tuit.posted_by)
                    if tuit is not None and tuit.posted_by
                    else None
                )
            if tuit is None:
                raise NotFound("tuit not found")
            if author is None:
                raise NotFound("tuit author not found")
            if not requester.can_act_for(tuit.posted_by):
                raise Forbidden("only the author or an admin can delete this tuit")

            self._log_started("tuit", tuit_id, requester)
            counts = CascadeCounts()

            self._purge_tuit_references("tuit", tuit_id, tuit_id, counts)

            with self._step("tuit", tuit_id, "tuit"):
                if self._tuit_repo.delete_by_id(tuit_id):
                    counts.tuits += 1

            self._log_completed("tuit", tuit_id, counts)
            return TuitCascadeResult(tuit=tuit, author_id=tuit.posted_by, deleted=counts)

    def delete_tuits_by_author(
        self, requester: Requester, author_id: str
    ) -> TuitCascadeResult:
        """작성자의 모든 tuit 과 그 tuit 들을 참조하는 북마크/좋아요를 삭제한다.

        작성자 본인이 다른 유저의 tuit 에 남긴 북마크/좋아요는 유지한다.
        """

        author_id = requester.resolve(author_id)
        if not requester.can_act_for(author_id):
            raise Forbidden("only the author or an admin can delete these tuits")

        with self._locks.hold(f"author-tuits:{author_id}"):
            with self._step("author_tuits", author_id, "lookup"):
                author = self._user_repo.find_by_id(author_id)
            if author is None:
                raise NotFound("user not found")

            self._log_started("author_tuits", author_id, requester)
            counts = CascadeCounts()

            with self._step("author_tuits", author_id, "tuits_lookup"):
                tuits = self._tuit_repo.find_by_author(author_id)

            for tuit in tuits:
                assert tuit.id is not None
                self._purge_tuit_references("author_tuits", author_id, tuit.id, counts)

            with self._step("author_tuits", author_id, "tuits"):
                counts.tuits += self._tuit_repo.delete_by_author(author_id)

            self._log_completed("author_tuits", author_id, counts)
            return TuitCascadeResult(author_id=author_id, deleted=counts)

    # --- helpers -----------------------------------------------------------------
    def _purge_tuit_references(
        self, cascade: str, root_id: str, tuit_id: str, counts: CascadeCounts
    ) -> None:
        """tuit 을 참조하는 북마크, 좋아요 순서로 삭제한다."""

        with self._step(cascade, root_id, "tuit_bookmarks"):
            counts.bookmarks += self._bookmark_repo.delete_by_tuit(tuit_id)
        with self._step(cascade, root_id, "tuit_likes"):
            counts.likes += self._like_repo.delete_by_tuit(tuit_id)

    @contextmanager
    def _step(self, cascade: str, root_id: str, step: str) -> Iterator[None]:
        try:
            yield
        except PyMongoError as exc:
            logger.error(
                "cascade step failed, earlier steps are not rolled back",
                extra={"cascade": cascade, "root_id": root_id, "step": step},
                exc_info=True,
            )
            raise StoreUnavailable(
                f"{cascade} cascade failed at step '{step}'"
            ) from exc

    @staticmethod
    def _log_started(cascade: str, root_id: str, requester: Requester) -> None:
        logger.info(
            "cascade started",
            extra={
                "cascade": cascade,
                "root_id": root_id,
                "requester_id": requester.user_id,
            },
        )

    @staticmethod
    def _log_completed(cascade: str, root_id: str, counts: CascadeCounts) -> None:
        logger.info(
            "cascade completed",
            extra={
                "cascade": cascade,
                "root_id": root_id,
                "deleted": counts.model_dump(),
            },
        )


def get_cascade_service(
    user_repo: UserRepositoryInterface = Depends(get_user_repository),
    tuit_repo: TuitRepositoryInterface = Depends(get_tuit_repository),
    bookmark_repo: BookmarkRepositoryInterface = Depends(get_bookmark_repository),
    like_repo: LikeRepositoryInterface = Depends(get_like_repository),
    follow_repo: FollowRepositoryInterface = Depends(get_follow_repository),
    locks: KeyedLock = Depends(get_cascade_locks),
) -> CascadeService:
    """FastAPI DI용 CascadeService 팩토리."""

    return CascadeService(
        user_repo=user_repo,
        tuit_repo=tuit_repo,
        bookmark_repo=bookmark_repo,
        like_repo=like_repo,
        follow_repo=follow_repo,
        locks=locks,
    )
