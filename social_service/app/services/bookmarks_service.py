from __future__ import annotations

from fastapi import Depends

from common.mongo.types import canonical_id

from ..exceptions import Forbidden, NotFound
from ..models.bookmark import Bookmark, BookmarkToggleResult
from ..models.requester import Requester
from ..models.tuit import Tuit
from ..repositories.factories import (
    get_bookmark_repository,
    get_tuit_repository,
    get_user_repository,
)
from ..repositories.interfaces import (
    BookmarkRepositoryInterface,
    TuitRepositoryInterface,
    UserRepositoryInterface,
)
from .locks import KeyedLock, get_cascade_locks


class BookmarksService:
    """유저 북마크 관리 비즈니스 로직.

    - 북마크는 유저와 tuit 이 모두 존재할 때만 생성한다.
    - 변경은 본인 또는 관리자만 할 수 있다.
    """

    def __init__(
        self,
        bookmark_repo: BookmarkRepositoryInterface,
        user_repo: UserRepositoryInterface,
        tuit_repo: TuitRepositoryInterface,
        locks: KeyedLock | None = None,
    ) -> None:
        self._repo = bookmark_repo
        self._user_repo = user_repo
        self._tuit_repo = tuit_repo
        self._locks = locks or KeyedLock()

    def list_bookmarked_tuits(self, requester: Requester, user_id: str) -> list[Tuit]:
        """유저가 북마크한 tuit 목록을 북마크 최신순으로 반환한다."""

        bookmarks = self._repo.find_all_by_user(requester.resolve(user_id))
        return self._tuit_repo.find_by_ids([b.bookmarked_tuit for b in bookmarks])

    def bookmark(self, requester: Requester, user_id: str, tuit_id: str) -> Bookmark:
        """북마크를 생성한다. 이미 존재하면 에러 없이 동일 엔티티를 반환한다."""

        user_id = self._authorize(requester, user_id)
        user_id, tuit_id = self._load_target_ids(user_id, canonical_id(tuit_id))
        return self._repo.create(user_id=user_id, tuit_id=tuit_id)

    def unbookmark(self, requester: Requester, user_id: str, tuit_id: str) -> None:
        user_id = self._authorize(requester, user_id)
        if not self._repo.delete(tuit_id=canonical_id(tuit_id), user_id=user_id):
            raise NotFound("bookmark not found")

    def toggle(
        self, requester: Requester, user_id: str, tuit_id: str
    ) -> BookmarkToggleResult:
        """북마크가 있으면 지우고, 없으면 만든다.

        같은 (유저, tuit) 쌍에 대한 토글은 프로세스 안에서 직렬화되고, 프로세스 간
        경쟁은 유니크 인덱스 + upsert 생성으로 중복 없이 끝난다.
        """

        user_id = self._authorize(requester, user_id)
        tuit_id = canonical_id(tuit_id)

        with self._locks.hold(f"bookmark:{user_id}:{tuit_id}"):
            user_id, tuit_id = self._load_target_ids(user_id, tuit_id)
            if self._repo.find_one(user_id, tuit_id) is not None:
                self._repo.delete(tuit_id=tuit_id, user_id=user_id)
                return BookmarkToggleResult(bookmarked=False)

            created = self._repo.create(user_id=user_id, tuit_id=tuit_id)
            return BookmarkToggleResult(bookmarked=True, bookmark=created)

    @staticmethod
    def _authorize(requester: Requester, user_id: str) -> str:
        user_id = requester.resolve(user_id)
        if not requester.can_act_for(user_id):
            raise Forbidden("only the user or an admin can change these bookmarks")
        return user_id

    def _load_target_ids(self, user_id: str, tuit_id: str) -> tuple[str, str]:
        """유저와 tuit 이 존재하는지 확인하고, 저장된 id 를 돌려준다."""

        user = self._user_repo.find_by_id(user_id)
        if user is None or user.id is None:
            raise NotFound("user not found")
        tuit = self._tuit_repo.find_by_id(tuit_id)
        if tuit is None or tuit.id is None:
            raise NotFound("tuit not found")
        return user.id, tuit.id


def get_bookmarks_service(
    bookmark_repo: BookmarkRepositoryInterface = Depends(get_bookmark_repository),
    user_repo: UserRepositoryInterface = Depends(get_user_repository),
    tuit_repo: TuitRepositoryInterface = Depends(get_tuit_repository),
    locks: KeyedLock = Depends(get_cascade_locks),
) -> BookmarksService:
    """FastAPI DI용 BookmarksService 팩토리."""

    return BookmarksService(
        bookmark_repo=bookmark_repo,
        user_repo=user_repo,
        tuit_repo=tuit_repo,
        locks=locks,
    )
