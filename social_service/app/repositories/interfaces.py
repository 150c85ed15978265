from __future__ import annotations

from typing import Any, Protocol

from common.models.user import User

from ..models.bookmark import Bookmark
from ..models.follow import Follow
from ..models.like import Like
from ..models.tuit import Tuit


class UserRepositoryInterface(Protocol):
    """UserRepository가 따라야 할 최소한의 계약.

    Service 레이어는 이 인터페이스에만 의존하고, 구체 구현(Mongo 등)은 몰라도 된다.
    """

    def find_by_id(self, user_id: str) -> User | None:  # pragma: no cover - Protocol
        ...

    def find_by_ids(self, user_ids: list[str]) -> list[User]:  # pragma: no cover - Protocol
        """주어진 id 중 존재하는 유저만 입력 순서대로 반환한다."""
        ...

    def find_by_username(
        self, username: str
    ) -> list[User]:  # pragma: no cover - Protocol
        ...

    def find_by_email(self, email: str) -> list[User]:  # pragma: no cover - Protocol
        ...

    def insert(self, user: User) -> User:  # pragma: no cover - Protocol
        ...

    def update_fields(
        self, user_id: str, updates: dict[str, Any]
    ) -> User | None:  # pragma: no cover - Protocol
        ...

    def delete_by_id(self, user_id: str) -> bool:  # pragma: no cover - Protocol
        ...

    def list(
        self, page: int, page_size: int
    ) -> tuple[list[User], int]:  # pragma: no cover - Protocol
        ...


class TuitRepositoryInterface(Protocol):
    def find_by_id(self, tuit_id: str) -> Tuit | None:  # pragma: no cover - Protocol
        ...

    def find_by_ids(self, tuit_ids: list[str]) -> list[Tuit]:  # pragma: no cover - Protocol
        """주어진 id 중 존재하는 tuit 만 입력 순서대로 반환한다."""
        ...

    def find_by_author(self, user_id: str) -> list[Tuit]:  # pragma: no cover - Protocol
        ...

    def insert(self, tuit: Tuit) -> Tuit:  # pragma: no cover - Protocol
        ...

    def update_text(
        self, tuit_id: str, text: str
    ) -> Tuit | None:  # pragma: no cover - Protocol
        ...

    def delete_by_id(self, tuit_id: str) -> bool:  # pragma: no cover - Protocol
        ...

    def delete_by_author(self, user_id: str) -> int:  # pragma: no cover - Protocol
        """작성자의 모든 tuit 을 삭제하고 삭제된 개수를 반환한다."""
        ...

    def list(
        self, page: int, page_size: int
    ) -> tuple[list[Tuit], int]:  # pragma: no cover - Protocol
        ...


class BookmarkRepositoryInterface(Protocol):
    """BookmarkRepository가 따라야 할 최소한의 계약.

    - user_id + tuit_id 조합으로 유니크하게 북마크를 관리한다.
    """

    def find_one(
        self, user_id: str, tuit_id: str
    ) -> Bookmark | None:  # pragma: no cover - Protocol
        ...

    def find_all_by_user(
        self, user_id: str
    ) -> list[Bookmark]:  # pragma: no cover - Protocol
        ...

    def create(
        self, user_id: str, tuit_id: str
    ) -> Bookmark:  # pragma: no cover - Protocol
        ...

    def delete(self, tuit_id: str, user_id: str) -> bool:  # pragma: no cover - Protocol
        ...

    def delete_by_tuit(self, tuit_id: str) -> int:  # pragma: no cover - Protocol
        """tuit 을 참조하는 모든 북마크를 삭제하고 삭제된 개수를 반환한다."""
        ...


class LikeRepositoryInterface(Protocol):
    def find_all_by_user(self, user_id: str) -> list[Like]:  # pragma: no cover - Protocol
        ...

    def find_all_by_tuit(self, tuit_id: str) -> list[Like]:  # pragma: no cover - Protocol
        ...

    def create(self, user_id: str, tuit_id: str) -> Like:  # pragma: no cover - Protocol
        ...

    def delete(self, tuit_id: str, user_id: str) -> bool:  # pragma: no cover - Protocol
        ...

    def delete_by_tuit(self, tuit_id: str) -> int:  # pragma: no cover - Protocol
        ...

    def delete_by_user(self, user_id: str) -> int:  # pragma: no cover - Protocol
        ...


class FollowRepositoryInterface(Protocol):
    """FollowRepository가 따라야 할 최소한의 계약.

    - find_followers: user_id 를 팔로우하는 관계 목록 (user_followed == user_id)
    - find_following: user_id 가 팔로우하는 관계 목록 (user_following == user_id)
    """

    def find_followers(self, user_id: str) -> list[Follow]:  # pragma: no cover - Protocol
        ...

    def find_following(self, user_id: str) -> list[Follow]:  # pragma: no cover - Protocol
        ...

    def create(
        self, follower_id: str, followed_id: str
    ) -> Follow:  # pragma: no cover - Protocol
        ...

    def delete(
        self, follower_id: str, followed_id: str
    ) -> bool:  # pragma: no cover - Protocol
        ...
